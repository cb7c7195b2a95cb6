"""
Core generation backend.

Provides the main API and orchestrates all components:
- ModelRegistry: Holds the single compiled model
- GenerationEngine: Autoregressive decode loop
- GenerationState: Per-call loop state and phase
- InferenceService: setup_model / model_inference operations
- Errors: ModelNotLoaded, ModelLoadError, InferenceRuntimeError, TensorShapeError
"""

__all__ = []
