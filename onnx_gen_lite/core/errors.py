"""
Exception types raised by the generation backend.
"""


class GenerationError(Exception):
    """Base class for all backend failures."""


class ModelNotLoaded(GenerationError, RuntimeError):
    """Raised when inference is requested before a model has been set up."""

    def __init__(self, message: str = "Model is not loaded. Call setup_model first"):
        super().__init__(message)


class ModelLoadError(GenerationError, ValueError):
    """Raised when serialized model bytes cannot be decoded or compiled."""


class InferenceRuntimeError(GenerationError, RuntimeError):
    """Raised when a single model invocation fails."""


class TensorShapeError(GenerationError, ValueError):
    """Raised when a flat buffer does not fill the declared tensor shape."""
