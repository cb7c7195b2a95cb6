"""
Model descriptions for the generation backend.

Components:
- DecoderConfig: Cache geometry, stop token and model file settings
"""

from onnx_gen_lite.models.config import DecoderConfig

__all__ = ["DecoderConfig"]
