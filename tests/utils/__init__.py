"""Test utilities for onnx_gen_lite."""

from tests.utils.comparison import assert_tensors_equal, assert_tokens_equal
from tests.utils.scripted_model import ScriptedModel, registry_with
from tests.utils.onnx_models import (
    build_decoder_model,
    build_decoder_model_bytes,
    build_invalid_graph_bytes,
)

__all__ = [
    # Comparison utilities
    "assert_tensors_equal",
    "assert_tokens_equal",
    # ONNX graph builders
    "build_decoder_model",
    "build_decoder_model_bytes",
    "build_invalid_graph_bytes",
    # Scripted models
    "ScriptedModel",
    "registry_with",
]
