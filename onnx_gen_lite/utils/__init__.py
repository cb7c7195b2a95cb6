"""
Utilities and helper functions.

Provides:
- Tensor construction with shape validation
"""

from onnx_gen_lite.utils.tensors import (
    create_tensor,
    create_tensor_i8,
    create_tensor_i64,
)

__all__ = ["create_tensor", "create_tensor_i8", "create_tensor_i64"]
