"""
Tensor construction helpers for model inputs.

Every tensor fed to the decoder is built from a flat Python buffer and a
declared shape. The element count is checked against the shape before the
tensor is materialized so a mismatch surfaces as TensorShapeError instead
of a torch RuntimeError from deep inside reshape.
"""

import math
from typing import Sequence

import torch

from onnx_gen_lite.core.errors import TensorShapeError


def create_tensor(
    data: Sequence, shape: Sequence[int], dtype: torch.dtype
) -> torch.Tensor:
    """Build a tensor of ``shape`` and ``dtype`` from a flat buffer.

    Args:
        data: Flat sequence of element values in row-major order.
        shape: Declared tensor shape.
        dtype: Element type of the resulting tensor.

    Returns:
        Tensor with the declared shape and dtype.

    Raises:
        TensorShapeError: If ``len(data)`` does not equal the product of ``shape``,
            or if a dimension is negative, or the values do not fit ``dtype``.
    """
    shape = tuple(int(dim) for dim in shape)
    if any(dim < 0 for dim in shape):
        raise TensorShapeError(f"Negative dimension in shape {shape}")

    expected = math.prod(shape)
    if len(data) != expected:
        raise TensorShapeError(
            f"Failed to create tensor from shape and values: "
            f"shape {shape} needs {expected} elements, got {len(data)}"
        )

    try:
        flat = torch.tensor(list(data), dtype=dtype)
    except (OverflowError, RuntimeError, TypeError) as e:
        raise TensorShapeError(
            f"Failed to create {dtype} tensor from values: {e}"
        ) from e

    return flat.reshape(shape)


def create_tensor_i64(data: Sequence[int]) -> torch.Tensor:
    """Create a [1, len(data)] int64 tensor (token ids)."""
    return create_tensor(data, (1, len(data)), torch.int64)


def create_tensor_i8(data: Sequence[int]) -> torch.Tensor:
    """Create a [1, len(data)] int8 tensor (attention mask)."""
    return create_tensor(data, (1, len(data)), torch.int8)
