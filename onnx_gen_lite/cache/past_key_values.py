"""
Past key/values cache tensors.

The decoder receives its attention history as a single float32 tensor of
shape [num_layers, batch_size, num_heads, seq_length, head_dim]. Generation
starts from an all-zero tensor with a zero-length sequence axis; the model
returns the extended cache after every step and that tensor is fed back
unchanged on the next one.
"""

import torch

from onnx_gen_lite.models.config import DecoderConfig
from onnx_gen_lite.utils.tensors import create_tensor


def create_empty_past_key_values(
    num_layers: int,
    batch_size: int,
    num_heads: int,
    seq_length: int,
    head_dim: int,
) -> torch.Tensor:
    """Create an all-zero cache tensor.

    Args:
        num_layers: Number of transformer layers.
        batch_size: Batch dimension.
        num_heads: Number of attention heads.
        seq_length: Length of the cached history (0 for a fresh sequence).
        head_dim: Dimension of each attention head.

    Returns:
        float32 tensor of shape [num_layers, batch_size, num_heads, seq_length, head_dim].
    """
    shape = (num_layers, batch_size, num_heads, seq_length, head_dim)
    numel = num_layers * batch_size * num_heads * seq_length * head_dim
    return create_tensor([0.0] * numel, shape, torch.float32)


def create_empty_past_key_values_from_config(config: DecoderConfig) -> torch.Tensor:
    """Create the initial (zero-length) cache for ``config``."""
    return create_empty_past_key_values(*config.cache_shape)
