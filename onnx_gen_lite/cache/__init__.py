"""
Recurrent attention cache handling.

Provides:
- create_empty_past_key_values: Zero-initialized cache tensor
- create_empty_past_key_values_from_config: Initial cache for a DecoderConfig
"""

from onnx_gen_lite.cache.past_key_values import (
    create_empty_past_key_values,
    create_empty_past_key_values_from_config,
)

__all__ = [
    "create_empty_past_key_values",
    "create_empty_past_key_values_from_config",
]
