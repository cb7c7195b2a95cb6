"""
Decoder model configuration.

This module defines the DecoderConfig class which stores the architecture
constants of the serialized decoder (cache geometry, end-of-sequence token)
together with the runtime settings needed to locate and drive it.
"""

import os
from typing import Any, Dict

from transformers import AutoConfig


class DecoderConfig:
    """Configuration class for an exported ONNX decoder.

    The cache geometry must match the shape of the past key/values input
    the exported graph expects. The defaults describe a 24-layer, 12-head
    decoder with the GPT-2 end-of-sequence token.

    Attributes:
        num_layers: Number of transformer layers in the cache tensor.
        batch_size: Batch dimension of every input tensor.
        num_heads: Number of attention heads in the cache tensor.
        head_dim: Dimension of each attention head.
        eos_token_id: Token id that terminates generation.
        model_file: Name of the serialized model in the byte store.
        storage_dir: Directory backing the byte store.
        max_tokens_limit: Upper bound accepted for a generation budget.
    """

    def __init__(
        self,
        num_layers: int = 24,
        batch_size: int = 1,
        num_heads: int = 12,
        head_dim: int = 64,
        eos_token_id: int = 50256,
        model_file: str = "qwen2_5_1_5B_instruct.onnx",
        storage_dir: str = ".",
        max_tokens_limit: int = 255,
        **kwargs: Any,
    ) -> None:
        """Initialize DecoderConfig.

        Args:
            num_layers: Number of transformer layers in the cache tensor.
            batch_size: Batch dimension of every input tensor.
            num_heads: Number of attention heads in the cache tensor.
            head_dim: Dimension of each attention head.
            eos_token_id: Token id that terminates generation.
            model_file: Name of the serialized model in the byte store.
            storage_dir: Directory backing the byte store.
            max_tokens_limit: Upper bound accepted for a generation budget.
            **kwargs: Additional configuration parameters (ignored).
        """
        self.num_layers = num_layers
        self.batch_size = batch_size
        self.num_heads = num_heads
        self.head_dim = head_dim
        self.eos_token_id = eos_token_id
        self.model_file = model_file
        self.storage_dir = storage_dir
        self.max_tokens_limit = max_tokens_limit

        self._validate()

    def _validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If configuration parameters are invalid.
        """
        for name in ("num_layers", "batch_size", "num_heads", "head_dim"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

        # Inputs are built as [1, seq_len]
        if self.batch_size != 1:
            raise ValueError(f"batch_size must be 1, got {self.batch_size}")

        if self.eos_token_id < 0:
            raise ValueError(
                f"eos_token_id must be non-negative, got {self.eos_token_id}"
            )
        if not self.model_file:
            raise ValueError("model_file cannot be empty")
        if os.path.basename(self.model_file) != self.model_file:
            raise ValueError(
                f"model_file must be a plain file name, got {self.model_file!r}"
            )
        if not 0 <= self.max_tokens_limit <= 255:
            raise ValueError(
                f"max_tokens_limit must be in [0, 255], got {self.max_tokens_limit}"
            )

    @property
    def cache_shape(self) -> tuple:
        """Shape of an empty past key/values tensor (zero-length history)."""
        return (self.num_layers, self.batch_size, self.num_heads, 0, self.head_dim)

    @classmethod
    def from_pretrained(
        cls, model_name_or_path: str, **overrides: Any
    ) -> "DecoderConfig":
        """Load cache geometry from a HuggingFace pretrained config.

        Both GPT-2 style (``n_layer``/``n_head``/``n_embd``) and Llama style
        (``num_hidden_layers``/``num_attention_heads``/``hidden_size``)
        attribute names are understood. The cache head count is taken from
        ``num_key_value_heads`` when the config defines it.

        Args:
            model_name_or_path: Model identifier or path to model directory.
            **overrides: Runtime settings (model_file, storage_dir, ...).

        Returns:
            DecoderConfig instance with parameters loaded from the pretrained model.
        """
        hf_config = AutoConfig.from_pretrained(model_name_or_path)

        num_layers = _first_attr(hf_config, "num_hidden_layers", "n_layer")
        query_heads = _first_attr(hf_config, "num_attention_heads", "n_head")
        # The cache holds key/value heads, fewer than query heads under GQA
        num_heads = _first_attr(
            hf_config, "num_key_value_heads", "num_attention_heads", "n_head"
        )
        hidden_size = _first_attr(hf_config, "hidden_size", "n_embd")
        head_dim = getattr(hf_config, "head_dim", None) or hidden_size // query_heads

        eos_token_id = hf_config.eos_token_id
        if isinstance(eos_token_id, (list, tuple)):
            eos_token_id = eos_token_id[0]
        if eos_token_id is None:
            eos_token_id = 50256

        params = dict(
            num_layers=num_layers,
            num_heads=num_heads,
            head_dim=head_dim,
            eos_token_id=eos_token_id,
        )
        params.update(overrides)
        return cls(**params)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "num_layers": self.num_layers,
            "batch_size": self.batch_size,
            "num_heads": self.num_heads,
            "head_dim": self.head_dim,
            "eos_token_id": self.eos_token_id,
            "model_file": self.model_file,
            "storage_dir": self.storage_dir,
            "max_tokens_limit": self.max_tokens_limit,
        }

    def __repr__(self) -> str:
        return (
            f"DecoderConfig("
            f"num_layers={self.num_layers}, "
            f"batch_size={self.batch_size}, "
            f"num_heads={self.num_heads}, "
            f"head_dim={self.head_dim}, "
            f"eos_token_id={self.eos_token_id}, "
            f"model_file='{self.model_file}', "
            f"storage_dir='{self.storage_dir}', "
            f"max_tokens_limit={self.max_tokens_limit}"
            f")"
        )


def _first_attr(obj: Any, *names: str) -> Any:
    for name in names:
        value = getattr(obj, name, None)
        if value is not None:
            return value
    raise ValueError(f"config has none of the attributes {names}")
