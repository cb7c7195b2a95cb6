"""
Pytest configuration and shared fixtures for onnx-gen-lite tests.

This module provides reusable fixtures for testing, including:
- A small DecoderConfig matching the test graphs
- Serialized ONNX decoder graphs for integration tests
- Byte stores rooted in temporary directories
- Services wired to the above
"""

import os

import pytest

from onnx_gen_lite.core.service import InferenceService
from onnx_gen_lite.models.config import DecoderConfig
from onnx_gen_lite.storage.byte_store import ByteStore
from tests.utils.onnx_models import build_decoder_model_bytes


# Force CPU-only testing by disabling CUDA
os.environ["CUDA_VISIBLE_DEVICES"] = ""


@pytest.fixture
def decoder_config() -> DecoderConfig:
    """
    Small decoder configuration (2 layers, 2 heads, head_dim 4).

    Matches the graphs produced by tests.utils.onnx_models with their
    default arguments, and keeps the GPT-2 end-of-sequence id.
    """
    return DecoderConfig(num_layers=2, num_heads=2, head_dim=4)


@pytest.fixture
def decoder_model_bytes() -> bytes:
    """Serialized max-token ONNX decoder matching decoder_config."""
    return build_decoder_model_bytes(num_layers=2, num_heads=2, head_dim=4)


@pytest.fixture
def byte_store(tmp_path) -> ByteStore:
    """Byte store rooted at a per-test temporary directory."""
    return ByteStore(str(tmp_path / "store"))


@pytest.fixture
def service(decoder_config: DecoderConfig, byte_store: ByteStore) -> InferenceService:
    """Inference service over the temporary byte store and a fresh registry."""
    return InferenceService(config=decoder_config, store=byte_store)
