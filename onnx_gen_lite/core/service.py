"""
Callable operations exposed to the host transport layer.

Every operation returns a ServiceResult instead of raising: failures are
reported as a human-readable error string.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from onnx_gen_lite.core.errors import GenerationError
from onnx_gen_lite.core.inference_engine import GenerationEngine
from onnx_gen_lite.core.model_registry import ModelRegistry
from onnx_gen_lite.models.config import DecoderConfig
from onnx_gen_lite.storage.byte_store import ByteStore

logger = logging.getLogger(__name__)


@dataclass
class ServiceResult:
    """Outcome of a service operation.

    Attributes:
        ok: Whether the operation succeeded
        value: Return value on success
        error: Error message on failure
    """

    ok: bool
    value: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Any = None) -> "ServiceResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "ServiceResult":
        return cls(ok=False, error=error)


class InferenceService:
    """Model setup, upload and inference operations over one registry."""

    def __init__(
        self,
        config: Optional[DecoderConfig] = None,
        store: Optional[ByteStore] = None,
        registry: Optional[ModelRegistry] = None,
    ) -> None:
        """Initialize inference service.

        Args:
            config: Decoder configuration (defaults to DecoderConfig())
            store: Byte store holding the model file (defaults to config.storage_dir)
            registry: Model registry (a fresh one by default)
        """
        self.config = config or DecoderConfig()
        self.store = store or ByteStore(self.config.storage_dir)
        self.registry = registry or ModelRegistry()
        self.engine = GenerationEngine(self.registry, self.config)

    def setup_model(self) -> ServiceResult:
        """Load the configured model file from the byte store."""
        try:
            model_bytes = self.store.read(self.config.model_file)
            self.registry.load(model_bytes)
        except (GenerationError, OSError, ValueError) as e:
            logger.error("Failed to setup model: %s", e)
            return ServiceResult.failure(f"Failed to setup model: {e}")
        return ServiceResult.success()

    def model_inference(
        self, max_tokens: int, token_ids: Sequence[int]
    ) -> ServiceResult:
        """Generate tokens after ``token_ids``; value is the list of new ids."""
        try:
            output_ids: List[int] = self.engine.generate(max_tokens, token_ids)
        except (GenerationError, ValueError, TypeError) as e:
            logger.error("Inference failed: %s", e)
            return ServiceResult.failure(str(e))
        return ServiceResult.success(output_ids)

    def append_model_bytes(self, chunk: bytes) -> ServiceResult:
        """Append an uploaded chunk to the model file."""
        try:
            self.store.append(self.config.model_file, chunk)
        except (OSError, ValueError) as e:
            return ServiceResult.failure(f"Failed to store model bytes: {e}")
        return ServiceResult.success(self.store.length(self.config.model_file))

    def clear_model_bytes(self) -> ServiceResult:
        """Remove the stored model file. The loaded model is unaffected."""
        try:
            self.store.clear(self.config.model_file)
        except (OSError, ValueError) as e:
            return ServiceResult.failure(f"Failed to clear model bytes: {e}")
        return ServiceResult.success()

    def model_bytes_length(self) -> int:
        """Number of bytes stored for the model file."""
        return self.store.length(self.config.model_file)


_default_service: Optional[InferenceService] = None
_default_service_lock = threading.Lock()


def get_default_service() -> InferenceService:
    """Process-wide service used by the module-level operations."""
    global _default_service
    with _default_service_lock:
        if _default_service is None:
            _default_service = InferenceService()
        return _default_service


def setup_model() -> ServiceResult:
    return get_default_service().setup_model()


def model_inference(max_tokens: int, token_ids: Sequence[int]) -> ServiceResult:
    return get_default_service().model_inference(max_tokens, token_ids)
