"""
Model registry holding the compiled decoder.

The registry decodes serialized ONNX bytes, compiles them into an
onnxruntime session and keeps exactly one runnable model. Readers borrow
the model through ``with_model`` while the registry lock is held, so a
concurrent ``load`` can never swap the model out from under a running
generation.
"""

import logging
import threading
from typing import Callable, List, Optional, Protocol, Sequence, TypeVar

import onnx
import onnxruntime as ort
import torch

from onnx_gen_lite.core.errors import (
    InferenceRuntimeError,
    ModelLoadError,
    ModelNotLoaded,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RunnableModel(Protocol):
    """Anything that maps positional input tensors to output tensors."""

    def run(self, inputs: Sequence[torch.Tensor]) -> List[torch.Tensor]:
        ...


class CompiledModel:
    """Runnable wrapper around an onnxruntime InferenceSession.

    Inputs are bound positionally to the graph inputs in declaration order.
    The session is never mutated by ``run``.
    """

    def __init__(self, session: ort.InferenceSession) -> None:
        self.session = session
        self.input_names = [node.name for node in session.get_inputs()]
        self.output_names = [node.name for node in session.get_outputs()]

    def run(self, inputs: Sequence[torch.Tensor]) -> List[torch.Tensor]:
        """Run the graph once.

        Args:
            inputs: One tensor per graph input, in declaration order.

        Returns:
            Graph outputs as CPU tensors, in declaration order.

        Raises:
            InferenceRuntimeError: If the input count is wrong or the runtime fails.
        """
        if len(inputs) != len(self.input_names):
            raise InferenceRuntimeError(
                f"Model expects {len(self.input_names)} inputs "
                f"({', '.join(self.input_names)}), got {len(inputs)}"
            )

        feed = {
            name: tensor.detach().cpu().numpy()
            for name, tensor in zip(self.input_names, inputs)
        }

        try:
            outputs = self.session.run(None, feed)
        except Exception as e:
            raise InferenceRuntimeError(f"Model invocation failed: {e}") from e

        return [torch.from_numpy(output) for output in outputs]

    def __repr__(self) -> str:
        return (
            f"CompiledModel(inputs={self.input_names}, outputs={self.output_names})"
        )


def compile_onnx_model(model_bytes: bytes) -> CompiledModel:
    """Decode, validate and compile serialized ONNX bytes.

    Args:
        model_bytes: Serialized ``ModelProto``.

    Returns:
        CompiledModel ready for inference on the CPU execution provider.

    Raises:
        ModelLoadError: If the bytes are not a valid ONNX model or compilation fails.
    """
    try:
        proto = onnx.load_model_from_string(model_bytes)
    except Exception as e:
        raise ModelLoadError(f"Failed to decode model proto: {e}") from e

    try:
        onnx.checker.check_model(proto)
    except Exception as e:
        raise ModelLoadError(f"Invalid model graph: {e}") from e

    options = ort.SessionOptions()
    options.graph_optimization_level = ort.GraphOptimizationLevel.ORT_ENABLE_ALL

    try:
        session = ort.InferenceSession(
            proto.SerializeToString(),
            sess_options=options,
            providers=["CPUExecutionProvider"],
        )
    except Exception as e:
        raise ModelLoadError(f"Failed to compile model: {e}") from e

    return CompiledModel(session)


class ModelRegistry:
    """Owner of the single runnable model.

    Attributes:
        compiler: Callable turning serialized bytes into a RunnableModel.
    """

    def __init__(
        self,
        compiler: Callable[[bytes], RunnableModel] = compile_onnx_model,
    ) -> None:
        self.compiler = compiler
        self._model: Optional[RunnableModel] = None
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        """Whether a model is currently available."""
        with self._lock:
            return self._model is not None

    def load(self, model_bytes: bytes) -> None:
        """Compile ``model_bytes`` and replace the stored model.

        The stored model is only replaced once compilation has fully
        succeeded; a failed load keeps the previous model.

        Raises:
            ModelLoadError: If decoding or compilation fails.
        """
        had_model = self.is_loaded
        try:
            model = self.compiler(model_bytes)
        except ModelLoadError as e:
            self._log_failed_load(e, had_model)
            raise
        except Exception as e:
            self._log_failed_load(e, had_model)
            raise ModelLoadError(f"Failed to compile model: {e}") from e

        with self._lock:
            self._model = model

        logger.info("Loaded model (%d bytes): %r", len(model_bytes), model)

    def unload(self) -> None:
        """Drop the stored model."""
        with self._lock:
            self._model = None

    def with_model(self, fn: Callable[[RunnableModel], T]) -> T:
        """Call ``fn`` with the stored model while holding the registry lock.

        ``fn`` must not keep a reference to the model after it returns.

        Raises:
            ModelNotLoaded: If no model has been loaded. ``fn`` is not called.
        """
        with self._lock:
            if self._model is None:
                raise ModelNotLoaded()
            return fn(self._model)

    def _log_failed_load(self, error: Exception, had_model: bool) -> None:
        if had_model:
            logger.warning("Model load failed, keeping previous model: %s", error)
        else:
            logger.warning("Model load failed: %s", error)
