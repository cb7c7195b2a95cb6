"""
Autoregressive generation over a compiled decoder.
"""

import logging
from typing import List, Optional, Sequence, Tuple

import torch

from onnx_gen_lite.cache.past_key_values import (
    create_empty_past_key_values_from_config,
)
from onnx_gen_lite.core.errors import GenerationError, InferenceRuntimeError
from onnx_gen_lite.core.generation_state import GenerationPhase, GenerationState
from onnx_gen_lite.core.model_registry import ModelRegistry, RunnableModel
from onnx_gen_lite.models.config import DecoderConfig
from onnx_gen_lite.utils.tensors import create_tensor_i8, create_tensor_i64

logger = logging.getLogger(__name__)


class GenerationEngine:
    """Bounded greedy decode loop driven by the model in a ModelRegistry.

    Every step feeds (input_ids, attention_mask, past_key_values) to the
    model and expects (next_token, present_key_values, ...) back. The first
    step feeds the whole seed; later steps feed only the newly generated
    token and rely on the cache for history.
    """

    def __init__(
        self,
        registry: ModelRegistry,
        config: Optional[DecoderConfig] = None,
    ) -> None:
        """Initialize generation engine.

        Args:
            registry: Registry holding the model to drive
            config: Cache geometry and stop token (defaults to DecoderConfig())
        """
        self.registry = registry
        self.config = config or DecoderConfig()

    def generate(self, max_tokens: int, seed_tokens: Sequence[int]) -> List[int]:
        """Generate up to ``max_tokens`` tokens following ``seed_tokens``.

        Args:
            max_tokens: Maximum number of decode steps (0..max_tokens_limit)
            seed_tokens: Starting token ids, may be empty

        Returns:
            Generated token ids, excluding the seed and the stop token

        Raises:
            ValueError: If max_tokens is outside the accepted range
            TypeError: If max_tokens or a seed token is not an integer
            ModelNotLoaded: If no model has been set up
            InferenceRuntimeError: If a model invocation fails
            TensorShapeError: If an input tensor cannot be built
        """
        return self.run(max_tokens, seed_tokens).output_ids

    def run(self, max_tokens: int, seed_tokens: Sequence[int]) -> GenerationState:
        """Run the decode loop and return its final state."""
        self._check_budget(max_tokens)
        seed_tokens = list(seed_tokens)
        return self.registry.with_model(
            lambda model: self._decode(model, max_tokens, seed_tokens)
        )

    def _check_budget(self, max_tokens: int) -> None:
        if isinstance(max_tokens, bool) or not isinstance(max_tokens, int):
            raise TypeError(
                f"max_tokens must be an int, got {type(max_tokens).__name__}"
            )
        if not 0 <= max_tokens <= self.config.max_tokens_limit:
            raise ValueError(
                f"max_tokens must be in [0, {self.config.max_tokens_limit}], "
                f"got {max_tokens}"
            )

    def _decode(
        self, model: RunnableModel, max_tokens: int, seed_tokens: List[int]
    ) -> GenerationState:
        state = GenerationState.initial(
            seed_tokens, create_empty_past_key_values_from_config(self.config)
        )

        try:
            for _ in range(max_tokens):
                state.phase = GenerationPhase.STEP
                next_token, state.past_key_values = self._step(model, state)
                state.steps += 1

                logger.info("Next token: %d", next_token)
                if next_token == self.config.eos_token_id:
                    state.phase = GenerationPhase.STOP_TOKEN
                    break

                state.accept(next_token)
            else:
                state.phase = GenerationPhase.BUDGET_EXHAUSTED
        except GenerationError:
            state.phase = GenerationPhase.ERROR
            logger.warning(
                "Generation failed at step %d, discarding %d tokens",
                state.steps + 1,
                len(state.output_ids),
            )
            raise

        return state

    def _step(
        self, model: RunnableModel, state: GenerationState
    ) -> Tuple[int, torch.Tensor]:
        """Invoke the model once and return (next_token, new cache)."""
        inputs = [
            create_tensor_i64(state.input_ids),
            create_tensor_i8(state.attention_mask),
            state.past_key_values,
        ]

        try:
            outputs = model.run(inputs)
        except GenerationError:
            raise
        except Exception as e:
            raise InferenceRuntimeError(f"Model invocation failed: {e}") from e

        if len(outputs) < 2:
            raise InferenceRuntimeError(
                f"Model returned {len(outputs)} outputs, expected at least 2"
            )

        next_token_tensor = outputs[0]
        if (
            next_token_tensor.dim() != 2
            or next_token_tensor.dtype != torch.int64
            or next_token_tensor.numel() == 0
        ):
            raise InferenceRuntimeError(
                f"Expected a non-empty rank-2 int64 token tensor, got "
                f"{next_token_tensor.dtype} of shape {tuple(next_token_tensor.shape)}"
            )

        return int(next_token_tensor[0, 0].item()), outputs[1]
