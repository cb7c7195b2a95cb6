"""
Per-call state of the autoregressive decode loop.
"""

import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

import torch


class GenerationPhase(Enum):
    """Phase of a generation call."""

    INIT = "init"  # Inputs prepared, model not yet invoked
    STEP = "step"  # Model is being invoked
    STOP_TOKEN = "stop_token"  # Model produced the end-of-sequence token
    BUDGET_EXHAUSTED = "budget_exhausted"  # Ran max_tokens steps
    ERROR = "error"  # A step failed; output is discarded


@dataclass
class GenerationState:
    """State carried across decode steps of one generation call.

    Attributes:
        input_ids: Token ids fed on the next step (the seed, then one new token)
        attention_mask: One entry per token consumed so far, all ones
        past_key_values: Cache tensor fed on the next step
        output_ids: Generated token ids (without the seed)
        phase: Current phase of the decode loop
        steps: Number of model invocations performed
    """

    input_ids: List[int]
    attention_mask: List[int]
    past_key_values: torch.Tensor
    output_ids: List[int] = field(default_factory=list)
    phase: GenerationPhase = GenerationPhase.INIT
    steps: int = 0

    @classmethod
    def initial(
        cls, seed_tokens: Sequence[int], past_key_values: torch.Tensor
    ) -> "GenerationState":
        """Create the INIT state for ``seed_tokens``.

        Raises:
            TypeError: If a seed token is not an integer.
        """
        input_ids = [operator.index(token) for token in seed_tokens]
        return cls(
            input_ids=input_ids,
            attention_mask=[1] * len(input_ids),
            past_key_values=past_key_values,
        )

    def accept(self, next_token: int) -> None:
        """Record a generated (non-stop) token and feed it on the next step."""
        self.output_ids.append(next_token)
        self.input_ids = [next_token]
        self.attention_mask.append(1)

    def is_finished(self) -> bool:
        """Check if the loop has terminated."""
        return self.phase in (
            GenerationPhase.STOP_TOKEN,
            GenerationPhase.BUDGET_EXHAUSTED,
            GenerationPhase.ERROR,
        )

    def get_current_length(self) -> int:
        """Total tokens consumed so far (seed + generated)."""
        return len(self.attention_mask)
