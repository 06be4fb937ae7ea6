from dataclasses import dataclass
from enum import Enum

import numpy as np


class StepMode(str, Enum):
    FORWARD = "forward"  # start of each cell
    REVERSE = "reverse"  # end of each cell
    INCLUSIVE = "inclusive"  # spread over [start, end]


@dataclass(frozen=True)
class ChannelSpec:
    """How one axis of the color grid is sampled."""

    start: float = 0.0
    end: float = 1.0
    steps: int = 8
    step_mode: StepMode = StepMode.FORWARD

    def __post_init__(self):
        if self.steps < 1:
            raise ValueError(f"Channel steps must be a positive integer, got {self.steps}")

    @property
    def effective_mode(self) -> StepMode:
        # a single inclusive sample has no spacing to divide by
        if self.step_mode is StepMode.INCLUSIVE and self.steps == 1:
            return StepMode.FORWARD
        return self.step_mode

    @property
    def step_size(self) -> float:
        if self.effective_mode is StepMode.INCLUSIVE:
            return (self.end - self.start) / (self.steps - 1)
        return (self.end - self.start) / self.steps


def generate(spec: ChannelSpec, inclusive_of_bound: bool = False) -> tuple[float, ...]:
    """
    Sample one channel.

    Args:
        spec: The channel to sample.
        inclusive_of_bound: Add one extra sample past the last cell, so edges and
            faces can reach the closing boundary. The step size is unchanged.

    Returns:
        tuple[float, ...]: ``spec.steps`` samples, or ``spec.steps + 1`` with the bound.
    """
    count = spec.steps + 1 if inclusive_of_bound else spec.steps
    first = 1 if spec.effective_mode is StepMode.REVERSE else 0
    indices = np.arange(first, first + count, dtype=np.float64)
    return tuple((spec.start + indices * spec.step_size).tolist())


def wrap_index(index: int, offset: int, length: int) -> int:
    """Neighbor of ``index`` along an axis of ``length`` samples, wrapping past the end to the start."""
    if length <= 0:
        raise ValueError(f"Cannot wrap an index on an axis of length {length}")
    return (index + offset) % length
