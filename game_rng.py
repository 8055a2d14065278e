from __future__ import annotations

"""Seedable random source shared by every generation phase.

The generator threads a single :class:`GameRNG` through partitioning, room
placement, cellular noise and corridor shape choices.  An unseeded instance
still records the seed it drew in ``initial_seed`` so any dungeon can be
replayed later.
"""

import json
import random
from typing import Any, Dict, List, Optional, Sequence, Tuple, TypeVar, Union

import numpy as np

T = TypeVar("T")


class GameRNG:
    def __init__(self, seed: Optional[int] = None) -> None:
        self.initial_seed = seed if seed is not None else random.randint(0, 2**32 - 1)
        self.rng = np.random.default_rng(self.initial_seed)

    # ------------------------------------------------------------------
    # basic random helpers
    # ------------------------------------------------------------------
    def get_int(self, a: int, b: int) -> int:
        """Uniform integer in ``[a, b]`` (both ends inclusive)."""
        if a > b:
            raise ValueError("a <= b")
        return int(self.rng.integers(a, b + 1))

    def get_int_array(
        self, a: int, b: int, shape: Union[int, Tuple[int, ...]]
    ) -> np.ndarray:
        """Array of uniform integers in ``[a, b]`` with the given shape."""
        if a > b:
            raise ValueError("a <= b")
        return self.rng.integers(a, b + 1, size=shape)

    def get_float(self, a: float = 0.0, b: float = 1.0) -> float:
        if a > b:
            raise ValueError("a <= b")
        val = float(self.rng.random())
        return a + (b - a) * val

    # ------------------------------------------------------------------
    # sequence utilities
    # ------------------------------------------------------------------
    def choice(self, seq: Sequence[T]) -> T:
        """Return a random element from *seq*."""
        if not seq:
            raise ValueError("cannot choose from an empty sequence")
        return seq[self.get_int(0, len(seq) - 1)]

    def shuffle(self, seq: List[Any]) -> None:
        self.rng.shuffle(seq)

    def coin_flip(self, heads_probability: float = 0.5) -> str:
        if not 0.0 <= heads_probability <= 1.0:
            raise ValueError("probability out of range")
        return "heads" if self.get_float() < heads_probability else "tails"

    # ------------------------------------------------------------------
    # state management
    # ------------------------------------------------------------------
    def get_state(self) -> Dict[str, Any]:
        return {
            "random_state": self.rng.bit_generator.state,
            "initial_seed": self.initial_seed,
        }

    def set_state(self, state: Dict[str, Any]) -> None:
        if "random_state" in state:
            self.rng.bit_generator.state = state["random_state"]
        if "initial_seed" in state:
            self.initial_seed = state["initial_seed"]

    def save_state_to_file(self, filename: str) -> None:
        with open(filename, "w", encoding="utf-8") as f:
            json.dump(self.get_state(), f, indent=2)

    def load_state_from_file(self, filename: str) -> None:
        with open(filename, "r", encoding="utf-8") as f:
            state = json.load(f)
        self.set_state(state)

    def reset(self, seed: Optional[int] = None) -> None:
        self.initial_seed = seed if seed is not None else random.randint(0, 2**32 - 1)
        self.rng = np.random.default_rng(self.initial_seed)


__all__ = ["GameRNG"]
