"""Deterministic random streams keyed by context."""

from __future__ import annotations

import hashlib
import random
from typing import Any


class RNGManager:
    """Hands out reproducible ``random.Random`` instances per context.

    The same seed and context always yield the same stream, independent of
    the order in which contexts are requested.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = int(seed) if seed is not None else random.SystemRandom().randrange(2**32)
        self._contexts: dict[str, random.Random] = {}

    def _derive_seed(self, context: str) -> int:
        digest = hashlib.sha256(f"{self.seed}:{context}".encode("utf-8")).digest()
        return int.from_bytes(digest[:8], "big")

    def get_rng(self, context: str) -> random.Random:
        rng = self._contexts.get(context)
        if rng is None:
            rng = random.Random(self._derive_seed(context))
            self._contexts[context] = rng
        return rng

    def get_rng_for_initialization(self, gene_id: Any) -> random.Random:
        # Fresh stream per gene so initialization order does not matter
        return random.Random(self._derive_seed(f"initialization:{gene_id}"))

    def get_state(self) -> dict[str, Any]:
        return {
            "seed": self.seed,
            "contexts": {name: rng.getstate() for name, rng in self._contexts.items()},
        }

    def set_state(self, state: dict[str, Any]) -> None:
        self.seed = int(state["seed"])
        self._contexts = {}
        for name, rng_state in state.get("contexts", {}).items():
            rng = random.Random()
            rng.setstate(rng_state)
            self._contexts[name] = rng


__all__ = ["RNGManager"]
