"""Error taxonomy for codon decoding and precision analysis.

Every error carries a short machine-readable ``code`` plus keyword context so
callers (and tests) can branch on the failure without parsing messages.
"""

from __future__ import annotations

from typing import Any


class CodecError(Exception):
    """Base error with a stable code and structured context."""

    def __init__(self, code: str, message: str, **context: Any) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context: dict[str, Any] = dict(context)

    def __str__(self) -> str:
        if not self.context:
            return f"[{self.code}] {self.message}"
        details = ", ".join(f"{k}={v!r}" for k, v in sorted(self.context.items()))
        return f"[{self.code}] {self.message} ({details})"


class ConfigurationError(CodecError):
    """Unknown strategy name, out-of-range bit width or invalid setting."""


class ShapeError(CodecError):
    """Gene bit vector inconsistent with ``codons * precision``."""


class InfeasibleThresholdError(CodecError):
    """No codon width up to 64 bits meets the requested bias threshold."""


__all__ = [
    "CodecError",
    "ConfigurationError",
    "ShapeError",
    "InfeasibleThresholdError",
]
