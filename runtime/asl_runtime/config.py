"""
ASL Runtime Configuration

Settings that select the integer model and the parser's strictness.

Environment variables (read by InterpreterConfig.from_env):
    ASL_INT_BITS   32 | 64          (default 32)
    ASL_OVERFLOW   wrap | error     (default wrap)
    ASL_STRICT     1/true/yes/on    (default off)
"""

from dataclasses import dataclass
from typing import Mapping, Optional
import os


SUPPORTED_BITS = (32, 64)
OVERFLOW_POLICIES = ('wrap', 'error')

_TRUTHY = {'1', 'true', 'yes', 'on'}
_FALSY = {'0', 'false', 'no', 'off', ''}


@dataclass(frozen=True)
class InterpreterConfig:
    """
    Interpreter settings.

    Attributes:
        bits: Width of the signed integer type values live in.
        overflow: 'wrap' for two's-complement wrap-around, 'error' to fail
            the statement when a result leaves the representable range.
        strict: Reject tokens left over after a complete right-hand side.
    """
    bits: int = 32
    overflow: str = 'wrap'
    strict: bool = False

    def __post_init__(self):
        if self.bits not in SUPPORTED_BITS:
            raise ValueError(f"Unsupported integer width: {self.bits} (expected one of {SUPPORTED_BITS})")
        if self.overflow not in OVERFLOW_POLICIES:
            raise ValueError(f"Unknown overflow policy: {self.overflow!r} (expected one of {OVERFLOW_POLICIES})")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "InterpreterConfig":
        """Build a config from ASL_* environment variables."""
        env = os.environ if environ is None else environ

        bits_text = env.get('ASL_INT_BITS', '32').strip()
        try:
            bits = int(bits_text)
        except ValueError:
            raise ValueError(f"ASL_INT_BITS must be an integer, got {bits_text!r}")

        overflow = env.get('ASL_OVERFLOW', 'wrap').strip().lower()
        strict = _parse_flag('ASL_STRICT', env.get('ASL_STRICT', ''))

        return cls(bits=bits, overflow=overflow, strict=strict)


def _parse_flag(name: str, text: str) -> bool:
    value = text.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {text!r}")


__all__ = [
    'InterpreterConfig',
    'SUPPORTED_BITS',
    'OVERFLOW_POLICIES',
]
