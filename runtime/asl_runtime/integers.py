"""
Fixed-width integer model for ASL values.

Values are signed two's-complement integers of a configurable width
(32 bits unless configured otherwise). numpy supplies the range limits and
the reinterpretation of the low bits of a result as a signed value.

Examples:
    >>> model = IntegerModel(32)
    >>> model.add(2147483647, 1)
    -2147483648
    >>> model.negate(-2147483648)
    -2147483648
"""

from typing import Dict
import numpy as np

from .config import OVERFLOW_POLICIES
from .errors import ASLError, E_SYNTAX_ERROR, E_OVERFLOW


_DTYPES: Dict[int, tuple] = {
    32: (np.int32, np.uint32),
    64: (np.int64, np.uint64),
}


class IntegerModel:
    """Arithmetic on fixed-width signed integers"""

    def __init__(self, bits: int = 32, overflow: str = 'wrap'):
        if bits not in _DTYPES:
            raise ValueError(f"Unsupported integer width: {bits}")
        if overflow not in OVERFLOW_POLICIES:
            raise ValueError(f"Unknown overflow policy: {overflow!r} (expected one of {OVERFLOW_POLICIES})")
        self.bits = bits
        self.overflow = overflow
        self.signed, self.unsigned = _DTYPES[bits]

        info = np.iinfo(self.signed)
        self.min = int(info.min)
        self.max = int(info.max)
        self._mask = (1 << bits) - 1

    def parse_literal(self, text: str) -> int:
        """
        Convert a decimal literal to a value.

        Literals are non-negative; one that does not fit the signed range
        is rejected rather than wrapped.
        """
        value = int(text)
        if value > self.max:
            raise ASLError(E_SYNTAX_ERROR, f"Integer literal out of range: {text}")
        return value

    def add(self, left: int, right: int) -> int:
        return self.normalize(left + right)

    def subtract(self, left: int, right: int) -> int:
        return self.normalize(left - right)

    def multiply(self, left: int, right: int) -> int:
        return self.normalize(left * right)

    def negate(self, operand: int) -> int:
        return self.normalize(-operand)

    def normalize(self, value: int) -> int:
        """Bring an exact result back into the signed range"""
        if self.min <= value <= self.max:
            return value
        if self.overflow == 'error':
            raise ASLError(E_OVERFLOW, f"Integer overflow: {value} does not fit in {self.bits} bits")
        return self.wrap(value)

    def wrap(self, value: int) -> int:
        """Keep the low `bits` bits of value and read them as signed"""
        low = np.asarray(value & self._mask, dtype=self.unsigned)
        return int(low.view(self.signed))

    def __repr__(self) -> str:
        return f"IntegerModel(bits={self.bits}, overflow={self.overflow!r})"


__all__ = ['IntegerModel']
