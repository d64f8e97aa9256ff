"""
Test suite for the fixed-width integer model
"""

import pytest
import sys
import os

# Add grandparent directory to path for imports (to find asl_runtime package)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from asl_runtime.integers import IntegerModel
from asl_runtime.errors import ASLError, E_SYNTAX_ERROR, E_OVERFLOW


INT32_MIN = -2**31
INT32_MAX = 2**31 - 1
INT64_MIN = -2**63
INT64_MAX = 2**63 - 1


class TestRange:
    """Test range limits per width"""

    def test_32_bit_limits(self):
        model = IntegerModel(32)
        assert (model.min, model.max) == (INT32_MIN, INT32_MAX)

    def test_64_bit_limits(self):
        model = IntegerModel(64)
        assert (model.min, model.max) == (INT64_MIN, INT64_MAX)

    def test_unsupported_width(self):
        with pytest.raises(ValueError):
            IntegerModel(16)

    def test_unknown_overflow_policy(self):
        with pytest.raises(ValueError):
            IntegerModel(32, overflow='eror')


class TestWrap:
    """Test two's-complement wrap-around"""

    @pytest.mark.parametrize('value,expected', [
        (0, 0),
        (-1, -1),
        (INT32_MAX + 1, INT32_MIN),
        (INT32_MIN - 1, INT32_MAX),
        (2**32, 0),
        (2**32 + 5, 5),
        (-2**32 - 5, -5),
    ])
    def test_wrap_32(self, value, expected):
        assert IntegerModel(32).wrap(value) == expected

    def test_wrap_64(self):
        model = IntegerModel(64)
        assert model.wrap(INT64_MAX + 1) == INT64_MIN
        assert model.wrap(INT64_MIN - 1) == INT64_MAX

    def test_wrap_returns_python_int(self):
        assert type(IntegerModel(32).wrap(2**40 + 3)) is int


class TestOperations:
    """Test arithmetic helpers"""

    def test_in_range_results_unchanged(self):
        model = IntegerModel(32)
        assert model.add(2, 3) == 5
        assert model.subtract(2, 3) == -1
        assert model.multiply(-4, 5) == -20
        assert model.negate(7) == -7

    def test_overflowing_results_wrap(self):
        model = IntegerModel(32)
        assert model.add(INT32_MAX, 1) == INT32_MIN
        assert model.subtract(INT32_MIN, 1) == INT32_MAX
        assert model.multiply(INT32_MAX, INT32_MAX) == 1
        assert model.negate(INT32_MIN) == INT32_MIN

    def test_64_bit_multiply_wraps(self):
        model = IntegerModel(64)
        assert model.multiply(2**62, 4) == 0
        assert model.multiply(INT64_MAX, 2) == -2

    def test_error_policy(self):
        model = IntegerModel(32, overflow='error')
        assert model.add(INT32_MAX - 1, 1) == INT32_MAX
        with pytest.raises(ASLError) as exc_info:
            model.add(INT32_MAX, 1)
        assert exc_info.value.code == E_OVERFLOW
        with pytest.raises(ASLError):
            model.negate(INT32_MIN)


class TestLiterals:
    """Test literal conversion"""

    def test_parse_literal(self):
        model = IntegerModel(32)
        assert model.parse_literal('0') == 0
        assert model.parse_literal('2147483647') == INT32_MAX

    def test_literal_out_of_range(self):
        with pytest.raises(ASLError) as exc_info:
            IntegerModel(32).parse_literal('2147483648')
        assert exc_info.value.code == E_SYNTAX_ERROR

    def test_literal_range_follows_width(self):
        assert IntegerModel(64).parse_literal('2147483648') == 2147483648
        with pytest.raises(ASLError):
            IntegerModel(64).parse_literal('9223372036854775808')
