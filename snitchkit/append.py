"""Bounded text buffers and the textual rendering of values."""

from __future__ import annotations

import enum
from dataclasses import replace
from typing import Any, Optional

from snitchkit.fixed_point import (
    DOUBLE_TRAITS,
    FLOAT_TRAITS,
    U64_MAX,
    SignedFixedData,
    to_bits,
    to_fixed,
)

DIGITS = "0123456789abcdef"

MIN_EXP_DIGITS = 2
"""Minimum number of digits in a float exponent, as printed by printf."""

MAX_PRECISION = 19
"""Floats are never rendered with more significant digits than this."""

NULLPTR_STR = "nullptr"
UNKNOWN_PTR_STR = "0x????????"
TRUE_STR = "true"
FALSE_STR = "false"
INF_STR = "inf"
MINUS_INF_STR = "-inf"
NAN_STR = "nan"
_ZEROS = "000000000000000000"


def _check_base(base: int) -> None:
    if not 2 <= base <= len(DIGITS):
        raise ValueError(f"unsupported base {base}; expected 2 to {len(DIGITS)}")


def num_digits(value: int, base: int = 10) -> int:
    """Number of characters needed to write ``value`` in ``base``, sign included."""
    _check_base(base)
    remaining = abs(value)
    count = 1
    while remaining >= base:
        remaining //= base
        count += 1
    return count + (1 if value < 0 else 0)


def num_exp_digits(exponent: int) -> int:
    """Number of digits used to write a float exponent (at least two)."""
    return max(num_digits(abs(exponent)), MIN_EXP_DIGITS)


def num_fixed_digits(fd: SignedFixedData) -> int:
    """Length of the scientific representation of ``fd`` produced by :func:`format_fixed`."""
    # Decimal point, exponent marker and exponent sign.
    return num_digits(fd.digits) + num_exp_digits(fd.exponent) + (1 if fd.sign else 0) + 3


MAX_UINT_LENGTH = num_digits(U64_MAX)
MAX_INT_LENGTH = MAX_UINT_LENGTH + 1
MAX_FLOAT_LENGTH = num_fixed_digits(
    SignedFixedData(digits=U64_MAX, exponent=DOUBLE_TRAITS.exp_origin, sign=True)
)


def round_half_to_even(value: int, only_zero: bool) -> int:
    """Drop the last decimal digit of ``value``, rounding to nearest.

    ``only_zero`` states that every digit already dropped was zero, so that a
    trailing 5 is an exact tie, which is then broken towards the even result.
    """
    rounded = (value + 5) // 10
    if only_zero and value % 10 == 5:
        rounded -= 1 - (value // 10) % 2
    return rounded


def set_precision(fd: SignedFixedData, precision: int) -> SignedFixedData:
    """Round ``fd`` to at most ``precision`` significant digits (half to even)."""
    if precision < 1:
        raise ValueError("precision must be at least 1")
    digits = fd.digits
    exponent = fd.exponent
    base_digits = num_digits(digits)
    only_zero = True
    while base_digits > precision:
        if base_digits > precision + 1:
            if digits % 10 > 0:
                only_zero = False
            digits //= 10
            base_digits -= 1
        else:
            digits = round_half_to_even(digits, only_zero)
            base_digits = num_digits(digits)
        exponent += 1
    return replace(fd, digits=digits, exponent=exponent)


def format_fixed(fd: SignedFixedData) -> str:
    """Write ``fd`` in scientific notation with one digit before the decimal point."""
    text = str(fd.digits)
    mantissa = f"{text[0]}.{text[1:]}"
    exponent = fd.exponent + len(text) - 1
    exp_sign = "+" if exponent >= 0 else "-"
    exp_text = str(abs(exponent)).rjust(MIN_EXP_DIGITS, "0")
    sign = "-" if fd.sign else ""
    return f"{sign}{mantissa}e{exp_sign}{exp_text}"


def format_float(value: float, precision: Optional[int] = None, single: bool = False) -> str:
    """Render ``value`` as binary64 (or binary32 when ``single``) in scientific notation."""
    traits = FLOAT_TRAITS if single else DOUBLE_TRAITS
    if precision is None:
        precision = traits.precision
    precision = min(precision, MAX_PRECISION)
    if precision < 1:
        raise ValueError("precision must be at least 1")

    bits = to_bits(value, single)
    if bits.exponent == 0 and bits.significand == 0:
        return ("-0." if bits.sign else "0.") + _ZEROS[: precision - 1] + "e+00"
    if bits.exponent == traits.exp_bits_special:
        if bits.significand == traits.sig_bits_inf:
            return MINUS_INF_STR if bits.sign else INF_STR
        return NAN_STR
    return format_fixed(set_precision(to_fixed(bits), precision))


def format_int(value: int, base: int = 10) -> str:
    """Write an integer in ``base`` with lower-case digits and a leading minus if negative."""
    _check_base(base)
    if value == 0:
        return "0"
    remaining = abs(value)
    chars = []
    while remaining:
        remaining, digit = divmod(remaining, base)
        chars.append(DIGITS[digit])
    if value < 0:
        chars.append("-")
    return "".join(reversed(chars))


def to_display(value: Any) -> str:
    """Text used by the framework to show ``value`` in reports."""
    if value is None:
        return NULLPTR_STR
    if isinstance(value, enum.Enum):
        return to_display(value.value)
    if isinstance(value, bool):
        return TRUE_STR if value else FALSE_STR
    if isinstance(value, int):
        return format_int(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return value
    if callable(value):
        return UNKNOWN_PTR_STR
    raise TypeError(f"cannot display a value of type {type(value).__name__}")


class SmallString:
    """A text buffer of fixed capacity that truncates what does not fit."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = capacity
        self._text = ""

    @property
    def capacity(self) -> int:
        return self._capacity

    def available(self) -> int:
        """Number of characters that can still be added."""
        return self._capacity - len(self._text)

    def _append_text(self, text: str) -> bool:
        room = self.available()
        fits = len(text) <= room
        self._text += text if fits else text[:room]
        return fits

    def append(self, *args: Any) -> bool:
        """Append each value's display text; stop and return False at the first overflow."""
        for arg in args:
            if not self._append_text(to_display(arg)):
                return False
        return True

    def __str__(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def __repr__(self) -> str:
        return f"SmallString({self._capacity}, {self._text!r})"