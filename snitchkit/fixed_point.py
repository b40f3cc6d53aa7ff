"""Fixed-point decimal arithmetic used to render IEEE 754 floats exactly."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Tuple

U64_MAX = (1 << 64) - 1
INT32_MIN = -(1 << 31)
_CAP = U64_MAX // 10


def unpack10(value: int) -> Tuple[int, int]:
    """Split ``value`` into ``(lower, upper)`` with ``value == upper * 10**10 + lower``."""
    return value % 10_000_000_000, value // 10_000_000_000


def _raise_exponent(digits: int, exponent: int) -> Tuple[int, int]:
    return ((digits + 5) // 10) & U64_MAX, exponent + 1


def _raise_exponent_to(digits: int, exponent: int, target: int) -> Tuple[int, int]:
    while True:
        if digits == 0:
            exponent = target
        elif exponent < target - 1:
            digits //= 10
            exponent += 1
        else:
            digits = ((digits + 5) // 10) & U64_MAX
            exponent += 1
        if exponent >= target:
            return digits, exponent


class UnsignedFixed:
    """A non-negative number ``digits * 10**exponent`` with 64-bit digits.

    The digits are normalised to keep as many significant figures as possible;
    zero takes the smallest exponent so that it never limits precision in sums.
    """

    __slots__ = ("_digits", "_exponent")

    def __init__(self, digits: int, exponent: int) -> None:
        digits &= U64_MAX
        if digits > 0:
            while digits < _CAP:
                digits *= 10
                exponent -= 1
        else:
            exponent = INT32_MIN
        self._digits = digits
        self._exponent = exponent

    @property
    def digits(self) -> int:
        return self._digits

    @property
    def exponent(self) -> int:
        return self._exponent

    def __add__(self, other: "UnsignedFixed") -> "UnsignedFixed":
        if not isinstance(other, UnsignedFixed):
            return NotImplemented
        d1, e1 = self._digits, self._exponent
        d2, e2 = other._digits, other._exponent
        # Bring both to a common exponent, one above the largest, to avoid overflow.
        if e1 > e2:
            d2, e2 = _raise_exponent_to(d2, e2, e1 + 1)
            d1, e1 = _raise_exponent(d1, e1)
        elif e1 < e2:
            d1, e1 = _raise_exponent_to(d1, e1, e2 + 1)
            d2, e2 = _raise_exponent(d2, e2)
        else:
            d1, e1 = _raise_exponent(d1, e1)
            d2, e2 = _raise_exponent(d2, e2)
        return UnsignedFixed(d1 + d2, e1)

    def __mul__(self, other: "UnsignedFixed") -> "UnsignedFixed":
        if not isinstance(other, UnsignedFixed):
            return NotImplemented
        # Split each as u*1e10 + l and keep the digits of the product divided by 1e20,
        # dropping the l1*l2 term which only affects the last digit.
        l1, u1 = unpack10(self._digits)
        l2, u2 = unpack10(other._digits)
        l_over_10 = (l1 * u2 + 5) // 10 + (l2 * u1 + 5) // 10
        l_over_1e10 = (l_over_10 + 500_000_000) // 1_000_000_000
        upper = u1 * u2
        return UnsignedFixed(upper + l_over_1e10, self._exponent + other._exponent + 20)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnsignedFixed):
            return NotImplemented
        return self._digits == other._digits and self._exponent == other._exponent

    def __hash__(self) -> int:
        return hash((self._digits, self._exponent))

    def __repr__(self) -> str:
        return f"UnsignedFixed({self._digits}, {self._exponent})"


@dataclass(frozen=True)
class SignedFixedData:
    """Digits, decimal exponent and sign of a converted float."""

    digits: int = 0
    exponent: int = 0
    sign: bool = False


@dataclass(frozen=True)
class FloatTraits:
    """Layout of an IEEE 754 binary format and its decimal significand table."""

    bits: int
    sig_bits: int
    exp_origin: int
    exp_bits_special: int
    sig_bits_nan: int
    sig_bits_inf: int
    precision: int
    sig_elems: Tuple[UnsignedFixed, ...]
    pack_format: str

    @property
    def exp_bits(self) -> int:
        return self.bits - self.sig_bits - 1

    @property
    def exp_subnormal(self) -> int:
        return self.exp_origin + 1

    @property
    def sign_mask(self) -> int:
        return 1 << (self.bits - 1)

    @property
    def sig_mask(self) -> int:
        return (1 << self.sig_bits) - 1

    @property
    def exp_mask(self) -> int:
        return ((1 << (self.bits - 1)) - 1) & ~self.sig_mask


_DOUBLE_SIG_ELEMS = tuple(
    UnsignedFixed(d, e)
    for d, e in (
        (2220446049250313081, -34), (4440892098500626162, -34),
        (8881784197001252323, -34), (1776356839400250465, -33),
        (3552713678800500929, -33), (7105427357601001859, -33),
        (1421085471520200372, -32), (2842170943040400743, -32),
        (5684341886080801487, -32), (1136868377216160297, -31),
        (2273736754432320595, -31), (4547473508864641190, -31),
        (9094947017729282379, -31), (1818989403545856476, -30),
        (3637978807091712952, -30), (7275957614183425903, -30),
        (1455191522836685181, -29), (2910383045673370361, -29),
        (5820766091346740723, -29), (1164153218269348145, -28),
        (2328306436538696289, -28), (4656612873077392578, -28),
        (9313225746154785156, -28), (1862645149230957031, -27),
        (3725290298461914062, -27), (7450580596923828125, -27),
        (1490116119384765625, -26), (2980232238769531250, -26),
        (5960464477539062500, -26), (1192092895507812500, -25),
        (2384185791015625000, -25), (4768371582031250000, -25),
        (9536743164062500000, -25), (1907348632812500000, -24),
        (3814697265625000000, -24), (7629394531250000000, -24),
        (1525878906250000000, -23), (3051757812500000000, -23),
        (6103515625000000000, -23), (1220703125000000000, -22),
        (2441406250000000000, -22), (4882812500000000000, -22),
        (9765625000000000000, -22), (1953125000000000000, -21),
        (3906250000000000000, -21), (7812500000000000000, -21),
        (1562500000000000000, -20), (3125000000000000000, -20),
        (6250000000000000000, -20), (1250000000000000000, -19),
        (2500000000000000000, -19), (5000000000000000000, -19),
    )
)

DOUBLE_TRAITS = FloatTraits(
    bits=64,
    sig_bits=52,
    exp_origin=-1023,
    exp_bits_special=0x7FF,
    sig_bits_nan=0x8000000000000,
    sig_bits_inf=0x0,
    precision=16,
    sig_elems=_DOUBLE_SIG_ELEMS,
    pack_format=">d",
)

FLOAT_TRAITS = FloatTraits(
    bits=32,
    sig_bits=23,
    exp_origin=-127,
    exp_bits_special=0xFF,
    sig_bits_nan=0x400000,
    sig_bits_inf=0x0,
    precision=7,
    sig_elems=_DOUBLE_SIG_ELEMS[52 - 23:],
    pack_format=">f",
)

# Powers 2**(2**i) (first row) and 2**-(2**i) (second row).
BINARY_TABLE = (
    tuple(
        UnsignedFixed(d, e)
        for d, e in (
            (2000000000000000000, -18), (4000000000000000000, -18),
            (1600000000000000000, -17), (2560000000000000000, -16),
            (6553600000000000000, -14), (4294967296000000000, -9),
            (1844674407370955162, 1), (3402823669209384635, 20),
            (1157920892373161954, 59), (1340780792994259710, 136),
        )
    ),
    tuple(
        UnsignedFixed(d, e)
        for d, e in (
            (5000000000000000000, -19), (2500000000000000000, -19),
            (6250000000000000000, -20), (3906250000000000000, -21),
            (1525878906250000000, -23), (2328306436538696289, -28),
            (5421010862427522170, -38), (2938735877055718770, -57),
            (8636168555094444625, -96), (7458340731200206743, -173),
        )
    ),
)


@dataclass(frozen=True)
class FloatBits:
    """The raw fields of an IEEE 754 value."""

    significand: int = 0
    exponent: int = 0
    sign: bool = False
    single: bool = False

    @property
    def traits(self) -> FloatTraits:
        return FLOAT_TRAITS if self.single else DOUBLE_TRAITS


def to_bits(value: float, single: bool = False) -> FloatBits:
    """Decompose ``value`` as a binary64 (or binary32 when ``single``) float."""
    traits = FLOAT_TRAITS if single else DOUBLE_TRAITS
    try:
        packed = struct.pack(traits.pack_format, value)
    except OverflowError:
        packed = struct.pack(traits.pack_format, math.copysign(math.inf, value))
    raw = int.from_bytes(packed, "big")
    return FloatBits(
        significand=raw & traits.sig_mask,
        exponent=(raw & traits.exp_mask) >> traits.sig_bits,
        sign=(raw & traits.sign_mask) != 0,
        single=single,
    )


def _apply_binary_exponent(
    fix: UnsignedFixed, mul_div: int, exponent: int, traits: FloatTraits
) -> UnsignedFixed:
    # Combine the powers of two from smallest to largest before applying them.
    power = UnsignedFixed(1, 0)
    for i, factor in enumerate(BINARY_TABLE[mul_div][: traits.exp_bits - 1]):
        if exponent & (1 << i):
            power = power * factor
    return fix * power


def to_fixed(bits: FloatBits) -> SignedFixedData:
    """Convert finite float fields to a decimal fixed-point value."""
    traits = bits.traits
    fix = UnsignedFixed(0, 0)
    for i, elem in enumerate(traits.sig_elems):
        if bits.significand & (1 << i):
            fix = fix + elem

    subnormal = bits.exponent == 0
    if not subnormal:
        fix = fix + UnsignedFixed(1, 0)

    exponent = traits.exp_subnormal if subnormal else bits.exponent + traits.exp_origin
    if exponent > 0:
        fix = _apply_binary_exponent(fix, 0, exponent, traits)
    elif exponent < 0:
        fix = _apply_binary_exponent(fix, 1, -exponent, traits)

    return SignedFixedData(digits=fix.digits, exponent=fix.exponent, sign=bits.sign)