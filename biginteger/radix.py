"""
Radix conversion:  numeral strings to and from (sign, magnitude) pairs, in any radix from 2 to 36.

Parsing is Horner's method in base radix**digits_per_limb, so each step is one mul_add_limb() pass.

Formatting has two modes:
    short magnitudes - repeated division by that same super-radix, one limb at a time, O(n**2)
    long magnitudes - divide by radix**(2**k), about the square root, and format both halves recursively

The recursive mode needs radix**(2**k) for growing k.  Those powers are cached per radix,
append-only, and shared by every thread.
"""

import logging
import math
import threading

from .bits import magnitude_bit_length
from .divide import divide_magnitudes
from .errors import FormatError, MagnitudeOverflowError, RangeError
from .limbs import (
    check_range,
    divide_by_limb,
    limbs_from_int,
    mul_add_limb,
    strip_leading_zeros,
)
from .multiply import square_magnitude


_logger = logging.getLogger(__name__)

MIN_RADIX = 2
MAX_RADIX = 36
SCHOENHAGE_BASE_CONVERSION_THRESHOLD = 20

DIGITS = '0123456789abcdefghijklmnopqrstuvwxyz'

# Bits per digit, times 1024, rounded up:  ceil(log2(radix) * 1024)
# So a numeral never needs more than (digits * BITS_PER_DIGIT[radix] >> 10) + 1 bits.
BITS_PER_DIGIT = [
    0, 0,
    1024, 1624, 2048, 2378, 2648, 2875, 3072, 3247, 3402, 3543, 3672,
    3790, 3899, 4001, 4096, 4186, 4271, 4350, 4426, 4498, 4567, 4633,
    4696, 4756, 4814, 4870, 4923, 4975, 5025, 5074, 5120, 5166, 5210,
    5253, 5295,
]

# Most digits of each radix that always fit in a 31-bit value.
DIGITS_PER_LIMB = [
    0, 0, 30, 19, 15, 13, 11,
    11, 10, 9, 9, 8, 8, 8, 8, 7, 7, 7, 7, 7, 7, 7, 6, 6, 6, 6,
    6, 6, 6, 6, 6, 6, 6, 6, 6, 6, 5,
]

# radix ** DIGITS_PER_LIMB[radix], the super-radix
LIMB_RADIX = [
    0, 0,
    0x40000000, 0x4546b3db, 0x40000000, 0x48c27395, 0x159fd800,
    0x75db9c97, 0x40000000, 0x17179149, 0x3b9aca00, 0xcc6db61,
    0x19a10000, 0x309f1021, 0x57f6c100, 0xa2f1b6f,  0x10000000,
    0x18754571, 0x247dbc80, 0x3547667b, 0x4c4b4000, 0x6b5a6e1d,
    0x6c20a40,  0x8d2d931,  0xb640000,  0xe8d4a51,  0x1269ae40,
    0x17179149, 0x1cb91000, 0x23744899, 0x2b73a840, 0x34e63b41,
    0x40000000, 0x4cfa3cc1, 0x5c13d840, 0x6d91b519, 0x39aa400,
]
assert all(r ** DIGITS_PER_LIMB[r] == LIMB_RADIX[r] for r in range(MIN_RADIX, MAX_RADIX + 1))

_DIGIT_VALUES = {}
for _value, _character in enumerate(DIGITS):
    _DIGIT_VALUES[_character] = _value
    _DIGIT_VALUES[_character.upper()] = _value
# NOTE:  ASCII only.  Other Unicode decimal digits are illegal.

LOG_TWO = math.log(2.0)
_LOG_CACHE = [0.0, 0.0] + [math.log(r) for r in range(MIN_RADIX, MAX_RADIX + 1)]

# _power_cache[radix][k] is the magnitude of radix ** (2 ** k).
# Each line is a tuple, replaced (never mutated) when it grows.
_power_cache = [()] * 2 + [(tuple(limbs_from_int(r)),) for r in range(MIN_RADIX, MAX_RADIX + 1)]
_power_cache_lock = threading.Lock()


def check_radix(radix):
    if not MIN_RADIX <= radix <= MAX_RADIX:
        raise RangeError("Radix {radix} out of range {min}..{max}".format(
            radix=radix,
            min=MIN_RADIX,
            max=MAX_RADIX,
        ))


def digit_value(character, radix):
    """Value of one digit character in this radix, or -1 if it isn't a digit of this radix."""
    value = _DIGIT_VALUES.get(character, -1)
    return value if value < radix else -1
assert 35 == digit_value('Z', 36)
assert -1 == digit_value('8', 8)


# Parsing
# -------
def parse(text, radix=10):
    """
    Convert a numeral to (sign, magnitude).

    At most one sign character, and only in front.  Leading zeros are fine.
    """
    check_radix(radix)
    length = len(text)
    if length == 0:
        raise FormatError("Zero length BigInteger")

    sign = 1
    cursor = 0
    minus_index = text.rfind('-')
    plus_index = text.rfind('+')
    if minus_index >= 0:
        if minus_index != 0 or plus_index >= 0:
            raise FormatError("Illegal embedded sign character in {!r}".format(text))
        sign = -1
        cursor = 1
    elif plus_index >= 0:
        if plus_index != 0:
            raise FormatError("Illegal embedded sign character in {!r}".format(text))
        cursor = 1
    if cursor == length:
        raise FormatError("Zero length BigInteger")

    while cursor < length and digit_value(text[cursor], radix) == 0:
        cursor += 1
    if cursor == length:
        return 0, []

    num_digits = length - cursor
    num_bits = ((num_digits * BITS_PER_DIGIT[radix]) >> 10) + 1
    if num_bits + 31 >= 1 << 32:
        raise MagnitudeOverflowError("BigInteger would overflow supported range, {} digits".format(num_digits))
    num_limbs = (num_bits + 31) >> 5
    magnitude = [0] * num_limbs

    group_width = DIGITS_PER_LIMB[radix]
    first_group_width = num_digits % group_width or group_width
    magnitude[-1] = _parse_group(text, cursor, cursor + first_group_width, radix)
    cursor += first_group_width

    super_radix = LIMB_RADIX[radix]
    while cursor < length:
        group_value = _parse_group(text, cursor, cursor + group_width, radix)
        cursor += group_width
        spill = mul_add_limb(magnitude, super_radix, group_value)
        assert spill == 0, "BITS_PER_DIGIT underestimated {} digits".format(num_digits)

    magnitude = strip_leading_zeros(magnitude)
    check_range(magnitude)
    return sign, magnitude


def _parse_group(text, start, end, radix):
    """Value of a group of digits, small enough to fit one limb."""
    value = 0
    for character in text[start:end]:
        digit = digit_value(character, radix)
        if digit < 0:
            raise FormatError("Illegal digit {character!r} for radix {radix}".format(
                character=character,
                radix=radix,
            ))
        value = value * radix + digit
    return value


# Formatting
# ----------
def format_magnitude(sign, magnitude, radix=10):
    """The numeral for (sign, magnitude), lowercase letters for digits above 9."""
    check_radix(radix)
    if sign == 0:
        return '0'
    pieces = []
    if sign < 0:
        pieces.append('-')
    _format_recursive(magnitude, radix, 0, pieces)
    return ''.join(pieces)


def _format_recursive(magnitude, radix, digits, pieces):
    """
    Append the digits of magnitude to pieces, zero-padded on the left to at least `digits` wide.

    Pick k so radix**(2**k) is about the square root, split by it, and recurse.
    The low half always gets exactly 2**k digits, leading zeros and all.
    """
    if len(magnitude) < SCHOENHAGE_BASE_CONVERSION_THRESHOLD:
        _format_small(magnitude, radix, digits, pieces)
        return

    num_bits = magnitude_bit_length(magnitude)
    exponent = int(round(math.log(num_bits * LOG_TWO / _LOG_CACHE[radix]) / LOG_TWO - 1.0))
    exponent = max(exponent, 0)
    high, low = divide_magnitudes(magnitude, radix_power(radix, exponent))
    expected_digits = 1 << exponent
    _format_recursive(high, radix, digits - expected_digits, pieces)
    _format_recursive(low, radix, expected_digits, pieces)


def _format_small(magnitude, radix, digits, pieces):
    """Iterative formatting:  peel off one super-radix group at a time, least significant first."""
    if not magnitude:
        if digits > 0:
            pieces.append('0' * digits)
        return

    group_width = DIGITS_PER_LIMB[radix]
    super_radix = LIMB_RADIX[radix]
    groups = []
    while magnitude:
        magnitude, group_value = divide_by_limb(magnitude, super_radix)
        groups.append(group_value)

    text = _format_limb(groups[-1], radix) + ''.join(
        _format_limb(group_value, radix).rjust(group_width, '0')
        for group_value in reversed(groups[:-1])
    )
    if digits > len(text):
        pieces.append('0' * (digits - len(text)))
    pieces.append(text)


def _format_limb(value, radix):
    """Digits of a single limb value, no padding."""
    if value == 0:
        return '0'
    characters = []
    while value:
        value, digit = divmod(value, radix)
        characters.append(DIGITS[digit])
    return ''.join(reversed(characters))
assert 'zz' == _format_limb(35 * 36 + 35, 36)


def radix_power(radix, exponent):
    """
    Magnitude of radix ** (2 ** exponent), from the cache.

    Readers never lock.  Growth is under a lock, double-checked, and publishes a new tuple.
    """
    cache_line = _power_cache[radix]
    if exponent < len(cache_line):
        return cache_line[exponent]
    with _power_cache_lock:
        cache_line = _power_cache[radix]
        if exponent >= len(cache_line):
            grown = list(cache_line)
            while len(grown) <= exponent:
                grown.append(tuple(square_magnitude(grown[-1])))
            _logger.debug("Radix %d power cache grew from %d to %d entries", radix, len(cache_line), len(grown))
            cache_line = tuple(grown)
            _power_cache[radix] = cache_line
    return cache_line[exponent]
