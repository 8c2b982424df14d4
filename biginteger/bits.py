"""
Bit queries on (sign, magnitude) pairs, and the two's-complement view of them.

A negative value behaves, bitwise, as if it were stored in infinitely wide two's complement:

    -1  ...11111111
    -2  ...11111110
    -8  ...11111000

So -8 needs only 3 bits plus the implied sign bit, the same bit_length() as +7.
"""

from .limbs import (
    LIMB_BITS,
    LIMB_MASK,
    add_magnitudes,
    strip_leading_zeros,
)


def magnitude_bit_length(magnitude):
    """Number of bits in an unsigned magnitude, 0 for the empty magnitude."""
    if not magnitude:
        return 0
    return (len(magnitude) - 1) * LIMB_BITS + magnitude[0].bit_length()
assert 33 == magnitude_bit_length([1, 0])


def is_power_of_two(magnitude):
    """Is a nonempty magnitude exactly one set bit?"""
    top = magnitude[0]
    if top & (top - 1):
        return False
    return not any(magnitude[1:])
assert is_power_of_two([2, 0, 0])
assert not is_power_of_two([2, 0, 1])


def bit_length(sign, magnitude):
    """
    Minimal two's-complement width, excluding the sign bit.

    A negative power of two needs one bit fewer than its magnitude, e.g. -128 fits in a signed byte.
    """
    length = magnitude_bit_length(magnitude)
    if sign < 0 and is_power_of_two(magnitude):
        length -= 1
    return length
assert 7 == bit_length(-1, [128])
assert 8 == bit_length(-1, [129])


def trailing_zero_bits(magnitude):
    """Index of the lowest set bit of a nonempty magnitude."""
    zeros = 0
    for limb in reversed(magnitude):
        if limb:
            return zeros + (limb & -limb).bit_length() - 1
        zeros += LIMB_BITS
    raise ValueError("Zero has no set bits")
assert 33 == trailing_zero_bits([2, 0])


def population_count(magnitude):
    """Number of set bits in an unsigned magnitude."""
    return sum(bin(limb).count('1') for limb in magnitude)


def bit_count(sign, magnitude):
    """
    Number of bits in the two's-complement form that differ from the sign bit.

    Nonnegative:  the set bits.
    Negative:  the clear bits.  Negating flips every bit above the lowest set bit,
    so that's popcount(magnitude) + trailing_zeros(magnitude) - 1.
    """
    count = population_count(magnitude)
    if sign < 0:
        count += trailing_zero_bits(magnitude) - 1
    return count
assert 0 == bit_count(-1, [1])   # -1 is ...1111
assert 1 == bit_count(-1, [2])   # -2 is ...1110
assert 2 == bit_count(-1, [4])   # -4 is ...1100


def lowest_set_bit(magnitude):
    """Index of the lowest set bit, or -1 for zero, which has none."""
    if not magnitude:
        return -1
    return trailing_zero_bits(magnitude)


def first_nonzero_limb(magnitude):
    """Position (from the least significant end) of the lowest nonzero limb, or -1 for zero."""
    for position, limb in enumerate(reversed(magnitude)):
        if limb:
            return position
    return -1


def twos_complement_limb(sign, magnitude, n, first_nonzero):
    """
    Limb n (0 = least significant) of the infinite two's-complement form.

    first_nonzero is first_nonzero_limb(magnitude), passed in so the caller can cache it.
    Below and at that limb, negation is a true negation (the +1 carry is still rippling).
    Above it, negation is a plain bitwise not.
    """
    if n < 0:
        return 0
    if n >= len(magnitude):
        return LIMB_MASK if sign < 0 else 0
    limb = magnitude[len(magnitude) - n - 1]
    if sign >= 0:
        return limb
    elif n <= first_nonzero:
        return -limb & LIMB_MASK
    else:
        return ~limb & LIMB_MASK
assert 0xFFFFFFFE == twos_complement_limb(-1, [1, 2], 0, 0)
assert 0xFFFFFFFE == twos_complement_limb(-1, [1, 2], 1, 0)
assert 0xFFFFFFFF == twos_complement_limb(-1, [1, 2], 2, 0)


def from_twos_complement(limbs):
    """
    (sign, magnitude) for a finite big-endian two's-complement limb list.

    The top bit of limbs[0] is the sign bit.
    """
    if not limbs or limbs[0] <= 0x7FFFFFFF:
        magnitude = strip_leading_zeros(limbs)
        return (1 if magnitude else 0), magnitude
    inverted = strip_leading_zeros([~limb & LIMB_MASK for limb in limbs])
    return -1, add_magnitudes(inverted, [1])
assert (-1, [1]) == from_twos_complement([0xFFFFFFFF, 0xFFFFFFFF])
assert (-1, [1, 0]) == from_twos_complement([0xFFFFFFFF, 0])
assert (+1, [5]) == from_twos_complement([0, 5])
