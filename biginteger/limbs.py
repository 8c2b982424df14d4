"""
Limb primitives:  unsigned arithmetic on big-endian sequences of 32-bit limbs.

A magnitude is a list (or tuple) of ints, each in range(2**32), most significant limb first.
A canonical magnitude has no leading zero limb, so zero is the empty sequence.

    assert 2**32 + 5 == int_from_limbs([1, 5])

Every function here accepts canonical input and returns a fresh canonical list,
unless its docstring says otherwise.  Nothing returned aliases an argument.
"""

from .errors import MagnitudeOverflowError


LIMB_BITS = 32
LIMB_MASK = 0xFFFFFFFF
LIMB_BASE = 1 << LIMB_BITS

MAX_MAG_LENGTH = (1 << 31) // LIMB_BITS   # 2**26 limbs, i.e. 2**31 bits
# NOTE:  Read at call time by check_range(), so a test can shrink it.


def check_range(magnitude):
    """Raise MagnitudeOverflowError if a magnitude has more limbs than MAX_MAG_LENGTH."""
    check_length(len(magnitude))


def check_length(num_limbs):
    """Same as check_range(), but before the limbs exist, so an oversize result is never computed."""
    if num_limbs > MAX_MAG_LENGTH:
        raise MagnitudeOverflowError("BigInteger would overflow supported range, {n} limbs > {max}".format(
            n=num_limbs,
            max=MAX_MAG_LENGTH,
        ))


def multiply_with_carry(x, y, carry):
    """
    Widening multiply.  Return (high, low) halves of x * y + carry.

    All three inputs are unsigned 32-bit values, so the sum fits in 64 bits.
    """
    product = x * y + carry
    return product >> LIMB_BITS, product & LIMB_MASK
assert (0xFFFFFFFF, 0) == multiply_with_carry(0xFFFFFFFF, 0xFFFFFFFF, 0xFFFFFFFF)


def strip_leading_zeros(limbs):
    """Copy of the limbs without any leading zero limbs."""
    keep = 0
    length = len(limbs)
    while keep < length and limbs[keep] == 0:
        keep += 1
    return list(limbs[keep:])
assert [7, 0] == strip_leading_zeros((0, 0, 7, 0))
assert [] == strip_leading_zeros([0, 0])


def compare_magnitudes(x, y):
    """
    Unsigned compare.  Return -1, 0, or +1 as x is less than, equal to, or greater than y.

    The shorter canonical magnitude is always the smaller one.
    """
    if len(x) != len(y):
        return -1 if len(x) < len(y) else 1
    for x_limb, y_limb in zip(x, y):
        if x_limb != y_limb:
            return -1 if x_limb < y_limb else 1
    return 0
assert -1 == compare_magnitudes([5], [1, 0])
assert +1 == compare_magnitudes([1, 6], [1, 5])


def add_magnitudes(x, y):
    """Unsigned sum.  One limb longer than the longer input only when the final carry spills over."""
    if len(x) < len(y):
        x, y = y, x
    result = list(x)
    carry = 0
    i = len(x) - 1
    for j in range(len(y) - 1, -1, -1):
        total = x[i] + y[j] + carry
        result[i] = total & LIMB_MASK
        carry = total >> LIMB_BITS
        i -= 1
    while carry and i >= 0:
        total = x[i] + 1
        result[i] = total & LIMB_MASK
        carry = total >> LIMB_BITS
        i -= 1
    if carry:
        result.insert(0, 1)
    return result
assert [1, 0] == add_magnitudes([0xFFFFFFFF], [1])
assert [1, 0, 0] == add_magnitudes([1], [0xFFFFFFFF, 0xFFFFFFFF])


def subtract_magnitudes(big, little):
    """
    Unsigned difference big - little.

    Caller guarantees compare_magnitudes(big, little) >= 0.
    """
    result = list(big)
    borrow = 0
    i = len(big) - 1
    for j in range(len(little) - 1, -1, -1):
        difference = big[i] - little[j] - borrow
        result[i] = difference & LIMB_MASK
        borrow = 1 if difference < 0 else 0
        i -= 1
    while borrow and i >= 0:
        difference = big[i] - 1
        result[i] = difference & LIMB_MASK
        borrow = 1 if difference < 0 else 0
        i -= 1
    assert borrow == 0, "subtract_magnitudes() needs big >= little"
    return strip_leading_zeros(result)
assert [0xFFFFFFFF] == subtract_magnitudes([1, 0], [1])
assert [] == subtract_magnitudes([3, 4], [3, 4])


def add_signed(x_sign, x, y_sign, y):
    """
    Signed sum of two (sign, magnitude) pairs.  Return a (sign, magnitude) pair.

    Same signs add magnitudes.  Opposite signs subtract the smaller magnitude from the larger,
    and the result takes the sign of the larger.
    """
    if y_sign == 0:
        return x_sign, list(x)
    if x_sign == 0:
        return y_sign, list(y)
    if x_sign == y_sign:
        return x_sign, add_magnitudes(x, y)
    comparison = compare_magnitudes(x, y)
    if comparison == 0:
        return 0, []
    elif comparison > 0:
        return x_sign, subtract_magnitudes(x, y)
    else:
        return y_sign, subtract_magnitudes(y, x)
assert (-1, [2]) == add_signed(+1, [3], -1, [5])


def mul_add_limb(limbs, multiplier, addend):
    """
    In place:  limbs = limbs * multiplier + addend.

    limbs is a mutable scratch list, not necessarily canonical.
    Returns whatever spilled out of the top limb, which is zero when the caller allocated enough room.
    """
    carry = 0
    for i in range(len(limbs) - 1, -1, -1):
        carry, limbs[i] = multiply_with_carry(multiplier, limbs[i], carry)
    spill = carry

    carry = addend
    i = len(limbs) - 1
    while carry and i >= 0:
        total = limbs[i] + carry
        limbs[i] = total & LIMB_MASK
        carry = total >> LIMB_BITS
        i -= 1
    return spill + carry


def multiply_by_limb(x, y):
    """Unsigned product of a magnitude and a single limb."""
    if y == 0 or not x:
        return []
    result = [0] * (len(x) + 1)
    carry = 0
    for i in range(len(x) - 1, -1, -1):
        carry, result[i + 1] = multiply_with_carry(x[i], y, carry)
    result[0] = carry
    return strip_leading_zeros(result)
assert [1, 0xFFFFFFFE] == multiply_by_limb([0xFFFFFFFF], 2)


def divide_by_limb(x, divisor):
    """Unsigned division by a nonzero single limb.  Return (quotient magnitude, remainder int)."""
    assert 0 < divisor <= LIMB_MASK
    quotient = [0] * len(x)
    remainder = 0
    for i, limb in enumerate(x):
        quotient[i], remainder = divmod((remainder << LIMB_BITS) | limb, divisor)
    return strip_leading_zeros(quotient), remainder
assert ([0x80000000], 0) == divide_by_limb([1, 0], 2)
assert ([0x55555555], 0) == divide_by_limb([0xFFFFFFFF], 3)


def shift_left(magnitude, n_bits):
    """Unsigned magnitude * 2**n_bits, for n_bits >= 0."""
    if not magnitude:
        return []
    limb_shift, bit_shift = n_bits >> 5, n_bits & 31
    if bit_shift == 0:
        result = list(magnitude)
    else:
        result = [0] * (len(magnitude) + 1)
        carry = 0
        for i in range(len(magnitude) - 1, -1, -1):
            shifted = (magnitude[i] << bit_shift) | carry
            result[i + 1] = shifted & LIMB_MASK
            carry = shifted >> LIMB_BITS
        result[0] = carry
        result = strip_leading_zeros(result)
    return result + [0] * limb_shift
assert [2, 0] == shift_left([1], 33)


def shift_right(magnitude, n_bits):
    """Unsigned magnitude // 2**n_bits, for n_bits >= 0.  Bits shifted out are discarded."""
    limb_shift, bit_shift = n_bits >> 5, n_bits & 31
    if limb_shift >= len(magnitude):
        return []
    kept = magnitude[:len(magnitude) - limb_shift]
    if bit_shift == 0:
        return list(kept)
    result = [0] * len(kept)
    low_mask = (1 << bit_shift) - 1
    carry = 0
    for i, limb in enumerate(kept):
        result[i] = (carry << (LIMB_BITS - bit_shift)) | (limb >> bit_shift)
        carry = limb & low_mask
    return strip_leading_zeros(result)
assert [1] == shift_right([2, 0], 33)
assert [0x80000000] == shift_right([1, 0], 1)


# Limb-granular slicing
# ---------------------
# Split and join magnitudes at limb boundaries, for the divide-and-conquer algorithms.
# Position n means a weight of 2**(32*n), counting from the least significant end.
def lower_limbs(magnitude, n):
    """magnitude mod 2**(32*n)"""
    if n <= 0:
        return []
    return strip_leading_zeros(magnitude[-n:])
assert [5] == lower_limbs([7, 0, 5], 2)


def upper_limbs(magnitude, n):
    """magnitude >> 32*n"""
    if n <= 0:
        return list(magnitude)
    return list(magnitude[:-n])
assert [7] == upper_limbs([7, 0, 5], 2)
assert [] == upper_limbs([5], 2)


def shift_left_limbs(magnitude, n):
    """magnitude << 32*n"""
    if not magnitude:
        return []
    return list(magnitude) + [0] * n


def join_limbs(high, low, n):
    """high << 32*n | low, where low fits in n limbs."""
    assert len(low) <= n
    if not high:
        return list(low)
    return list(high) + [0] * (n - len(low)) + list(low)
assert [7, 0, 5] == join_limbs([7], [5], 2)


# Conversion with native int
# --------------------------
def limbs_from_int(n):
    """Magnitude of a nonnegative native int."""
    assert n >= 0
    limbs = []
    while n:
        limbs.append(n & LIMB_MASK)
        n >>= LIMB_BITS
    limbs.reverse()
    return limbs
assert [1, 5] == limbs_from_int(2**32 + 5)
assert [] == limbs_from_int(0)


def int_from_limbs(magnitude):
    """Native int value of a magnitude."""
    value = 0
    for limb in magnitude:
        value = (value << LIMB_BITS) | limb
    return value
assert 2**32 + 5 == int_from_limbs([1, 5])
