"""
Division engine for magnitudes.

    quotient, remainder = divide_magnitudes(a, b)
    assert a == quotient * b + remainder and remainder < b

Two strategies:
    schoolbook long division (Knuth's Algorithm D) for short divisors or short quotients
    Burnikel-Ziegler recursive division otherwise

Signs are the caller's business.  Everything here is unsigned.

SEE:  Knuth, TAOCP Vol. 2, 4.3.1, Algorithm D
SEE:  Burnikel and Ziegler, "Fast Recursive Division", MPI-I-98-1-022
"""

from .bits import magnitude_bit_length
from .limbs import (
    LIMB_BITS,
    LIMB_MASK,
    add_magnitudes,
    compare_magnitudes,
    divide_by_limb,
    join_limbs,
    lower_limbs,
    shift_left,
    shift_left_limbs,
    shift_right,
    strip_leading_zeros,
    subtract_magnitudes,
    upper_limbs,
)
from .multiply import multiply_magnitudes


BURNIKEL_ZIEGLER_THRESHOLD = 80
BURNIKEL_ZIEGLER_OFFSET = 40


def divide_magnitudes(a, b):
    """Unsigned (quotient, remainder) for a nonempty divisor b."""
    assert b, "divide_magnitudes() by zero"
    if compare_magnitudes(a, b) < 0:
        return [], list(a)
    if len(b) < BURNIKEL_ZIEGLER_THRESHOLD or len(a) - len(b) < BURNIKEL_ZIEGLER_OFFSET:
        return divide_knuth(a, b)
    else:
        return divide_burnikel_ziegler(a, b)


# Schoolbook
# ----------
def divide_knuth(a, b):
    """
    Long division, one quotient limb per step.

    Normalize so the divisor's top bit is set.  Then each quotient limb estimated from the
    top two remainder limbs and the top divisor limb is at most 2 too big.
    A check against the second divisor limb catches nearly every overestimate,
    and a rare add-back fixes the rest.
    """
    comparison = compare_magnitudes(a, b)
    if comparison < 0:
        return [], list(a)
    if comparison == 0:
        return [1], []
    if len(b) == 1:
        quotient, remainder = divide_by_limb(a, b[0])
        return quotient, ([remainder] if remainder else [])

    shift = LIMB_BITS - b[0].bit_length()
    # NOTE:  Little-endian scratch lists from here on, so index i has weight 2**(32*i).
    divisor = shift_left(b, shift)[::-1]
    dividend = shift_left(a, shift)
    remainder = ([0] * (len(a) + 1 - len(dividend)) + dividend)[::-1]
    n = len(divisor)
    m = len(a) - n
    quotient = [0] * (m + 1)
    divisor_top = divisor[n - 1]
    divisor_next = divisor[n - 2]

    for j in range(m, -1, -1):
        numerator = (remainder[j + n] << LIMB_BITS) | remainder[j + n - 1]
        q_hat, r_hat = divmod(numerator, divisor_top)
        while q_hat > LIMB_MASK or q_hat * divisor_next > ((r_hat << LIMB_BITS) | remainder[j + n - 2]):
            q_hat -= 1
            r_hat += divisor_top
            if r_hat > LIMB_MASK:
                break

        carry = 0
        borrow = 0
        for i in range(n):
            product = q_hat * divisor[i] + carry
            carry = product >> LIMB_BITS
            difference = remainder[i + j] - (product & LIMB_MASK) - borrow
            remainder[i + j] = difference & LIMB_MASK
            borrow = 1 if difference < 0 else 0
        difference = remainder[j + n] - carry - borrow
        remainder[j + n] = difference & LIMB_MASK

        if difference < 0:
            q_hat -= 1
            carry = 0
            for i in range(n):
                total = remainder[i + j] + divisor[i] + carry
                remainder[i + j] = total & LIMB_MASK
                carry = total >> LIMB_BITS
            remainder[j + n] = (remainder[j + n] + carry) & LIMB_MASK

        quotient[j] = q_hat

    return (
        strip_leading_zeros(quotient[::-1]),
        shift_right(strip_leading_zeros(remainder[:n][::-1]), shift),
    )


# Burnikel-Ziegler
# ----------------
def divide_burnikel_ziegler(a, b):
    """
    Recursive division.  Cut the dividend into blocks as wide as the (padded) divisor,
    then do schoolbook division where each "digit" is a whole block.
    Each block step is a 2-block by 1-block division, done recursively by halves.
    """
    s = len(b)
    m = 1 << (s // BURNIKEL_ZIEGLER_THRESHOLD).bit_length()
    j = (s + m - 1) // m
    n = j * m   # block width in limbs, a multiple of a power of 2
    n_bits = LIMB_BITS * n
    sigma = max(0, n_bits - magnitude_bit_length(b))
    b_shifted = shift_left(b, sigma)   # exactly n limbs, top bit set
    a_shifted = shift_left(a, sigma)
    t = max(2, (magnitude_bit_length(a_shifted) + n_bits) // n_bits)   # blocks, with room for one more bit

    z = upper_limbs(a_shifted, (t - 2) * n)   # the top two blocks
    quotient = []
    for i in range(t - 2, 0, -1):
        q_i, r_i = _divide_2n_1n(z, b_shifted)
        z = join_limbs(r_i, _block(a_shifted, i - 1, n), n)
        quotient = add_magnitudes(quotient, shift_left_limbs(q_i, i * n))
    q_i, r_i = _divide_2n_1n(z, b_shifted)
    quotient = add_magnitudes(quotient, q_i)
    return quotient, shift_right(r_i, sigma)


def _block(magnitude, i, n):
    """Block i (0 = least significant) of n limbs each."""
    return lower_limbs(upper_limbs(magnitude, i * n), n)


def _divide_2n_1n(a, b):
    """
    Divide a by an n-limb normalized b, where a < b * 2**(32*n).

    Splits a into four half-blocks and does two 3-by-2 divisions.
    """
    n = len(b)
    if n % 2 != 0 or n < BURNIKEL_ZIEGLER_THRESHOLD:
        return divide_knuth(a, b)
    half = n // 2

    q1, r1 = _divide_3n_2n(upper_limbs(a, half), b)
    q2, r2 = _divide_3n_2n(join_limbs(r1, lower_limbs(a, half), half), b)
    return join_limbs(q1, q2, half), r2


def _divide_3n_2n(a, b):
    """
    Divide a (3 half-blocks) by b (2 half-blocks), where a < b * 2**(32*half).

    Estimate the quotient from the top two half-blocks of a and the top half-block of b.
    The estimate is at most 2 too big.
    """
    half = len(b) // 2
    a1 = upper_limbs(a, 2 * half)
    a12 = upper_limbs(a, half)
    b1 = upper_limbs(b, half)
    b2 = lower_limbs(b, half)

    if compare_magnitudes(a1, b1) < 0:
        quotient, r = _divide_2n_1n(a12, b1)
        d = multiply_magnitudes(quotient, b2)
    else:
        # NOTE:  Here a1 == b1, so the quotient half-block is all ones.
        quotient = [LIMB_MASK] * half
        r = subtract_magnitudes(add_magnitudes(a12, b1), shift_left_limbs(b1, half))
        d = subtract_magnitudes(shift_left_limbs(b2, half), b2)

    r = join_limbs(r, lower_limbs(a, half), half)
    while compare_magnitudes(r, d) < 0:
        r = add_magnitudes(r, b)
        quotient = subtract_magnitudes(quotient, [1])
    return quotient, subtract_magnitudes(r, d)
