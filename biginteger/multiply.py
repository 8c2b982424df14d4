"""
Multiplication engine for magnitudes.

Three strategies, picked by the limb length of the longer operand:

    n < KARATSUBA_THRESHOLD                          schoolbook, O(n**2)
    KARATSUBA_THRESHOLD <= n < TOOM_COOK_THRESHOLD   Karatsuba, O(n**1.585)
    TOOM_COOK_THRESHOLD <= n                         Toom-Cook-3, O(n**1.465)

Squaring (the same magnitude object on both sides) has its own pair of thresholds,
because a square only needs the cross products once.

All strategies produce the same limbs.  Only the cost differs.
The thresholds are read at call time, so they can be rebound to force a strategy.

SEE:  Knuth, TAOCP Vol. 2, 4.3.3
SEE:  Bodrato and Zanoni, "What about Toom-Cook matrices optimality?"
"""

from .limbs import (
    LIMB_BITS,
    LIMB_MASK,
    add_magnitudes,
    add_signed,
    divide_by_limb,
    lower_limbs,
    multiply_by_limb,
    shift_left,
    shift_left_limbs,
    shift_right,
    strip_leading_zeros,
    subtract_magnitudes,
    upper_limbs,
)


KARATSUBA_THRESHOLD = 80
TOOM_COOK_THRESHOLD = 240
KARATSUBA_SQUARE_THRESHOLD = 128
TOOM_COOK_SQUARE_THRESHOLD = 216
# NOTE:  Karatsuba only shrinks its operands from 4 limbs up, Toom-Cook-3 from 3 limbs up.
#        So never set a Karatsuba threshold below 4 or a Toom-Cook threshold below 3.


def multiply_magnitudes(x, y):
    """Unsigned product, dispatched on operand length."""
    if not x or not y:
        return []
    if x is y:
        return square_magnitude(x)
    if len(y) == 1:
        return multiply_by_limb(x, y[0])
    if len(x) == 1:
        return multiply_by_limb(y, x[0])
    n = max(len(x), len(y))
    if n < KARATSUBA_THRESHOLD:
        return multiply_schoolbook(x, y)
    elif n < TOOM_COOK_THRESHOLD:
        return multiply_karatsuba(x, y)
    else:
        return multiply_toom_cook_3(x, y)


def square_magnitude(x):
    """Unsigned x * x, dispatched on length."""
    if not x:
        return []
    n = len(x)
    if n < KARATSUBA_SQUARE_THRESHOLD:
        return square_schoolbook(x)
    elif n < TOOM_COOK_SQUARE_THRESHOLD:
        return square_karatsuba(x)
    else:
        return square_toom_cook_3(x)


# Schoolbook
# ----------
def multiply_schoolbook(x, y):
    """
    Row-by-row accumulation of x[i] * y[j] into a len(x) + len(y) scratch list.

    With big-endian indexes, the low word of x[i] * y[j] lands at position i + j + 1.
    """
    x_length = len(x)
    y_length = len(y)
    z = [0] * (x_length + y_length)
    for i in range(x_length - 1, -1, -1):
        x_limb = x[i]
        carry = 0
        k = i + y_length
        for j in range(y_length - 1, -1, -1):
            product = x_limb * y[j] + z[k] + carry
            z[k] = product & LIMB_MASK
            carry = product >> LIMB_BITS
            k -= 1
        z[i] = carry
    return strip_leading_zeros(z)


def square_schoolbook(x):
    """
    Sum each cross product x[i] * x[j] (i < j) once, double it, then add the diagonal squares.
    """
    n = len(x)
    z = [0] * (2 * n)
    for i in range(n - 1, -1, -1):
        x_limb = x[i]
        carry = 0
        k = i + n
        for j in range(n - 1, i, -1):
            product = x_limb * x[j] + z[k] + carry
            z[k] = product & LIMB_MASK
            carry = product >> LIMB_BITS
            k -= 1
        z[k] = carry

    carry = 0
    for k in range(2 * n - 1, -1, -1):
        doubled = (z[k] << 1) | carry
        z[k] = doubled & LIMB_MASK
        carry = doubled >> LIMB_BITS
    assert carry == 0

    carry = 0
    for i in range(n - 1, -1, -1):
        square = x[i] * x[i]
        low = z[2 * i + 1] + (square & LIMB_MASK) + carry
        z[2 * i + 1] = low & LIMB_MASK
        high = z[2 * i] + (square >> LIMB_BITS) + (low >> LIMB_BITS)
        z[2 * i] = high & LIMB_MASK
        carry = high >> LIMB_BITS
    assert carry == 0
    return strip_leading_zeros(z)


# Karatsuba
# ---------
def multiply_karatsuba(x, y):
    """
    Split both operands at limb position ceil(n/2):

        x = xh * B + xl,  y = yh * B + yl,  B = 2**(32 * half)
        x * y = z2 * B**2 + z1 * B + z0
        z2 = xh * yh
        z0 = xl * yl
        z1 = (xh + xl) * (yh + yl) - z2 - z0

    Three half-size products instead of four.
    """
    half = (max(len(x), len(y)) + 1) // 2
    x_high, x_low = upper_limbs(x, half), lower_limbs(x, half)
    y_high, y_low = upper_limbs(y, half), lower_limbs(y, half)

    z2 = multiply_magnitudes(x_high, y_high)
    z0 = multiply_magnitudes(x_low, y_low)
    z1 = multiply_magnitudes(add_magnitudes(x_high, x_low), add_magnitudes(y_high, y_low))
    z1 = subtract_magnitudes(subtract_magnitudes(z1, z2), z0)

    result = add_magnitudes(shift_left_limbs(z2, half), z1)
    return add_magnitudes(shift_left_limbs(result, half), z0)


def square_karatsuba(x):
    """Karatsuba with xh == yh and xl == yl, so every sub-product is itself a square."""
    half = (len(x) + 1) // 2
    x_high, x_low = upper_limbs(x, half), lower_limbs(x, half)

    z2 = square_magnitude(x_high)
    z0 = square_magnitude(x_low)
    z1 = square_magnitude(add_magnitudes(x_high, x_low))
    z1 = subtract_magnitudes(subtract_magnitudes(z1, z2), z0)

    result = add_magnitudes(shift_left_limbs(z2, half), z1)
    return add_magnitudes(shift_left_limbs(result, half), z0)


# Toom-Cook-3
# -----------
# Intermediate values in Toom-Cook go negative, so they are (sign, magnitude) pairs here.
def _positive(magnitude):
    return (1 if magnitude else 0), list(magnitude)


def _plus(a, b):
    return add_signed(a[0], a[1], b[0], b[1])


def _minus(a, b):
    return add_signed(a[0], a[1], -b[0], b[1])


def _times(a, b):
    magnitude = multiply_magnitudes(a[1], b[1])
    return (a[0] * b[0] if magnitude else 0), magnitude


def _squared(a):
    return _positive(square_magnitude(a[1]))


def _doubled(a):
    return a[0], shift_left(a[1], 1)


def _exact_half(a):
    sign, magnitude = a
    assert not magnitude or magnitude[-1] & 1 == 0, "Toom-Cook interpolation lost a bit"
    magnitude = shift_right(magnitude, 1)
    return (sign if magnitude else 0), magnitude


def _exact_third(a):
    sign, magnitude = a
    quotient, remainder = divide_by_limb(magnitude, 3)
    assert remainder == 0, "Toom-Cook interpolation is not divisible by 3"
    return (sign if quotient else 0), quotient


def _toom_slices(x, k):
    """Split x into (top, middle, bottom), the bottom two exactly k limbs wide, aligned at the low end."""
    return (
        _positive(upper_limbs(x, 2 * k)),
        _positive(lower_limbs(upper_limbs(x, k), k)),
        _positive(lower_limbs(x, k)),
    )


def multiply_toom_cook_3(x, y):
    """
    Evaluate both 3-piece polynomials at 0, 1, -1, 2 and infinity, multiply pointwise, interpolate.

    Five sub-products of a third the size.
    """
    k = (max(len(x), len(y)) + 2) // 3
    a2, a1, a0 = _toom_slices(x, k)
    b2, b1, b0 = _toom_slices(y, k)

    v0 = _times(a0, b0)
    da1 = _plus(a2, a0)
    db1 = _plus(b2, b0)
    vm1 = _times(_minus(da1, a1), _minus(db1, b1))
    da1 = _plus(da1, a1)
    db1 = _plus(db1, b1)
    v1 = _times(da1, db1)
    v2 = _times(
        _minus(_doubled(_plus(da1, a2)), a0),
        _minus(_doubled(_plus(db1, b2)), b0),
    )
    vinf = _times(a2, b2)
    return _toom_interpolate(v0, v1, v2, vm1, vinf, k)


def square_toom_cook_3(x):
    """Toom-Cook-3 where every pointwise product is a square."""
    k = (len(x) + 2) // 3
    a2, a1, a0 = _toom_slices(x, k)

    v0 = _squared(a0)
    da1 = _plus(a2, a0)
    vm1 = _squared(_minus(da1, a1))
    da1 = _plus(da1, a1)
    v1 = _squared(da1)
    vinf = _squared(a2)
    v2 = _squared(_minus(_doubled(_plus(da1, a2)), a0))
    return _toom_interpolate(v0, v1, v2, vm1, vinf, k)


def _toom_interpolate(v0, v1, v2, vm1, vinf, k):
    """
    Bodrato's interpolation sequence:  two exact halvings and one exact division by 3.

    Then recombine vinf*B**4 + t2*B**3 + t1*B**2 + tm1*B + v0, where B = 2**(32*k).
    """
    t2 = _exact_third(_minus(v2, vm1))
    tm1 = _exact_half(_minus(v1, vm1))
    t1 = _minus(v1, v0)
    t2 = _exact_half(_minus(t2, t1))
    t1 = _minus(_minus(t1, tm1), vinf)
    t2 = _minus(t2, _doubled(vinf))
    tm1 = _minus(tm1, t2)

    result = vinf
    for coefficient in (t2, t1, tm1, v0):
        result = _plus((result[0], shift_left_limbs(result[1], k)), coefficient)
    sign, magnitude = result
    assert sign >= 0
    return magnitude
