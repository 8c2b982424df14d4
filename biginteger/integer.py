"""
A BigInteger is an immutable signed integer of any size, stored as sign and magnitude.

    assert '-170141183460469231731687303715884105728' == str(-BigInteger(2) ** 127)

Features:
 - exact arithmetic with schoolbook, Karatsuba, and Toom-Cook-3 multiplication
 - schoolbook and Burnikel-Ziegler division
 - numerals in any radix from 2 to 36
 - two's-complement bit operations on negative values
 - a numbers.Integral, so it mixes with Python int in expressions
"""

import numbers
import operator
import sys

from . import errors
from .bits import (
    bit_count,
    bit_length,
    first_nonzero_limb,
    from_twos_complement,
    lowest_set_bit,
    magnitude_bit_length,
    twos_complement_limb,
)
from .divide import divide_magnitudes
from .entropy import random_magnitude
from .limbs import (
    LIMB_BITS,
    LIMB_MASK,
    add_magnitudes,
    add_signed,
    check_length,
    check_range,
    compare_magnitudes,
    int_from_limbs,
    limbs_from_int,
    shift_left,
    shift_right,
    strip_leading_zeros,
)
from .multiply import multiply_magnitudes, square_magnitude
from .radix import format_magnitude, parse


class BigInteger(numbers.Integral):
    """
    Arbitrary precision integer.

    Internally a sign (-1, 0, or +1) and a magnitude, a tuple of 32-bit limbs, most significant first.
    A magnitude never has a leading zero limb, so zero is (0, ()).

        assert (1, (1, 0)) == (BigInteger(2**32).sign, BigInteger(2**32).magnitude)

    Construct from an int, a numeral, or another BigInteger:

        BigInteger(42)
        BigInteger('-ff', 16)
        BigInteger.from_magnitude(-1, [1, 0])

    Instances never change.  Arithmetic returns new instances, or shared constants for small values.

    Two flavors of division:
        named methods divide(), remainder(), divide_and_remainder() truncate toward zero
        operators // % divmod() floor toward negative infinity, like int
    """
    __slots__ = (
        '_sign',
        '_magnitude',
        '_bit_length',
        '_bit_count',
        '_lowest_set_bit',
        '_first_nonzero_limb',
    )
    # NOTE:  The last four are computed on first use.  None means not yet.

    FormatError = errors.FormatError
    RangeError = errors.RangeError
    MagnitudeOverflowError = errors.MagnitudeOverflowError
    DivideByZeroError = errors.DivideByZeroError
    ConstructorTypeError = errors.ConstructorTypeError

    MAX_CONSTANT = 16   # value_of() shares instances for -16 through +16

    ZERO = None
    ONE = None
    TWO = None
    TEN = None
    NEGATIVE_ONE = None
    _positive_constants = None   # [ZERO, 1, 2, ..., MAX_CONSTANT]
    _negative_constants = None   # [ZERO, -1, -2, ..., -MAX_CONSTANT]

    def __init__(self, content=0, radix=10):
        """
        BigInteger(int) or BigInteger(numeral, radix) or BigInteger(BigInteger)

        Prefer value_of() or from_string() where the result could be a shared constant.
        """
        if isinstance(content, BigInteger):
            sign, magnitude = content._sign, content._magnitude
        elif isinstance(content, str):
            sign, magnitude = parse(content, radix)
        elif isinstance(content, int):
            sign, magnitude = _sign_magnitude_from_int(content)
        else:
            raise self.ConstructorTypeError("BigInteger({}) is not supported".format(type_name(content)))
        check_range(magnitude)
        self._assign(sign, magnitude)

    def _assign(self, sign, magnitude):
        self._sign = sign
        self._magnitude = tuple(magnitude)
        self._bit_length = None
        self._bit_count = None
        self._lowest_set_bit = None
        self._first_nonzero_limb = None

    @classmethod
    def _new(cls, sign, magnitude):
        """Wrap an already canonical (sign, magnitude).  No checks."""
        instance = cls.__new__(cls)
        instance._assign(sign, magnitude)
        return instance

    @classmethod
    def _from_canonical(cls, sign, magnitude):
        """Result of an operation:  range-check it, and reuse a shared constant if there is one."""
        check_range(magnitude)
        if not magnitude:
            return cls.ZERO
        if len(magnitude) == 1:
            table = cls._positive_constants if sign > 0 else cls._negative_constants
            if magnitude[0] < len(table):
                return table[magnitude[0]]
        return cls._new(sign, magnitude)

    # Construction
    # ------------
    @classmethod
    def from_string(cls, text, radix=10):
        """
        Parse a numeral.

            assert -255 == BigInteger.from_string('-FF', 16)

        Raise FormatError for a malformed numeral, RangeError for a radix outside 2..36.
        """
        if not isinstance(text, str):
            raise cls.ConstructorTypeError("from_string() needs a str, not {}".format(type_name(text)))
        sign, magnitude = parse(text, radix)
        return cls._from_canonical(sign, magnitude)

    @classmethod
    def from_magnitude(cls, sign, limbs):
        """
        From a sign and a big-endian sequence of 32-bit limbs.

        Leading zero limbs are fine.  A zero sign needs an all-zero magnitude, and vice versa.
        """
        if not isinstance(sign, int) or sign not in (-1, 0, 1):
            raise cls.FormatError("Sign must be -1, 0, or +1, not {!r}".format(sign))
        for limb in limbs:
            if not isinstance(limb, int):
                raise cls.ConstructorTypeError("Limbs must be int, not {}".format(type_name(limb)))
            if not 0 <= limb <= LIMB_MASK:
                raise cls.FormatError("Limb {:#x} out of range for 32 bits".format(limb))
        magnitude = strip_leading_zeros(limbs)
        if (sign == 0) != (not magnitude):
            raise cls.FormatError("Sign/magnitude mismatch, sign {sign} with {n} nonzero limbs".format(
                sign=sign,
                n=len(magnitude),
            ))
        return cls._from_canonical(sign, magnitude)

    @classmethod
    def value_of(cls, n):
        """From an int.  Shares one instance per value from -MAX_CONSTANT to +MAX_CONSTANT."""
        if isinstance(n, BigInteger):
            return n
        if not isinstance(n, int):
            raise cls.ConstructorTypeError("value_of() needs an int, not {}".format(type_name(n)))
        sign, magnitude = _sign_magnitude_from_int(n)
        return cls._from_canonical(sign, magnitude)

    @classmethod
    def random_value(cls, num_bits, entropy_source=None):
        """
        Uniformly random in range(2 ** num_bits).

        entropy_source(num_limbs) returns that many 32-bit ints.  Default is os.urandom().
        """
        magnitude = random_magnitude(num_bits, entropy_source)
        return cls._from_canonical(1 if magnitude else 0, magnitude)

    @classmethod
    def _operand(cls, x):
        """Named methods take a BigInteger or an int, nothing else."""
        if isinstance(x, BigInteger):
            return x
        if isinstance(x, int):
            return cls.value_of(x)
        raise cls.ConstructorTypeError("Expecting BigInteger or int, not {}".format(type_name(x)))

    @classmethod
    def _binary_op(cls, op, input_left, input_right):
        """Two-input operator.  NotImplemented unless both sides are BigInteger or int."""
        if not isinstance(input_left, (BigInteger, int)) or not isinstance(input_right, (BigInteger, int)):
            return NotImplemented
        return op(cls.value_of(input_left), cls.value_of(input_right))

    # Accessors
    # ---------
    @property
    def sign(self):
        return self._sign

    @property
    def magnitude(self):
        """Big-endian tuple of 32-bit limbs, empty for zero."""
        return self._magnitude

    def signum(self):
        return self._sign

    def to_string(self, radix=10):
        """
        Numeral in this radix, lowercase letters for digits 10 and up.

            assert 'zzzzzzzz' == BigInteger.from_string('ZZZZZZZZ', 36).to_string(36)
        """
        return format_magnitude(self._sign, self._magnitude, radix)

    # Sign and magnitude arithmetic
    # -----------------------------
    def add(self, other):
        other = self._operand(other)
        if other._sign == 0:
            return self
        if self._sign == 0:
            return other
        sign, magnitude = add_signed(self._sign, self._magnitude, other._sign, other._magnitude)
        return self._from_canonical(sign, magnitude)

    def subtract(self, other):
        other = self._operand(other)
        if other._sign == 0:
            return self
        if self._sign == 0:
            return other.negate()
        sign, magnitude = add_signed(self._sign, self._magnitude, -other._sign, other._magnitude)
        return self._from_canonical(sign, magnitude)

    def negate(self):
        if self._sign == 0:
            return self
        return self._from_canonical(-self._sign, self._magnitude)

    def abs(self):
        return self.negate() if self._sign < 0 else self

    def multiply(self, other):
        other = self._operand(other)
        if self._sign == 0 or other._sign == 0:
            return self.ZERO
        check_length(len(self._magnitude) + len(other._magnitude) - 1)
        magnitude = multiply_magnitudes(self._magnitude, other._magnitude)
        return self._from_canonical(self._sign * other._sign, magnitude)

    def square(self):
        if self._sign == 0:
            return self.ZERO
        check_length(2 * len(self._magnitude) - 1)
        return self._from_canonical(1, square_magnitude(self._magnitude))

    def divide_and_remainder(self, other):
        """
        (quotient, remainder), truncating toward zero.

        The remainder has the sign of self (or is zero), and is smaller in magnitude than other.
        """
        other = self._operand(other)
        if other._sign == 0:
            raise self.DivideByZeroError("BigInteger divide by zero")
        quotient, remainder = divide_magnitudes(self._magnitude, other._magnitude)
        return (
            self._from_canonical(self._sign * other._sign, quotient),
            self._from_canonical(self._sign, remainder),
        )

    def divide(self, other):
        return self.divide_and_remainder(other)[0]

    def remainder(self, other):
        return self.divide_and_remainder(other)[1]

    def mod(self, modulus):
        """Residue in range(modulus), never negative."""
        modulus = self._operand(modulus)
        if modulus._sign <= 0:
            raise self.RangeError("Modulus must be positive, not {}".format(modulus))
        residue = self.remainder(modulus)
        return residue.add(modulus) if residue._sign < 0 else residue

    def _floor_divmod(self, other):
        """(quotient, remainder) rounding toward negative infinity, as int does."""
        quotient, remainder = self.divide_and_remainder(other)
        if remainder._sign != 0 and remainder._sign != other._sign:
            quotient = quotient.subtract(self.ONE)
            remainder = remainder.add(other)
        return quotient, remainder

    def pow(self, exponent):
        """
        self ** exponent by square-and-multiply, for exponent >= 0.

        Trailing zero bits of the base are pulled out first, and put back as one shift at the end.
        """
        exponent = _exponent_from(exponent)
        if exponent < 0:
            raise self.RangeError("Negative exponent {}".format(exponent))
        if exponent == 0:
            return self.ONE
        if self._sign == 0:
            return self.ZERO

        minimum_bits = (magnitude_bit_length(self._magnitude) - 1) * exponent + 1
        check_length((minimum_bits + LIMB_BITS - 1) // LIMB_BITS)

        zeros = self.lowest_set_bit()
        base = shift_right(self._magnitude, zeros)
        result = [1]
        for bit in bin(exponent)[2:]:
            result = square_magnitude(result)
            if bit == '1':
                result = multiply_magnitudes(result, base)
        check_length((magnitude_bit_length(result) + zeros * exponent + LIMB_BITS - 1) // LIMB_BITS)
        result = shift_left(result, zeros * exponent)

        sign = -1 if self._sign < 0 and exponent & 1 else 1
        return self._from_canonical(sign, result)

    def _mod_pow(self, exponent, modulus):
        """pow(self, exponent, modulus), reduced after every step.  Not a public method."""
        base = self.mod(modulus)
        result = self.ONE.mod(modulus)
        for bit in bin(exponent)[2:]:
            result = result.square().mod(modulus)
            if bit == '1':
                result = result.multiply(base).mod(modulus)
        return result

    def gcd(self, other):
        """Greatest common divisor, never negative.  gcd(0, 0) is 0."""
        a = self.abs()
        b = self._operand(other).abs()
        while b._sign != 0:
            a, b = b, a.remainder(b)
        return a

    # Comparison
    # ----------
    def compare_to(self, other):
        """-1, 0, or +1 as self is less than, equal to, or greater than other."""
        other = self._operand(other)
        if self._sign != other._sign:
            return -1 if self._sign < other._sign else 1
        return self._sign * compare_magnitudes(self._magnitude, other._magnitude)

    def min(self, other):
        other = self._operand(other)
        return self if self.compare_to(other) < 0 else other

    def max(self, other):
        other = self._operand(other)
        return self if self.compare_to(other) > 0 else other

    # Shifts
    # ------
    def shift_left(self, n):
        """self * 2**n.  A negative n shifts right instead."""
        n = operator.index(n)
        if n < 0:
            return self.shift_right(-n)
        if self._sign == 0 or n == 0:
            return self
        check_length((magnitude_bit_length(self._magnitude) + n + LIMB_BITS - 1) // LIMB_BITS)
        return self._from_canonical(self._sign, shift_left(self._magnitude, n))

    def shift_right(self, n):
        """
        floor(self / 2**n).  A negative n shifts left instead.

        Negative values round toward negative infinity, as if in two's complement:

            assert -1 == BigInteger(-1).shift_right(100)
        """
        n = operator.index(n)
        if n < 0:
            return self.shift_left(-n)
        if self._sign == 0 or n == 0:
            return self
        magnitude = shift_right(self._magnitude, n)
        if self._sign < 0 and self.lowest_set_bit() < n:
            magnitude = add_magnitudes(magnitude, [1])
        return self._from_canonical(self._sign if magnitude else 0, magnitude)

    # Two's-complement bitwise operations
    # -----------------------------------
    def _int_length(self):
        """Limbs needed to hold self in two's complement, sign bit included."""
        return (self.bit_length() >> 5) + 1

    def _limb_at(self, n):
        """Limb n (0 = least significant) of the infinite two's-complement form."""
        return twos_complement_limb(self._sign, self._magnitude, n, self._first_nonzero())

    def _bitwise(self, other, op):
        other = self._operand(other)
        length = max(self._int_length(), other._int_length())
        limbs = [
            op(self._limb_at(n), other._limb_at(n)) & LIMB_MASK
            for n in range(length - 1, -1, -1)
        ]
        return self._from_canonical(*from_twos_complement(limbs))

    def and_(self, other):
        return self._bitwise(other, operator.and_)

    def or_(self, other):
        return self._bitwise(other, operator.or_)

    def xor(self, other):
        return self._bitwise(other, operator.xor)

    def and_not(self, other):
        """self & ~other"""
        return self._bitwise(other, lambda a, b: a & ~b)

    def not_(self):
        """~self, which is -self - 1"""
        return self.negate().subtract(self.ONE)

    def test_bit(self, n):
        """Is bit n set in the two's-complement form?  Any bit past the top is the sign."""
        n = self._check_bit_address(n)
        return (self._limb_at(n >> 5) >> (n & 31)) & 1 == 1

    def set_bit(self, n):
        return self._with_bit(n, lambda limb, mask: limb | mask)

    def clear_bit(self, n):
        return self._with_bit(n, lambda limb, mask: limb & ~mask)

    def flip_bit(self, n):
        return self._with_bit(n, lambda limb, mask: limb ^ mask)

    def _with_bit(self, n, op):
        n = self._check_bit_address(n)
        limb_index = n >> 5
        length = max(self._int_length(), limb_index + 2)
        limbs = [self._limb_at(i) for i in range(length - 1, -1, -1)]
        position = length - 1 - limb_index
        limbs[position] = op(limbs[position], 1 << (n & 31)) & LIMB_MASK
        return self._from_canonical(*from_twos_complement(limbs))

    def _check_bit_address(self, n):
        n = operator.index(n)
        if n < 0:
            raise self.RangeError("Negative bit address {}".format(n))
        return n

    # Bit queries, computed once per instance
    # ---------------------------------------
    def bit_length(self):
        """
        Bits in the minimal two's-complement form, not counting the sign bit.

            assert 127 == BigInteger(-2**127).bit_length()
        """
        if self._bit_length is None:
            self._bit_length = bit_length(self._sign, self._magnitude)
        return self._bit_length

    def bit_count(self):
        """Bits in the two's-complement form that differ from the sign bit."""
        if self._bit_count is None:
            self._bit_count = bit_count(self._sign, self._magnitude)
        return self._bit_count

    def lowest_set_bit(self):
        """Index of the rightmost one bit, or -1 for zero."""
        if self._lowest_set_bit is None:
            self._lowest_set_bit = lowest_set_bit(self._magnitude)
        return self._lowest_set_bit

    def _first_nonzero(self):
        if self._first_nonzero_limb is None:
            self._first_nonzero_limb = first_nonzero_limb(self._magnitude)
        return self._first_nonzero_limb

    # Python numeric protocol
    # -----------------------
    def __add__(self, other): return self._binary_op(BigInteger.add, self, other)
    def __radd__(self, other): return self._binary_op(BigInteger.add, other, self)
    def __sub__(self, other): return self._binary_op(BigInteger.subtract, self, other)
    def __rsub__(self, other): return self._binary_op(BigInteger.subtract, other, self)
    def __mul__(self, other): return self._binary_op(BigInteger.multiply, self, other)
    def __rmul__(self, other): return self._binary_op(BigInteger.multiply, other, self)
    def __floordiv__(self, other): return self._binary_op(_floor_quotient, self, other)
    def __rfloordiv__(self, other): return self._binary_op(_floor_quotient, other, self)
    def __mod__(self, other): return self._binary_op(_floor_remainder, self, other)
    def __rmod__(self, other): return self._binary_op(_floor_remainder, other, self)
    def __divmod__(self, other): return self._binary_op(BigInteger._floor_divmod, self, other)
    def __rdivmod__(self, other): return self._binary_op(BigInteger._floor_divmod, other, self)
    def __truediv__(self, other): return self._binary_op(_true_quotient, self, other)
    def __rtruediv__(self, other): return self._binary_op(_true_quotient, other, self)
    def __and__(self, other): return self._binary_op(BigInteger.and_, self, other)
    def __rand__(self, other): return self._binary_op(BigInteger.and_, other, self)
    def __or__(self, other): return self._binary_op(BigInteger.or_, self, other)
    def __ror__(self, other): return self._binary_op(BigInteger.or_, other, self)
    def __xor__(self, other): return self._binary_op(BigInteger.xor, self, other)
    def __rxor__(self, other): return self._binary_op(BigInteger.xor, other, self)
    def __lshift__(self, other): return self._binary_op(_shifted_left, self, other)
    def __rlshift__(self, other): return self._binary_op(_shifted_left, other, self)
    def __rshift__(self, other): return self._binary_op(_shifted_right, self, other)
    def __rrshift__(self, other): return self._binary_op(_shifted_right, other, self)

    def __neg__(self): return self.negate()
    def __pos__(self): return self
    def __abs__(self): return self.abs()
    def __invert__(self): return self.not_()

    def __pow__(self, exponent, modulus=None):
        """
        self ** exponent, or pow(self, exponent, modulus)

        Unlike int, a negative exponent raises RangeError instead of going to float.
        """
        if not isinstance(exponent, (BigInteger, int)):
            return NotImplemented
        if modulus is None:
            return self.pow(exponent)
        if not isinstance(modulus, (BigInteger, int)):
            return NotImplemented
        exponent = _exponent_from(exponent)
        modulus = self.value_of(modulus)
        if exponent < 0:
            raise self.RangeError("Negative exponent {}".format(exponent))
        if modulus._sign <= 0:
            raise self.RangeError("Modulus must be positive, not {}".format(modulus))
        return self._mod_pow(exponent, modulus)

    def __rpow__(self, base, modulus=None):
        if not isinstance(base, int):
            return NotImplemented
        return self.value_of(base).__pow__(self, modulus)

    def __int__(self):
        return self._sign * int_from_limbs(self._magnitude)

    def __float__(self):
        return float(int(self))

    def __bool__(self):
        return self._sign != 0

    def __trunc__(self): return self
    def __floor__(self): return self
    def __ceil__(self): return self

    def __round__(self, ndigits=None):
        """Like int, round(x, -n) rounds to a multiple of 10**n, ties to even."""
        if ndigits is None or ndigits >= 0:
            return self
        power = self.TEN.pow(-ndigits)
        quotient, remainder = self._floor_divmod(power)
        twice = remainder.shift_left(1)
        comparison = twice.compare_to(power)
        if comparison > 0 or (comparison == 0 and quotient.test_bit(0)):
            quotient = quotient.add(self.ONE)
        return quotient.multiply(power)

    def __eq__(self, other):
        if not isinstance(other, (BigInteger, int)):
            return NotImplemented
        other = self.value_of(other)
        return self._sign == other._sign and self._magnitude == other._magnitude

    def __ne__(self, other):
        eq_result = self.__eq__(other)
        if eq_result is NotImplemented:
            return NotImplemented
        return not eq_result

    def __lt__(self, other): return self._binary_op(lambda a, b: a.compare_to(b) <  0, self, other)
    def __le__(self, other): return self._binary_op(lambda a, b: a.compare_to(b) <= 0, self, other)
    def __gt__(self, other): return self._binary_op(lambda a, b: a.compare_to(b) >  0, self, other)
    def __ge__(self, other): return self._binary_op(lambda a, b: a.compare_to(b) >= 0, self, other)

    def __hash__(self):
        """Same as hash(int(self)), without building the int."""
        # SEE:  Hashing of numeric types, https://docs.python.org/3/library/stdtypes.html#hashing-of-numeric-types
        modulus = sys.hash_info.modulus
        residue = 0
        for limb in self._magnitude:
            residue = ((residue << LIMB_BITS) | limb) % modulus
        if self._sign < 0:
            residue = -residue
        return -2 if residue == -1 else residue

    def __getstate__(self):
        """For the 'pickle' package, object serialization."""
        return self._sign, self._magnitude

    def __setstate__(self, state):
        """For the 'pickle' package, object serialization."""
        sign, magnitude = state
        canonical = self.from_magnitude(sign, magnitude)
        self._assign(canonical._sign, canonical._magnitude)

    def __repr__(self):
        return "BigInteger('{}')".format(self.to_string())

    def __str__(self):
        return self.to_string()

    @classmethod
    def internal_setup(cls):
        """Initialize BigInteger constants after the BigInteger class is defined."""
        cls.ZERO = cls._new(0, ())
        cls._positive_constants = [cls.ZERO] + [cls._new(+1, (i,)) for i in range(1, cls.MAX_CONSTANT + 1)]
        cls._negative_constants = [cls.ZERO] + [cls._new(-1, (i,)) for i in range(1, cls.MAX_CONSTANT + 1)]
        cls.ONE = cls._positive_constants[1]
        cls.TWO = cls._positive_constants[2]
        cls.TEN = cls._positive_constants[10]
        cls.NEGATIVE_ONE = cls._negative_constants[1]


# Operator helpers
# ----------------
# Plain functions of two BigIntegers, so _binary_op() can apply them in either order.
def _floor_quotient(a, b):
    return a._floor_divmod(b)[0]


def _floor_remainder(a, b):
    return a._floor_divmod(b)[1]


def _true_quotient(a, b):
    if b.signum() == 0:
        raise BigInteger.DivideByZeroError("BigInteger division by zero")
    return int(a) / int(b)


def _shifted_left(a, b):
    count = int(b)
    if count < 0:
        raise BigInteger.RangeError("Negative shift count {}".format(count))
    return a.shift_left(count)


def _shifted_right(a, b):
    count = int(b)
    if count < 0:
        raise BigInteger.RangeError("Negative shift count {}".format(count))
    return a.shift_right(count)


def _sign_magnitude_from_int(n):
    if n < 0:
        return -1, limbs_from_int(-n)
    elif n > 0:
        return 1, limbs_from_int(n)
    else:
        return 0, []


def _exponent_from(exponent):
    if not isinstance(exponent, (BigInteger, int)):
        raise BigInteger.ConstructorTypeError("Exponent must be an int, not {}".format(type_name(exponent)))
    return operator.index(exponent)


def type_name(x):
    """
    Describe (very briefly) what type of object this is.

    THANKS:  http://stackoverflow.com/a/5008854/673991
    """
    return type(x).__name__
assert 'int' == type_name(3)
assert 'list' == type_name([])


BigInteger.internal_setup()
assert BigInteger.ZERO.magnitude == ()
assert BigInteger.ONE is BigInteger.value_of(1)
assert BigInteger.NEGATIVE_ONE is BigInteger.value_of(-1)
assert 'BigInteger' == type_name(BigInteger.TEN)
