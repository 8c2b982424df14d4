"""
Exceptions raised by BigInteger and its engines.

Each one derives from the builtin a Python programmer would already catch,
e.g. a malformed numeral is a ValueError just like int('nonsense') is.
They are also attached to the BigInteger class, so callers can say
BigInteger.FormatError without importing this module.
"""


class FormatError(ValueError):
    """e.g. BigInteger.from_string('1-2') or BigInteger.from_magnitude(0, [5])"""


class RangeError(ValueError):
    """e.g. BigInteger.from_string('10', radix=37) or BigInteger.random_value(-1)"""


class MagnitudeOverflowError(OverflowError):
    """The magnitude would need more than MAX_MAG_LENGTH limbs."""


class DivideByZeroError(ZeroDivisionError):
    """e.g. BigInteger.ONE.divide(BigInteger.ZERO)"""


class ConstructorTypeError(TypeError):
    """e.g. BigInteger.value_of(3.5) or BigInteger.value_of('3')"""
