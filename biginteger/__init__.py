"""
biginteger - immutable arbitrary precision integers.

Usage example:

    import biginteger

    big = biginteger.BigInteger.from_string('170141183460469231731687303715884105728')
    assert big.bit_length() == 128
    assert big + -big == biginteger.BigInteger.ZERO

Usage example:

    from biginteger import BigInteger

    q, r = BigInteger(-7).divide_and_remainder(2)   # truncates:  -3, -1
    q, r = divmod(BigInteger(-7), 2)                # floors:  -4, 1
"""

from .integer import BigInteger
from .errors import ConstructorTypeError
from .errors import DivideByZeroError
from .errors import FormatError
from .errors import MagnitudeOverflowError
from .errors import RangeError

__all__ = [
    'BigInteger',
    'ConstructorTypeError',
    'DivideByZeroError',
    'FormatError',
    'MagnitudeOverflowError',
    'RangeError',
]

from . import version
__version__ = version.__doc__
