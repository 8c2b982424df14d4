"""
Random magnitudes.

An entropy source is any callable taking a limb count and returning that many unsigned 32-bit ints.

    def entropy_source(num_limbs):
        return [random.getrandbits(32) for _ in range(num_limbs)]

The default draws from the operating system.
"""

import logging
import os
import struct

from .errors import RangeError
from .limbs import LIMB_BITS, LIMB_MASK, check_length, strip_leading_zeros


_logger = logging.getLogger(__name__)


def system_entropy(num_limbs):
    """num_limbs unsigned 32-bit ints from os.urandom()."""
    return list(struct.unpack('>{}I'.format(num_limbs), os.urandom(4 * num_limbs)))


def random_magnitude(num_bits, entropy_source=None):
    """
    Uniformly random magnitude in range(2 ** num_bits).

    Bits above num_bits in the top limb are masked off, whatever the source returned there.
    """
    if num_bits < 0:
        raise RangeError("num_bits must be non-negative, not {}".format(num_bits))
    if num_bits == 0:
        return []
    num_limbs = (num_bits + LIMB_BITS - 1) // LIMB_BITS
    check_length(num_limbs)
    if entropy_source is None:
        entropy_source = system_entropy

    _logger.debug("Requesting %d random limbs for %d bits", num_limbs, num_bits)
    limbs = list(entropy_source(num_limbs))
    if len(limbs) != num_limbs:
        raise RangeError("Entropy source returned {got} limbs, expected {expected}".format(
            got=len(limbs),
            expected=num_limbs,
        ))
    limbs = [limb & LIMB_MASK for limb in limbs]
    excess_bits = num_limbs * LIMB_BITS - num_bits
    limbs[0] &= LIMB_MASK >> excess_bits
    return strip_leading_zeros(limbs)
