"""
Testing biginteger bits.py
"""

import unittest

from hypothesis import given
from hypothesis.strategies import integers

from biginteger import bits
from biginteger.limbs import LIMB_MASK, limbs_from_int


values = integers(min_value=-2**300, max_value=2**300)


def sign_magnitude(n):
    return (n > 0) - (n < 0), limbs_from_int(abs(n))


def twos_complement_popcount(n):
    """Bits that differ from the sign bit, the reference way."""
    return bin(n if n >= 0 else ~n).count('1')


class BitsTests(unittest.TestCase):

    def assertBitLength(self, expected, n):
        self.assertEqual(expected, bits.bit_length(*sign_magnitude(n)), "bit_length({})".format(n))


class BitsBasicTests(BitsTests):

    def test_magnitude_bit_length(self):
        self.assertEqual(0, bits.magnitude_bit_length([]))
        self.assertEqual(1, bits.magnitude_bit_length([1]))
        self.assertEqual(32, bits.magnitude_bit_length([0xFFFFFFFF]))
        self.assertEqual(64, bits.magnitude_bit_length([0x80000000, 0]))

    def test_bit_length(self):
        self.assertBitLength(0, 0)
        self.assertBitLength(0, -1)
        self.assertBitLength(1, 1)
        self.assertBitLength(1, -2)
        self.assertBitLength(2, -3)
        self.assertBitLength(7, 127)
        self.assertBitLength(7, -128)
        self.assertBitLength(8, -129)
        self.assertBitLength(8, 128)

    def test_bit_length_powers_of_two(self):
        for k in range(0, 200):
            self.assertBitLength(k, -2**k)
            self.assertBitLength(k, 2**k - 1)
            self.assertBitLength(k + 1, 2**k)

    def test_is_power_of_two(self):
        self.assertTrue(bits.is_power_of_two([1]))
        self.assertTrue(bits.is_power_of_two([0x80000000, 0, 0]))
        self.assertFalse(bits.is_power_of_two([3]))
        self.assertFalse(bits.is_power_of_two([1, 0, 1]))

    def test_bit_count(self):
        self.assertEqual(0, bits.bit_count(0, []))
        self.assertEqual(1, bits.bit_count(1, [1]))
        self.assertEqual(32, bits.bit_count(1, [0xFFFFFFFF]))
        self.assertEqual(0, bits.bit_count(-1, [1]))
        self.assertEqual(1, bits.bit_count(-1, [2]))
        self.assertEqual(31, bits.bit_count(*sign_magnitude(-2**31)))
        self.assertEqual(1, bits.bit_count(*sign_magnitude(-2**32 - 1)))

    def test_lowest_set_bit(self):
        self.assertEqual(-1, bits.lowest_set_bit([]))
        self.assertEqual(0, bits.lowest_set_bit([1]))
        self.assertEqual(32, bits.lowest_set_bit([1, 0]))
        self.assertEqual(95, bits.lowest_set_bit([0x80000000, 0, 0]))

    def test_trailing_zero_bits_of_zero(self):
        with self.assertRaises(ValueError):
            bits.trailing_zero_bits([])

    def test_first_nonzero_limb(self):
        self.assertEqual(-1, bits.first_nonzero_limb([]))
        self.assertEqual(0, bits.first_nonzero_limb([1, 1]))
        self.assertEqual(2, bits.first_nonzero_limb([1, 0, 0]))

    def test_twos_complement_limbs(self):
        sign, magnitude = sign_magnitude(-2**32)   # ...FFFF_FFFFFFFF_00000000
        first = bits.first_nonzero_limb(magnitude)
        self.assertEqual(0, bits.twos_complement_limb(sign, magnitude, 0, first))
        self.assertEqual(LIMB_MASK, bits.twos_complement_limb(sign, magnitude, 1, first))
        self.assertEqual(LIMB_MASK, bits.twos_complement_limb(sign, magnitude, 99, first))
        self.assertEqual(0, bits.twos_complement_limb(sign, magnitude, -1, first))

    def test_from_twos_complement(self):
        self.assertEqual((0, []), bits.from_twos_complement([]))
        self.assertEqual((0, []), bits.from_twos_complement([0, 0]))
        self.assertEqual((-1, [0x80000000]), bits.from_twos_complement([0x80000000]))
        self.assertEqual((1, [0x80000000]), bits.from_twos_complement([0, 0x80000000]))


class BitsPropertyTests(BitsTests):

    @given(values)
    def test_bit_length_matches_int(self, n):
        expected = n.bit_length() if n >= 0 else (~n).bit_length()
        self.assertBitLength(expected, n)

    @given(values)
    def test_bit_count_matches_int(self, n):
        self.assertEqual(twos_complement_popcount(n), bits.bit_count(*sign_magnitude(n)))

    @given(values)
    def test_lowest_set_bit_matches_int(self, n):
        expected = (n & -n).bit_length() - 1
        self.assertEqual(expected, bits.lowest_set_bit(sign_magnitude(n)[1]))

    @given(values, integers(min_value=0, max_value=12))
    def test_twos_complement_limb_matches_int(self, n, position):
        sign, magnitude = sign_magnitude(n)
        limb = bits.twos_complement_limb(sign, magnitude, position, bits.first_nonzero_limb(magnitude))
        self.assertEqual((n >> (32 * position)) & LIMB_MASK, limb)

    @given(values)
    def test_twos_complement_round_trip(self, n):
        sign, magnitude = sign_magnitude(n)
        first = bits.first_nonzero_limb(magnitude)
        width = len(magnitude) + 1
        limbs = [bits.twos_complement_limb(sign, magnitude, i, first) for i in range(width - 1, -1, -1)]
        self.assertEqual((sign, magnitude), bits.from_twos_complement(limbs))


if __name__ == '__main__':
    unittest.main()
