"""
Testing biginteger limbs.py
"""

import unittest
from unittest import mock

from hypothesis import given
from hypothesis.strategies import integers

from biginteger import limbs
from biginteger.limbs import int_from_limbs, limbs_from_int


nonnegatives = integers(min_value=0, max_value=2**400)
limb_values = integers(min_value=0, max_value=limbs.LIMB_MASK)


class LimbsTests(unittest.TestCase):

    def assertCanonical(self, magnitude):
        self.assertIsInstance(magnitude, list)
        if magnitude:
            self.assertNotEqual(0, magnitude[0], "Leading zero limb in {!r}".format(magnitude))
        for limb in magnitude:
            self.assertTrue(0 <= limb <= limbs.LIMB_MASK, "Limb {!r} out of range".format(limb))

    def assertMagnitude(self, expected_int, magnitude):
        self.assertCanonical(magnitude)
        self.assertEqual(expected_int, int_from_limbs(magnitude))


class LimbsBasicTests(LimbsTests):

    def test_int_conversion(self):
        self.assertEqual([], limbs_from_int(0))
        self.assertEqual([1], limbs_from_int(1))
        self.assertEqual([0xFFFFFFFF], limbs_from_int(2**32 - 1))
        self.assertEqual([1, 0], limbs_from_int(2**32))
        self.assertEqual([1, 0, 0], limbs_from_int(2**64))
        self.assertEqual(0, int_from_limbs([]))
        self.assertEqual(0, int_from_limbs(()))

    def test_strip_leading_zeros(self):
        self.assertEqual([], limbs.strip_leading_zeros([]))
        self.assertEqual([], limbs.strip_leading_zeros([0]))
        self.assertEqual([1, 0], limbs.strip_leading_zeros([0, 0, 1, 0]))

    def test_strip_leading_zeros_copies(self):
        original = [5, 6]
        stripped = limbs.strip_leading_zeros(original)
        stripped[0] = 99
        self.assertEqual([5, 6], original)

    def test_compare_shorter_is_smaller(self):
        self.assertEqual(-1, limbs.compare_magnitudes([0xFFFFFFFF], [1, 0]))
        self.assertEqual(+1, limbs.compare_magnitudes([1, 0], [0xFFFFFFFF]))
        self.assertEqual(-1, limbs.compare_magnitudes([], [1]))
        self.assertEqual(0, limbs.compare_magnitudes([], []))

    def test_compare_most_significant_first(self):
        self.assertEqual(+1, limbs.compare_magnitudes([2, 0], [1, 0xFFFFFFFF]))
        self.assertEqual(-1, limbs.compare_magnitudes([1, 1], [1, 2]))
        self.assertEqual(0, limbs.compare_magnitudes([1, 2], (1, 2)))

    def test_add_carry_grows_by_one_limb(self):
        self.assertEqual([1, 0, 0], limbs.add_magnitudes([0xFFFFFFFF, 0xFFFFFFFF], [1]))
        self.assertEqual([1, 0, 0], limbs.add_magnitudes([1], [0xFFFFFFFF, 0xFFFFFFFF]))
        self.assertEqual([0xFFFFFFFF, 0xFFFFFFFF], limbs.add_magnitudes([0xFFFFFFFF, 0xFFFFFFFE], [1]))

    def test_add_empty(self):
        self.assertEqual([], limbs.add_magnitudes([], []))
        self.assertEqual([3], limbs.add_magnitudes([], [3]))

    def test_subtract_borrow(self):
        self.assertEqual([0xFFFFFFFF, 0xFFFFFFFF], limbs.subtract_magnitudes([1, 0, 0], [1]))
        self.assertEqual([], limbs.subtract_magnitudes([7, 8], [7, 8]))
        self.assertEqual([1], limbs.subtract_magnitudes([1, 0], [0xFFFFFFFF]))

    def test_add_signed(self):
        self.assertEqual((0, []), limbs.add_signed(+1, [5], -1, [5]))
        self.assertEqual((+1, [5]), limbs.add_signed(+1, [5], 0, []))
        self.assertEqual((-1, [5]), limbs.add_signed(0, [], -1, [5]))
        self.assertEqual((-1, [8]), limbs.add_signed(-1, [3], -1, [5]))
        self.assertEqual((+1, [2]), limbs.add_signed(-1, [3], +1, [5]))

    def test_multiply_with_carry(self):
        self.assertEqual((0, 6), limbs.multiply_with_carry(2, 3, 0))
        self.assertEqual((1, 0), limbs.multiply_with_carry(0x80000000, 2, 0))
        high, low = limbs.multiply_with_carry(0xFFFFFFFF, 0xFFFFFFFF, 0xFFFFFFFF)
        self.assertEqual(0xFFFFFFFF * 0xFFFFFFFF + 0xFFFFFFFF, (high << 32) | low)

    def test_mul_add_limb_in_place(self):
        scratch = [0, 0, 12]
        spill = limbs.mul_add_limb(scratch, 10, 3)
        self.assertEqual(0, spill)
        self.assertEqual([0, 0, 123], scratch)

    def test_mul_add_limb_carry_ripples(self):
        scratch = [0, 0xFFFFFFFF]
        self.assertEqual(0, limbs.mul_add_limb(scratch, 1, 1))
        self.assertEqual([1, 0], scratch)

    def test_mul_add_limb_spill(self):
        scratch = [0x80000000]
        self.assertEqual(1, limbs.mul_add_limb(scratch, 2, 0))
        self.assertEqual([0], scratch)

    def test_divide_by_limb(self):
        self.assertEqual(([], 7), limbs.divide_by_limb([7], 10))
        self.assertEqual(([], 0), limbs.divide_by_limb([], 10))
        self.assertEqual(([0x19999999, 0x99999999], 6), limbs.divide_by_limb([1, 0, 0], 10))

    def test_shifts(self):
        self.assertEqual([], limbs.shift_left([], 100))
        self.assertEqual([1, 0, 0, 0], limbs.shift_left([1], 96))
        self.assertEqual([0x7FFFFFFF, 0x80000000], limbs.shift_left([0xFFFFFFFF], 31))
        self.assertEqual([], limbs.shift_right([1, 0], 64))
        self.assertEqual([1], limbs.shift_right([1, 0, 0, 0], 96))
        self.assertEqual([0xFFFFFFFF], limbs.shift_right([0x7FFFFFFF, 0x80000000], 31))

    def test_limb_slicing(self):
        self.assertEqual([], limbs.lower_limbs([1, 2, 3], 0))
        self.assertEqual([2, 3], limbs.lower_limbs([1, 2, 3], 2))
        self.assertEqual([1, 2, 3], limbs.lower_limbs([1, 2, 3], 5))
        self.assertEqual([1], limbs.upper_limbs([1, 2, 3], 2))
        self.assertEqual([], limbs.upper_limbs([1, 2, 3], 3))
        self.assertEqual([1, 0, 0], limbs.shift_left_limbs([1], 2))
        self.assertEqual([], limbs.shift_left_limbs([], 2))
        self.assertEqual([1, 0, 3], limbs.join_limbs([1], [3], 2))
        self.assertEqual([3], limbs.join_limbs([], [3], 2))


class LimbsOverflowTests(LimbsTests):

    def test_check_range_at_limit(self):
        limbs.check_length(limbs.MAX_MAG_LENGTH)
        with self.assertRaises(limbs.MagnitudeOverflowError):
            limbs.check_length(limbs.MAX_MAG_LENGTH + 1)

    def test_check_range_reads_limit_at_call_time(self):
        with mock.patch.object(limbs, 'MAX_MAG_LENGTH', 2):
            limbs.check_range([1, 2])
            with self.assertRaises(OverflowError):
                limbs.check_range([1, 2, 3])

    def test_max_mag_length(self):
        self.assertEqual(2**26, limbs.MAX_MAG_LENGTH)


class LimbsPropertyTests(LimbsTests):

    @given(nonnegatives)
    def test_int_round_trip(self, x):
        self.assertMagnitude(x, limbs_from_int(x))

    @given(nonnegatives, nonnegatives)
    def test_add(self, x, y):
        self.assertMagnitude(x + y, limbs.add_magnitudes(limbs_from_int(x), limbs_from_int(y)))

    @given(nonnegatives, nonnegatives)
    def test_subtract(self, x, y):
        big, little = max(x, y), min(x, y)
        self.assertMagnitude(big - little, limbs.subtract_magnitudes(limbs_from_int(big), limbs_from_int(little)))

    @given(nonnegatives, nonnegatives)
    def test_compare(self, x, y):
        expected = (x > y) - (x < y)
        self.assertEqual(expected, limbs.compare_magnitudes(limbs_from_int(x), limbs_from_int(y)))

    @given(nonnegatives, limb_values, limb_values)
    def test_mul_add_limb(self, x, multiplier, addend):
        scratch = [0] + limbs_from_int(x)
        spill = limbs.mul_add_limb(scratch, multiplier, addend)
        self.assertEqual(0, spill)
        self.assertEqual(x * multiplier + addend, int_from_limbs(scratch))

    @given(nonnegatives, limb_values)
    def test_multiply_by_limb(self, x, y):
        self.assertMagnitude(x * y, limbs.multiply_by_limb(limbs_from_int(x), y))

    @given(nonnegatives, integers(min_value=1, max_value=limbs.LIMB_MASK))
    def test_divide_by_limb(self, x, divisor):
        quotient, remainder = limbs.divide_by_limb(limbs_from_int(x), divisor)
        self.assertMagnitude(x // divisor, quotient)
        self.assertEqual(x % divisor, remainder)

    @given(nonnegatives, integers(min_value=0, max_value=200))
    def test_shifts(self, x, n):
        self.assertMagnitude(x << n, limbs.shift_left(limbs_from_int(x), n))
        self.assertMagnitude(x >> n, limbs.shift_right(limbs_from_int(x), n))

    @given(nonnegatives, nonnegatives, integers(min_value=0, max_value=8))
    def test_join_split(self, high, low, n):
        low %= 2 ** (32 * n)
        joined = limbs.join_limbs(limbs_from_int(high), limbs_from_int(low), n)
        self.assertMagnitude((high << (32 * n)) | low, joined)
        self.assertMagnitude(high, limbs.upper_limbs(joined, n))
        self.assertMagnitude(low, limbs.lower_limbs(joined, n))


if __name__ == '__main__':
    unittest.main()
