"""
Testing biginteger entropy.py
"""

import unittest
from unittest import mock

from hypothesis import given
from hypothesis.strategies import integers, randoms

from biginteger import entropy, limbs
from biginteger.limbs import int_from_limbs


class FakeEntropy(object):
    """Entropy source that hands out fixed limbs, and remembers what was asked."""

    def __init__(self, fill=0xFFFFFFFF):
        self.fill = fill
        self.requests = []

    def __call__(self, num_limbs):
        self.requests.append(num_limbs)
        return [self.fill] * num_limbs


class EntropyTests(unittest.TestCase):

    def test_zero_bits(self):
        source = FakeEntropy()
        self.assertEqual([], entropy.random_magnitude(0, source))
        self.assertEqual([], source.requests)

    def test_negative_bits(self):
        with self.assertRaises(entropy.RangeError):
            entropy.random_magnitude(-1, FakeEntropy())

    def test_masks_top_limb(self):
        for num_bits in (1, 5, 31, 32, 33, 64, 65, 100):
            source = FakeEntropy()
            magnitude = entropy.random_magnitude(num_bits, source)
            self.assertEqual(2**num_bits - 1, int_from_limbs(magnitude))
            self.assertEqual([(num_bits + 31) // 32], source.requests)

    def test_strips_leading_zeros(self):
        magnitude = entropy.random_magnitude(96, lambda n: [0, 0, 7])
        self.assertEqual([7], magnitude)
        self.assertEqual([], entropy.random_magnitude(96, FakeEntropy(fill=0)))

    def test_masks_out_of_range_limbs(self):
        self.assertEqual([0xFFFFFFFF], entropy.random_magnitude(32, lambda n: [0x1FFFFFFFF]))

    def test_wrong_limb_count(self):
        with self.assertRaises(entropy.RangeError):
            entropy.random_magnitude(64, lambda n: [1])

    def test_overflow_before_request(self):
        source = FakeEntropy()
        with mock.patch.object(limbs, 'MAX_MAG_LENGTH', 2):
            self.assertEqual(2**64 - 1, int_from_limbs(entropy.random_magnitude(64, source)))
            with self.assertRaises(OverflowError):
                entropy.random_magnitude(65, source)
        self.assertEqual([2], source.requests)

    def test_system_entropy(self):
        words = entropy.system_entropy(5)
        self.assertEqual(5, len(words))
        for word in words:
            self.assertTrue(0 <= word <= limbs.LIMB_MASK)
        self.assertEqual([], entropy.system_entropy(0))

    def test_default_source(self):
        magnitude = entropy.random_magnitude(1000)
        self.assertLess(int_from_limbs(magnitude), 2**1000)

    def test_logs_request(self):
        with self.assertLogs('biginteger.entropy', level='DEBUG') as logs:
            entropy.random_magnitude(40, FakeEntropy())
        self.assertIn("Requesting 2 random limbs for 40 bits", logs.output[0])

    @given(integers(min_value=0, max_value=500), randoms(use_true_random=False))
    def test_in_range(self, num_bits, rng):
        magnitude = entropy.random_magnitude(num_bits, lambda n: [rng.getrandbits(32) for _ in range(n)])
        self.assertLess(int_from_limbs(magnitude), 2**num_bits)
        if magnitude:
            self.assertNotEqual(0, magnitude[0])


if __name__ == '__main__':
    unittest.main()
