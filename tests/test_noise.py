import random
import unittest

from src.level.noise import NoiseField


class TestNoiseField(unittest.TestCase):

    def test_same_seed_same_field(self):
        a = NoiseField.seed(random.Random(42))
        b = NoiseField.seed(random.Random(42))
        self.assertEqual(a.permutation, b.permutation)
        for i in range(50):
            x, y = i * 0.37, i * 0.91 + 3.3
            self.assertEqual(a.noise(x, y), b.noise(x, y))

    def test_noise_is_pure(self):
        field = NoiseField.seed(random.Random(7))
        first = [field.noise(x * 0.2, y * 0.2) for x in range(20) for y in range(20)]
        second = [field.noise(x * 0.2, y * 0.2) for x in range(20) for y in range(20)]
        self.assertEqual(first, second)

    def test_permutation_is_a_shuffle(self):
        field = NoiseField.seed(random.Random(1))
        self.assertEqual(sorted(field.permutation), list(range(256)))

    def test_output_range(self):
        field = NoiseField.seed(random.Random(3))
        rng = random.Random(99)
        for _ in range(2000):
            value = field.noise(rng.uniform(-300, 300), rng.uniform(-300, 300))
            self.assertGreaterEqual(value, -1.0)
            self.assertLessEqual(value, 1.0)

    def test_zero_on_lattice_points(self):
        field = NoiseField.seed(random.Random(5))
        for x in range(-3, 4):
            for y in range(-3, 4):
                self.assertEqual(field.noise(float(x), float(y)), 0.0)

    def test_continuity(self):
        field = NoiseField.seed(random.Random(11))
        for i in range(100):
            x, y = 0.13 * i, 0.29 * i
            self.assertLess(abs(field.noise(x, y) - field.noise(x + 1e-3, y)), 0.05)

    def test_rejects_bad_permutation(self):
        with self.assertRaises(ValueError):
            NoiseField([0] * 256)
        with self.assertRaises(ValueError):
            NoiseField(list(range(255)))
