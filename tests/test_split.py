import unittest

import polars as pl

from flexladder.split import train_test_split


class TestSplit(unittest.TestCase):
    def test_reproducible(self):
        s1 = train_test_split(200, seed=1)
        s2 = train_test_split(200, seed=1)

        self.assertListEqual(s1.train.tolist(), s2.train.tolist())
        self.assertListEqual(s1.test.tolist(), s2.test.tolist())

    def test_seed_changes_split(self):
        s1 = train_test_split(200, seed=1)
        s2 = train_test_split(200, seed=2)

        self.assertNotEqual(s1.train.tolist(), s2.train.tolist())

    def test_disjoint_and_covering(self):
        s = train_test_split(101, seed=5)

        train, test = set(s.train.tolist()), set(s.test.tolist())
        self.assertEqual(len(train), 50)
        self.assertEqual(len(test), 51)
        self.assertEqual(train & test, set())
        self.assertEqual(train | test, set(range(101)))

    def test_sorted(self):
        s = train_test_split(30, seed=0, train_fraction=0.3)

        self.assertEqual(len(s.train), 9)
        self.assertListEqual(s.train.tolist(), sorted(s.train.tolist()))
        self.assertListEqual(s.test.tolist(), sorted(s.test.tolist()))

    def test_read_only(self):
        s = train_test_split(20, seed=3)

        with self.assertRaises(ValueError):
            s.train[0] = s.test[0]
        with self.assertRaises(ValueError):
            s.test[:] = 0

    def test_invalid_fraction(self):
        for frac in [0, 1, -0.5, 1.5]:
            with self.assertRaises(ValueError):
                train_test_split(10, seed=0, train_fraction=frac)

    def test_too_few_rows(self):
        with self.assertRaises(ValueError):
            train_test_split(1, seed=0)

    def test_partition_frames(self):
        samples = pl.DataFrame({"row": list(range(20))})
        s = train_test_split(20, seed=3)

        train, test = s.partition(samples)
        self.assertListEqual(train["row"].to_list(), s.train.tolist())
        self.assertListEqual(test["row"].to_list(), s.test.tolist())

    def test_partition_wrong_size(self):
        s = train_test_split(20, seed=3)

        with self.assertRaises(ValueError):
            s.partition(pl.DataFrame({"row": list(range(19))}))


if __name__ == "__main__":
    unittest.main()
