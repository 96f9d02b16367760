import os
import tempfile
import unittest

import polars as pl

from flexladder.data import load_advertising, synthetic_advertising
from flexladder.errors import MissingFieldError

ISLR_CSV = """\
"","TV","radio","newspaper","sales"
"1",230.1,37.8,69.2,22.1
"2",44.5,39.3,45.1,10.4
"3",17.2,45.9,69.3,9.3
"4",151.5,41.3,58.5,18.5
"""


class TestLoadAdvertising(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def write(self, name: str, text: str) -> str:
        path = os.path.join(self.tmp.name, name)
        with open(path, "w") as fh:
            fh.write(text)
        return path

    def test_islr_csv(self):
        samples = load_advertising(self.write("Advertising.csv", ISLR_CSV))

        self.assertEqual(samples.columns, ["TV", "Radio", "Newspaper", "Sales"])
        self.assertEqual(samples.shape, (4, 4))
        self.assertEqual(samples["Radio"].dtype, pl.Float64)
        self.assertListEqual(samples["Sales"].to_list(), [22.1, 10.4, 9.3, 18.5])

    def test_parquet(self):
        path = os.path.join(self.tmp.name, "adv.parquet")
        synthetic_advertising(10, seed=0).write_parquet(path)

        samples = load_advertising(path)
        self.assertEqual(samples.shape, (10, 4))

    def test_missing_column(self):
        text = "TV,radio,newspaper\n1.0,2.0,3.0\n"
        with self.assertRaises(MissingFieldError) as ctx:
            load_advertising(self.write("adv.csv", text))
        self.assertEqual(ctx.exception.field, "Sales")

    def test_unsupported(self):
        with self.assertRaises(ValueError):
            load_advertising(self.write("adv.abc", ISLR_CSV))


class TestSynthetic(unittest.TestCase):
    def test_shape(self):
        samples = synthetic_advertising(50, seed=0)
        self.assertEqual(samples.columns, ["TV", "Radio", "Newspaper", "Sales"])
        self.assertEqual(len(samples), 50)

    def test_reproducible(self):
        a = synthetic_advertising(30, seed=9)
        b = synthetic_advertising(30, seed=9)
        self.assertTrue(a.equals(b))

    def test_invalid(self):
        with self.assertRaises(ValueError):
            synthetic_advertising(0)


if __name__ == "__main__":
    unittest.main()
