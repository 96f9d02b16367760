from dataclasses import dataclass

import numpy as np
import polars as pl

from flexladder.config import TRAIN_FRACTION


@dataclass(frozen=True, eq=False)
class Split:
    """Disjoint train/test row indices covering `range(n_rows)`."""

    train: np.ndarray
    test: np.ndarray

    @property
    def n_rows(self) -> int:
        return len(self.train) + len(self.test)

    def partition(self, samples: pl.DataFrame) -> tuple[pl.DataFrame, pl.DataFrame]:
        """Select the train and test rows of `samples`."""
        if len(samples) != self.n_rows:
            raise ValueError(
                f"Split is for {self.n_rows} rows, samples have {len(samples)}"
            )
        return samples[self.train], samples[self.test]


def train_test_split(
    n_rows: int,
    seed: int | None,
    train_fraction: float = TRAIN_FRACTION,
) -> Split:
    """Draw `floor(n_rows * train_fraction)` train indices without replacement.

    The split only depends on the arguments: a fresh generator is seeded for
    every call.

    ## returns
    - split (Split): sorted train and test index arrays
    """
    if not 0 < train_fraction < 1:
        raise ValueError(f"train_fraction must be in (0, 1), not {train_fraction}")

    n_train = int(n_rows * train_fraction)
    if n_train < 1 or n_train >= n_rows:
        raise ValueError(f"Cannot split {n_rows} rows with fraction {train_fraction}")

    rng = np.random.default_rng(seed)
    chosen = rng.choice(n_rows, size=n_train, replace=False)

    in_train = np.zeros(n_rows, dtype=bool)
    in_train[chosen] = True

    train = np.flatnonzero(in_train)
    test = np.flatnonzero(~in_train)
    train.flags.writeable = False
    test.flags.writeable = False

    return Split(train=train, test=test)
