"""
Data

- loading the advertising table
- a synthetic advertising-like table
"""

import os

import numpy as np
import polars as pl

from flexladder.config import FEATURES, TARGET
from flexladder.errors import MissingFieldError


def load_advertising(
    path: str,
    features: tuple[str, ...] | list[str] = FEATURES,
    target: str = TARGET,
) -> pl.DataFrame:
    """Load the advertising table from `.csv` or `.parquet`.

    Column names are matched case-insensitively and renamed to the requested
    spelling, other columns (like an unnamed row index) are dropped.

    ## returns
    - samples (DataFrame): feature columns and target, as Float64.
    """
    _, ext = os.path.splitext(path)

    if ext == ".csv":
        raw = pl.read_csv(path)
    elif ext == ".parquet":
        raw = pl.read_parquet(path)
    else:
        raise ValueError(f"Unsupported file format: {ext}")

    by_lower = {c.lower(): c for c in raw.columns}
    columns = [*features, target]

    selected = []
    for col in columns:
        source = by_lower.get(col.lower())
        if source is None:
            raise MissingFieldError(col, raw.columns)
        selected.append(pl.col(source).cast(pl.Float64).alias(col))

    return raw.select(selected)


def synthetic_advertising(n_rows: int = 200, seed: int | None = None) -> pl.DataFrame:
    """Advertising-like budgets and sales, with a TV:Radio synergy and noise.

    Budget ranges roughly follow the ISLR Advertising table.
    """
    if n_rows < 1:
        raise ValueError(f"Needs at least one row, not {n_rows}")

    rng = np.random.default_rng(seed)

    tv = rng.uniform(0.7, 296.4, n_rows).round(1)
    radio = rng.uniform(0.0, 49.6, n_rows).round(1)
    newspaper = (rng.gamma(2.0, 15.0, n_rows) + 0.3).round(1)

    sales = (
        6.75
        + 0.0191 * tv
        + 0.0289 * radio
        + 0.0011 * tv * radio
        - 0.00011 * tv**2 / 2
        + rng.normal(0.0, 0.9, n_rows)
    )

    return pl.DataFrame(
        {
            FEATURES[0]: tv,
            FEATURES[1]: radio,
            FEATURES[2]: newspaper,
            TARGET: sales.round(1),
        }
    )
