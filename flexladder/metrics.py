import numpy as np
import polars as pl

from flexladder.errors import MissingFieldError


def rmse(actual, predicted) -> float:
    """Root-mean-square error, `sqrt(mean((actual - predicted)**2))`.

    ## parameters
    - actual, predicted (sequence | ndarray | Series): 1-d, same length.
    """
    actual = np.asarray(actual, dtype=float)
    predicted = np.asarray(predicted, dtype=float)

    if actual.ndim != 1 or predicted.ndim != 1:
        raise ValueError("Need 1-d sequences")
    if actual.shape != predicted.shape:
        raise ValueError(
            f"Need sequences of same length: {len(actual)} != {len(predicted)}"
        )
    if len(actual) == 0:
        raise ValueError("Sequences cannot be empty")

    return np.sqrt(np.average((actual - predicted) ** 2)).item()


def complexity(model) -> int:
    """Number of non-intercept coefficients of a fitted linear model."""
    fit_intercept = getattr(model, "fit_intercept", None)
    if fit_intercept is None:
        raise ValueError(f"No intercept convention for {type(model).__name__}")

    n_coef = len(model.beta)
    return n_coef - 1 if fit_intercept else n_coef


def evaluate_rmse(model, partition: pl.DataFrame, target: str) -> float:
    """RMSE of `model` predictions against the `target` column of a partition."""
    if target not in partition.columns:
        raise MissingFieldError(target, partition.columns)

    return rmse(partition[target].to_numpy(), model.predict(partition))
