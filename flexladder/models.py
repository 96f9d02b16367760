import numpy as np
import polars as pl

from flexladder.errors import FittingError, MissingFieldError
from flexladder.terms import TermSet


class LinearModel:
    """Linear regression on an explicit term set, fitted by least squares.

    The model is fitted on construction and never refit.
    """

    def __init__(
        self,
        samples: pl.DataFrame,
        terms: TermSet,
        target: str,
        fit_intercept: bool = True,
        verbose=0,
    ) -> None:
        if target not in samples.columns:
            raise MissingFieldError(target, samples.columns)

        self.terms = terms
        self.target = target
        self.fit_intercept = fit_intercept

        self.y = samples[target].cast(pl.Float64).to_numpy()
        self.X = terms.design_matrix(samples, intercept=fit_intercept)

        if self.y.shape[0] != self.X.shape[0]:
            raise ValueError("Inconsistent sample count")

        self._fit(verbose=verbose)

    def __str__(self) -> str:
        lines = [
            f"Linear model: {self.target} ~ {self.terms.label}",
            f"{self.X.shape[0]} samples, {self.X.shape[1]} coefficients",
        ]
        return "\n".join(lines)

    def _fit(self, verbose=0):
        """Fit model by least squares, on unit-norm columns."""
        X = self.X
        y = self.y
        M, N = X.shape

        if verbose >= 2:
            print(f"{M} samples\n{N} coefficients")

        if M < N:
            raise FittingError(f"under-determined system: {M} samples < {N} coefficients")

        bad = ~np.isfinite(X).all(axis=0)
        if bad.any():
            bad_cols = [self.column_names[i] for i in np.flatnonzero(bad)]
            raise FittingError(f"non-finite values in column(s): {bad_cols}")
        if not np.isfinite(y).all():
            raise FittingError(f"non-finite values in target: {self.target}")

        # equilibrate columns, raw powers span many orders of magnitude
        scale = np.linalg.norm(X, axis=0)
        if (scale == 0).any():
            zero_cols = [self.column_names[i] for i in np.flatnonzero(scale == 0)]
            raise FittingError(f"constant zero column(s): {zero_cols}")

        try:
            beta_scaled, res, rank, _ = np.linalg.lstsq(X / scale, y, rcond=None)
        except np.linalg.LinAlgError as exc:
            raise FittingError(str(exc)) from exc

        if rank < N:
            raise FittingError(f"rank-deficient design matrix: rank {rank} < {N}")

        self.beta = beta_scaled / scale
        self.residuals = res
        self.rank = rank

        if verbose >= 2:
            print(f"coefficients: {self.beta}, residuals: {res}")

    @property
    def column_names(self) -> list[str]:
        names = self.terms.names
        return ["(Intercept)", *names] if self.fit_intercept else names

    @property
    def coefficients(self) -> pl.DataFrame:
        return pl.DataFrame({"term": self.column_names, "estimate": self.beta})

    @property
    def yhat(self):
        """Prediction of training data"""

        return self.X @ self.beta

    def predict(self, samples: pl.DataFrame) -> np.ndarray:
        """Predict new samples."""
        X = self.terms.design_matrix(samples, intercept=self.fit_intercept)
        return X @ self.beta


def fit(terms: TermSet, samples: pl.DataFrame, target: str, verbose=0) -> LinearModel:
    """Fit a linear model with intercept on `terms`."""
    return LinearModel(samples, terms, target, verbose=verbose)
