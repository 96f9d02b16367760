"""
Term sets for linear models

Terms are monomials in the features, so a model specification is an explicit,
enumerable structure rather than a formula string.

- Term: a product of feature powers, e.g. TV^2:Radio
- TermSet: ordered collection of unique terms
- constructors for main effects, full interactions and powers
"""

from functools import reduce
from itertools import combinations
from numbers import Integral
from operator import mul
from typing import Iterable

import numpy as np
import polars as pl

from flexladder.config import FEATURES
from flexladder.errors import MissingFieldError


class Term:
    """A monomial: product of features raised to positive integer powers."""

    __slots__ = ["powers"]

    def __init__(self, powers: dict[str, int] | Iterable[tuple[str, int]]) -> None:
        if isinstance(powers, dict):
            powers = powers.items()

        merged: dict[str, int] = {}
        for feature, p in powers:
            if not isinstance(p, Integral) or isinstance(p, bool) or p < 1:
                raise ValueError(f"Power must be a positive int, not {p!r}")
            merged[feature] = merged.get(feature, 0) + int(p)

        if not merged:
            raise ValueError("A term needs at least one feature")

        self.powers: tuple[tuple[str, int], ...] = tuple(merged.items())

    @property
    def name(self) -> str:
        parts = [f if p == 1 else f"{f}^{p}" for f, p in self.powers]
        return ":".join(parts)

    @property
    def degree(self) -> int:
        return sum(p for _, p in self.powers)

    @property
    def features(self) -> tuple[str, ...]:
        return tuple(f for f, _ in self.powers)

    def expr(self) -> pl.Expr:
        factors = [pl.col(f) if p == 1 else pl.col(f).pow(p) for f, p in self.powers]
        return reduce(mul, factors).cast(pl.Float64).alias(self.name)

    def __mul__(self, other: "Term") -> "Term":
        return Term(self.powers + other.powers)

    def _key(self):
        return frozenset(self.powers)

    def __eq__(self, other) -> bool:
        return isinstance(other, Term) and self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"Term({self.name})"

    def __str__(self) -> str:
        return self.name


class TermSet:
    """Ordered set of terms, the right hand side of a linear model."""

    __slots__ = ["terms"]

    def __init__(self, terms: Iterable[Term] = ()) -> None:
        unique: dict[Term, None] = {}
        for t in terms:
            if not isinstance(t, Term):
                raise TypeError(f"Expected Term, got {type(t).__name__}")
            unique.setdefault(t)
        self.terms: tuple[Term, ...] = tuple(unique)

    def __len__(self) -> int:
        return len(self.terms)

    def __iter__(self):
        return iter(self.terms)

    def __contains__(self, term) -> bool:
        return term in self.terms

    def __add__(self, other: "TermSet | Term") -> "TermSet":
        if isinstance(other, Term):
            other = TermSet([other])
        return TermSet(self.terms + other.terms)

    def __eq__(self, other) -> bool:
        return isinstance(other, TermSet) and set(self.terms) == set(other.terms)

    def __hash__(self) -> int:
        return hash(frozenset(self.terms))

    def issubset(self, other: "TermSet") -> bool:
        return set(self.terms) <= set(other.terms)

    @property
    def names(self) -> list[str]:
        return [t.name for t in self.terms]

    @property
    def features(self) -> list[str]:
        """Raw features used by any term, in first-seen order."""
        seen: dict[str, None] = {}
        for t in self.terms:
            for f in t.features:
                seen.setdefault(f)
        return list(seen)

    @property
    def label(self) -> str:
        return " + ".join(self.names)

    def __repr__(self) -> str:
        return f"TermSet({self.label})"

    def design_matrix(self, samples: pl.DataFrame, intercept: bool = True) -> np.ndarray:
        """Evaluate the terms on samples.

        ## parameters
        - samples (DataFrame): must contain all features in the terms.
        - intercept (bool): prepend a constant column.
        ## returns
        - X (ndarray): shape (len(samples), len(self) + intercept)
        """
        for f in self.features:
            if f not in samples.columns:
                raise MissingFieldError(f, samples.columns)

        n_rows = len(samples)
        n_cols = len(self) + int(intercept)
        X = np.empty((n_rows, n_cols), dtype=float)

        if intercept:
            X[:, 0] = 1  # constant term
        if len(self) > 0:
            X[:, int(intercept) :] = (
                samples.select([t.expr() for t in self.terms]).to_numpy()
            )

        return X


def var(feature: str) -> Term:
    return Term([(feature, 1)])


def power(feature: str, p: int) -> Term:
    return Term([(feature, p)])


def main_effects(features: Iterable[str]) -> TermSet:
    """Raw features, no interactions."""
    return TermSet(var(f) for f in features)


def full_interaction(factors: Iterable[Term | str]) -> TermSet:
    """All products of non-empty subsets of the factors (like `a*b*c`).

    Terms are ordered by the number of factors, then by input order, so
    3 factors give 3 singles + 3 pairs + 1 triple.
    """
    factors = [var(f) if isinstance(f, str) else f for f in factors]

    terms = []
    for k in range(1, len(factors) + 1):
        for combo in combinations(factors, k):
            terms.append(reduce(mul, combo))

    return TermSet(terms)


def default_ladder(features: Iterable[str] = FEATURES) -> list[TermSet]:
    """Five nested term sets of increasing flexibility.

    1. main effects
    2. full interaction of the features
    3. (2) + square of the first feature
    4. (2) + squares of all features
    5. (2) + full interaction of the squares
    """
    features = list(features)
    if len(features) < 1:
        raise ValueError("Needs at least one feature")

    base = full_interaction(features)
    squares = [power(f, 2) for f in features]

    return [
        main_effects(features),
        base,
        base + squares[0],
        base + TermSet(squares),
        base + full_interaction(squares),
    ]
