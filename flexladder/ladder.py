import os
from typing import Literal

import polars as pl
from tqdm import tqdm

from flexladder.config import FEATURES, MONOTONE_EPS, SEED, TARGET, TRAIN_FRACTION
from flexladder.errors import FittingError, MissingFieldError
from flexladder.metrics import complexity, evaluate_rmse
from flexladder.models import LinearModel
from flexladder.split import Split, train_test_split
from flexladder.terms import TermSet, default_ladder

RESULTS_SCHEMA = {
    "model": pl.Int64,
    "terms": pl.String,
    "complexity": pl.Int64,
    "train_rmse": pl.Float64,
    "test_rmse": pl.Float64,
    "error": pl.String,
}


class FlexibilityLadder:
    """Train/test evaluation of nested linear models of increasing flexibility.

    Note: we assume that
    - the samples are numeric and contain the target and all term features
    - each term set is a proper superset of the previous one
    """

    def __init__(
        self,
        samples: pl.DataFrame,
        target: str = TARGET,
        term_sets: list[TermSet] | None = None,
        seed: int | None = SEED,
        train_fraction: float = TRAIN_FRACTION,
        results_file: str | None = None,
        verbose: Literal[0, 1, 2] = 1,
    ) -> None:
        """Split the samples once, models are fitted on demand.

        ## parameters
        - samples (DataFrame): the full dataset, never modified.
        - target (str): response column.
        - term_sets (list[TermSet] | None): nested model specifications.
            Default: the five-model ladder over the advertising features.
        - seed (int | None): seed for the train/test split.
        - train_fraction (float): share of rows used for fitting.
        - results_file (str | None): where `evaluate` writes the table.
            - supported formats: `.parquet`, `.csv`, `.json`.
        - verbose (int): amount of status information printed
        """
        if target not in samples.columns:
            raise MissingFieldError(target, samples.columns)

        if term_sets is None:
            term_sets = default_ladder(FEATURES)
        term_sets = list(term_sets)
        if not term_sets:
            raise ValueError("Needs at least one term set")

        for i in range(1, len(term_sets)):
            prev, cur = term_sets[i - 1], term_sets[i]
            if not (prev.issubset(cur) and len(cur) > len(prev)):
                raise ValueError(
                    f"Term set {i + 1} is not a proper superset of term set {i}"
                )

        if results_file is not None:
            _, ext = os.path.splitext(results_file)
            if ext not in (".parquet", ".csv", ".json"):
                raise ValueError(f"Unsupported file format: {ext}")

        self.samples = samples
        self.target = target
        self.term_sets = term_sets
        self.seed = seed
        self.results_file = results_file
        self.verbose = verbose

        self.split: Split = train_test_split(len(samples), seed, train_fraction)
        self.train, self.test = self.split.partition(samples)

        self.models: dict[int, LinearModel] = {}
        self.failures: dict[int, FittingError] = {}
        self.results: pl.DataFrame | None = None

        if verbose >= 1:
            print(
                f"{len(samples)} samples: {len(self.train)} train, {len(self.test)} test"
            )

    def __str__(self):
        return "\n".join(
            [
                f"{len(self.term_sets)} model ladder for {self.target}",
                f"  - split seed {self.seed}: "
                f"{len(self.train)} train / {len(self.test)} test",
                f"  - {len(self.models)} fitted, {len(self.failures)} failed",
            ]
        )

    def __len__(self):
        return len(self.term_sets)

    def fit(self, strict: bool = False) -> dict[int, LinearModel]:
        """Fit every model on the train partition, once.

        ## parameters
        - strict (bool): raise the first `FittingError` instead of recording it.

        ## returns
        - models (dict[int, LinearModel]): fitted models by 1-based index.
            Failed models are in `self.failures`.
        """
        indices = range(1, len(self.term_sets) + 1)
        if self.verbose >= 1:
            indices = tqdm(indices)

        for i in indices:
            if i in self.models:
                continue
            if i in self.failures:
                if strict:
                    raise self.failures[i]
                continue

            try:
                self.models[i] = LinearModel(
                    self.train,
                    self.term_sets[i - 1],
                    self.target,
                    verbose=self.verbose,
                )
            except FittingError as exc:
                tagged = FittingError(exc.message, model_index=i)
                self.failures[i] = tagged
                if strict:
                    raise tagged from exc
                if self.verbose >= 1:
                    print(f"WARNING: {tagged}")

        return self.models

    def evaluate(self, strict: bool = False) -> pl.DataFrame:
        """Train RMSE, test RMSE and complexity of every model.

        ## returns
        - results (DataFrame): one row per model, by increasing flexibility.
            - columns: model, terms, complexity, train_rmse, test_rmse, error
            - failed models have null metrics and an error message.
        """
        self.fit(strict=strict)

        rows = []
        for i, terms in enumerate(self.term_sets, start=1):
            row = dict.fromkeys(RESULTS_SCHEMA)
            row["model"] = i
            row["terms"] = terms.label

            if i in self.failures:
                row["error"] = str(self.failures[i])
            else:
                model = self.models[i]
                row["complexity"] = complexity(model)
                row["train_rmse"] = evaluate_rmse(model, self.train, self.target)
                row["test_rmse"] = evaluate_rmse(model, self.test, self.target)

            rows.append(row)

        self.results = pl.DataFrame(rows, schema=RESULTS_SCHEMA, orient="row")

        if self.results_file:
            self._save_results()

        if self.verbose >= 1:
            print(self.results.drop("terms"))
            self.train_rmse_nonincreasing()

        return self.results

    def train_rmse_nonincreasing(self, eps: float = MONOTONE_EPS) -> bool:
        """Sanity check: train RMSE should not grow along nested models.

        Only successfully fitted models are compared. A violation is reported,
        not raised, since floating point ties are possible.
        """
        if self.results is None:
            self.evaluate()

        train_rmse = self.results.filter(pl.col("error").is_null())["train_rmse"]
        values = train_rmse.to_list()

        ok = True
        for a, b in zip(values, values[1:]):
            if b > a + eps:
                ok = False
                if self.verbose >= 1:
                    print(f"WARNING: train RMSE increased: {a:.6g} -> {b:.6g}")

        return ok

    def _save_results(self):
        """Save results to file"""
        fp = self.results_file
        if fp is None:
            raise ValueError("No filepath provided")
        _, ext = os.path.splitext(fp)

        # save file based on extension
        if ext == ".parquet":
            self.results.write_parquet(fp)
        elif ext == ".csv":
            self.results.write_csv(fp)
        elif ext == ".json":
            self.results.write_json(fp)
        else:
            raise ValueError(f"Unsupported file format: {ext}")


def load_results(fp: str) -> pl.DataFrame:
    """Load a results table written by `FlexibilityLadder.evaluate`."""
    _, ext = os.path.splitext(fp)

    # load file based on extension
    if ext == ".parquet":
        loaded = pl.read_parquet(fp)
        if loaded.schema != RESULTS_SCHEMA:
            raise ValueError(f"Incorrect file schema: {loaded.schema}")
    elif ext == ".csv":
        loaded = pl.read_csv(fp, schema=RESULTS_SCHEMA)
    elif ext == ".json":
        loaded = pl.read_json(fp, schema=RESULTS_SCHEMA)
    else:
        raise ValueError(f"Unsupported file format: {ext}")

    return loaded
