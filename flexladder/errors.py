class FittingError(ValueError):
    """A linear model could not be fitted (e.g. rank-deficient design matrix)."""

    def __init__(self, message: str, model_index: int | None = None) -> None:
        super().__init__(message, model_index)
        self.message = message
        self.model_index = model_index

    def __str__(self) -> str:
        if self.model_index is None:
            return self.message
        return f"model {self.model_index}: {self.message}"


class MissingFieldError(KeyError):
    """A required column is not present in a frame."""

    def __init__(self, field: str, columns=None) -> None:
        self.field = field
        self.columns = list(columns) if columns is not None else None
        super().__init__(field)

    def __str__(self) -> str:
        if self.columns is None:
            return f"Missing column: {self.field}"
        return f"Missing column: {self.field} (has {self.columns})"
