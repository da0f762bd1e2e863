class WealthEngineError(Exception):
    pass


class DistributionValidationError(WealthEngineError):
    """Distribution is structurally broken and must not be used."""

    def __init__(self, message: str, *, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class InvalidInputError(WealthEngineError):
    pass


class RangeNotFoundError(WealthEngineError):
    pass
