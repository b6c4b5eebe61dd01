GENERIC_DISPATCH_MESSAGE = "An error occurred while calculating BED."


class BEDAppError(ValueError):
    """Base class for errors that end a submission attempt."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BEDAppError):
    """Form input rejected before anything is sent."""


class DispatchError(BEDAppError):
    """The calculation service could not produce a usable result."""

    def __init__(self, message: str = GENERIC_DISPATCH_MESSAGE) -> None:
        super().__init__(message)
