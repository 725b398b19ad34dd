"""
ScamGuard exceptions.

    ScamGuardError
    ├── ValidationError       rejected user input (address, chain)
    ├── DataFetchError        explorer unreachable, slow or failing
    └── PatternRegistryError  scam pattern store unreadable

``message`` is safe to print to the user; ``technical_message`` goes
to the logs. The risk engine itself raises none of these.
"""


class ScamGuardError(Exception):
    """
    Base class for ScamGuard errors.

    Attributes:
        message: Text for the user
        technical_message: Text for the logs (defaults to message)
    """

    def __init__(
        self,
        message: str = "Something went wrong. Please try again later.",
        technical_message: str | None = None,
    ):
        self.message = message
        self.technical_message = technical_message or message
        super().__init__(self.technical_message)

    def __str__(self) -> str:
        return self.technical_message


class ValidationError(ScamGuardError):
    """Malformed contract address or unsupported chain."""

    def __init__(
        self,
        message: str = "Invalid contract address.",
        technical_message: str | None = None,
    ):
        super().__init__(message, technical_message)


class DataFetchError(ScamGuardError):
    """
    Contract data could not be fetched.

    Covers HTTP errors, rate limits, timeouts and network failures.
    An explorer that answers "no such contract" is not an error.
    """

    def __init__(
        self,
        message: str = "Could not fetch contract data. Please try again later.",
        technical_message: str | None = None,
    ):
        super().__init__(message, technical_message)


class PatternRegistryError(ScamGuardError):
    """
    Scam pattern registry could not be loaded.

    Callers degrade to an empty pattern snapshot.
    """

    def __init__(
        self,
        message: str = "Scam pattern registry is unavailable.",
        technical_message: str | None = None,
    ):
        super().__init__(message, technical_message)
