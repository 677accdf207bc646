"""Domain errors for dbsetup."""


class SetupError(RuntimeError):
    """Raised when the database setup cannot continue."""


class ProviderFallback(SetupError):
    """Raised when provider automation stops and the manual flow should take over."""


class OutputParseError(SetupError):
    """Raised when a provider CLI returned output in an unexpected shape."""

    def __init__(self, message: str, raw_output: str = ""):
        super().__init__(message)
        self.raw_output = raw_output


class SetupCancelled(Exception):
    """Raised when the user deliberately stops the run. Not a failure."""
