"""
Exceptions raised by the benchmark pipeline.

Everything derives from BenchmarkError so the CLI can report any
pipeline failure with a single handler.
"""


class BenchmarkError(Exception):
    """Raised when benchmark execution fails."""
    pass


class TransportError(BenchmarkError):
    """Raised when an HTTP call fails or returns an unusable body."""
    pass


class ProvisioningError(BenchmarkError):
    """Raised when a model is missing and could not be pulled."""

    def __init__(self, model: str, status: str = ""):
        self.model = model
        self.status = status
        message = f"Error pulling model {model}"
        if status:
            message += f" (status: {status})"
        super().__init__(message)


class ConfigurationError(BenchmarkError):
    """Raised for an unsupported platform or unit kind."""
    pass


class SubmissionError(BenchmarkError):
    """Raised when the collector rejects or garbles a submission."""
    pass
