"""Custom exceptions for table sources."""


class SourceError(Exception):
    """Base exception for all table source errors.

    Catching this handles any failure to obtain the raw table text; the
    parser and scorers never raise it.
    """

    pass


class SourceHTTPError(SourceError):
    """The sheet request failed or returned a 4xx/5xx status."""

    def __init__(self, message: str, status_code: int, url: str) -> None:
        """Initialize HTTP error with status code and URL.

        Args:
            message: Human-readable error message
            status_code: HTTP status code (0 when no response was received)
            url: URL that failed
        """
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class SourceTimeoutError(SourceError):
    """The sheet request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class SourceConfigurationError(SourceError):
    """The source was given unusable settings (no URL, bad timeout, missing file)."""

    pass
