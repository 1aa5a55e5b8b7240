"""mergeready exception classes."""


class MergeReadyError(Exception):
    """Base exception for all mergeready errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(MergeReadyError):
    """Raised when client configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class AuthenticationError(MergeReadyError):
    """Raised when the API token is missing or rejected."""

    pass


class AuthorizationError(MergeReadyError):
    """Raised when access to the repository is denied."""

    pass


class NotFoundError(MergeReadyError):
    """Raised when the repository or pull request does not exist."""

    pass


class RateLimitedError(MergeReadyError):
    """Raised when the API rate limit is exhausted."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.retry_after = retry_after


class ValidationError(MergeReadyError):
    """Raised when the API rejects the request parameters."""

    pass


class ServerError(MergeReadyError):
    """Raised on server errors (5xx) and connection failures."""

    pass
