"""Custom exceptions for the API layer and the feedback pipeline."""


class ApiException(Exception):
    """Base exception for all API errors."""

    def __init__(
        self,
        status_code: int,
        message: str,
        details: dict | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class UnauthorizedError(ApiException):
    """Unauthorized access exception."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(401, message)


class ValidationError(ApiException):
    """Request validation error."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(422, message, details)


class SignatureVerificationError(UnauthorizedError):
    """Webhook signature verification failed."""

    def __init__(self, source: str = "webhook") -> None:
        super().__init__(f"Invalid {source} signature")


class PipelineError(Exception):
    """Base exception for failures while turning an event into feedback."""


class ResolutionError(PipelineError):
    """File content could not be fetched or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot resolve content for {path}: {reason}")


class NotAFile(ResolutionError):
    """The path resolved to a directory listing."""

    def __init__(self, path: str) -> None:
        super().__init__(path, "expected a file but received a directory")


class UnreadableContent(ResolutionError):
    """The response carried neither plain text nor an encoded body."""

    def __init__(self, path: str, reason: str = "no text or encoded content in response") -> None:
        super().__init__(path, reason)


class ParseError(PipelineError):
    """Structural parsing of a file failed."""

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"Cannot parse {filename}: {reason}")


class GenerationError(PipelineError):
    """The feedback generator failed to produce a reply."""


class PublishError(PipelineError):
    """Posting the comment back to the platform failed."""

    def __init__(self, target: str, reason: str) -> None:
        self.target = target
        super().__init__(f"Failed to post comment on {target}: {reason}")


class PayloadError(ValidationError, PipelineError):
    """Webhook payload is missing an identifier the pipeline needs."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message, {"missing": missing} if missing else None)
