"""Exceptions raised at the remote-call and file-read boundaries.

Local input problems use :class:`aetherlens.core.validation.ValidationError`
instead; everything here describes something that went wrong after the input
was accepted.
"""


class RemoteServiceError(RuntimeError):
    """Base exception for failures of a remote generation service.

    The message is shown to the user verbatim, so it should already be
    human-readable.
    """

    pass


class GenAIServiceError(RemoteServiceError):
    """Raised when an image or text generation call fails.

    Attributes:
        operation: Short name of the failed call (e.g. ``"generate_images"``).
    """

    def __init__(self, message: str, operation: str = ""):
        super().__init__(message)
        self.operation = operation


class IdentityBackendError(RemoteServiceError):
    """Raised when the identity backend rejects or fails a request.

    Attributes:
        status_code: HTTP status returned by the backend, if any.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ImageReadError(Exception):
    """Raised when a local image file or payload cannot be decoded."""

    pass
