"""
Failure taxonomy for the client.

NetworkError and HttpError come from single requests. FetchError and the
saga failures wrap them and keep the underlying error in ``cause``.
"""
from typing import Optional

CONNECTION_TEXT = "Error connecting to backend"


class ClientError(Exception):
    """Base for everything the client raises on purpose"""

    @property
    def text(self) -> str:
        return str(self)


class NetworkError(ClientError):
    """The request never produced a response (connectivity, timeout)"""

    def __init__(self, message: str = CONNECTION_TEXT):
        super().__init__(message)


class HttpError(ClientError):
    """Non-2xx response; ``text`` is the server's body, verbatim"""

    def __init__(self, status: int, text: str):
        super().__init__(text)
        self.status = status
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    def __str__(self):
        return self._text or f"HTTP {self.status}"


class NotFoundError(HttpError):
    """A single record could not be retrieved"""


class ResponseFormatError(ClientError):
    """Response that could not be read, or whose body does not match the expected record shape"""


class ValidationError(ClientError):
    """Form input failed coercion before anything was sent"""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


class WrappedError(ClientError):
    """A failure that wraps the request error that caused it"""

    def __init__(self, cause: ClientError, message: Optional[str] = None):
        super().__init__(message or str(cause))
        self.cause = cause

    @property
    def text(self) -> str:
        return self.cause.text


class FetchError(WrappedError):
    """Listing a collection failed"""

    def __init__(self, resource: str, cause: ClientError):
        super().__init__(cause, f"could not load {resource}: {cause}")
        self.resource = resource


class DonationCreateFailed(WrappedError):
    """First step of supporter creation failed; nothing was written"""


class SupporterFetchFailed(WrappedError):
    """The current supporter could not be read, so no update was sent"""


class ConsistencyError(WrappedError):
    """The second step of a two-step write failed after the first succeeded"""


class SupporterCreateFailed(ConsistencyError):
    """The backing donation exists but its supporter does not"""

    def __init__(self, donation, cause: ClientError):
        super().__init__(cause, f"donation {donation.id} created but supporter failed: {cause}")
        self.donation = donation


def root_cause(error: ClientError) -> ClientError:
    while isinstance(error, WrappedError):
        error = error.cause
    return error


def is_connectivity_failure(error: ClientError) -> bool:
    return isinstance(root_cause(error), NetworkError)
