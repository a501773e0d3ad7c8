class AppError(Exception):
    """Base application error for the ipquery client."""


class IpQueryError(AppError):
    """Base error for ipquery.io lookup failures."""


class NetworkError(IpQueryError):
    """Raised when the HTTP exchange could not be established or completed (DNS, connect, TLS, timeout)."""


class DecodeError(IpQueryError):
    """Raised when the provider response does not match the expected schema."""

    def __init__(self, message: str, body: str | None = None) -> None:
        super().__init__(message)
        self.body = body

    def __reduce__(self):
        return type(self), (str(self), self.body)


class UpstreamServiceError(IpQueryError):
    """Raised when ipquery.io answers with a non-2xx HTTP status."""

    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __reduce__(self):
        return type(self), (str(self), self.status_code, self.body)


class InvalidInputError(IpQueryError):
    """Raised when a lookup is called with input that cannot form a request."""
