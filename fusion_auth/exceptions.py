"""FusionAuth client exceptions.

HTTP-level failures (4xx/5xx) are not exceptions: they come back as a
``Result`` tagged ``error``. Exceptions are reserved for problems the
server never got to answer, or answered with something unreadable.
"""


class FusionAuthError(Exception):
    """Base exception for all FusionAuth client operations."""
    pass


class ConfigurationError(FusionAuthError):
    """Client construction or settings input is invalid."""
    pass


class NetworkError(FusionAuthError):
    """The request never completed a round trip (timeout, refused, DNS).

    Attributes:
        method: HTTP method of the failed request
        url: Full URL of the failed request
    """

    def __init__(self, method: str, url: str, reason: str):
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(f"{method} {url}: {reason}")


class DecodeError(FusionAuthError):
    """A successful response carried a body that is not valid JSON.

    Attributes:
        response: The raw ``requests.Response``
        status_code: HTTP status code of the response
    """

    def __init__(self, response, message: str = "Response body is not valid JSON"):
        self.response = response
        self.status_code = getattr(response, "status_code", None)
        super().__init__(f"[{self.status_code}] {message}")
