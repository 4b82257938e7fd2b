"""Error taxonomy surfaced to HTTP callers."""


class TutorRelayError(Exception):
    """Base error carrying an HTTP status code and a caller-safe message."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def detail(self) -> str:
        """Message placed in the HTTP error body."""
        return self.message

    def to_dict(self) -> dict:
        return {"statusCode": self.status_code, "message": self.detail}


class InvalidRequestError(TutorRelayError):
    """The request names no subject, topic or modification request."""

    status_code = 400


class UpstreamError(TutorRelayError):
    """The completion API answered with an error status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def detail(self) -> str:
        return f"Error while contacting Mistral: {self.status_code} {self.message}"


class InternalError(TutorRelayError):
    """Anything unexpected. The message never includes internals."""

    status_code = 500

    def __init__(self, message: str = "Unexpected error occurred") -> None:
        super().__init__(message)
