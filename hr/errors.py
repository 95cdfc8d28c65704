"""
Service-level failures raised by the HR use cases.

Each failure carries the HTTP status the API layer renders it with and a
short human-readable message, mirroring the ``{"status", "message",
"error"}`` body clients of the service already expect.
"""


class HRServiceError(Exception):
    """Base class of every failure a use case may raise."""

    status_code = 500
    message = "Internal Server Error"

    def __init__(self, detail: str, message: str = "") -> None:
        super().__init__(detail)
        self.detail = detail
        if message:
            self.message = message


class UserNotFoundError(HRServiceError):
    """The referenced user id or email does not exist."""

    status_code = 404
    message = "User not found"


class PersonalDocumentNotFoundError(HRServiceError):
    """The user exists but owns no personal document with the given id."""

    status_code = 404
    message = "Personal document not found"


class UserAlreadyExistsError(HRServiceError):
    """Creating the user would violate email or id uniqueness."""

    status_code = 409
    message = "User with email already exists"


class StorageFailureError(HRServiceError):
    """The document store failed, timed out or was misconfigured."""

    status_code = 500
    message = "Storage failure"


class BadInputError(HRServiceError):
    """The request payload is structurally invalid."""

    status_code = 400
    message = "Invalid request body"
