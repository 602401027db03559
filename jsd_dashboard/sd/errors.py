"""
Service Desk error taxonomy.
"""

from typing import Optional


class SDError(RuntimeError):
    pass


class SDConnectionError(SDError):
    """Network failure or timeout talking to the remote API."""


class AuthError(SDError):
    pass


class InvalidCredentialsError(AuthError):
    def __init__(self, status_code: int) -> None:
        super().__init__("Invalid credentials")
        self.status_code = int(status_code)


class ConnectionFailedError(AuthError):
    def __init__(self, reason: str) -> None:
        super().__init__("Connection failed. Please check your network and try again.")
        self.reason = str(reason or "")


class FetchError(SDError):
    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = str(body or "")


class DeleteError(SDError):
    pass


class InvalidRequestIdError(DeleteError):
    def __init__(self, request_id: str) -> None:
        super().__init__(f"Invalid request ID format: {request_id!r}. Expected format: PROJECT-123")
        self.request_id = request_id


class RequestNotFoundError(DeleteError):
    def __init__(self, request_id: str) -> None:
        super().__init__(f"Request {request_id} not found")
        self.request_id = request_id


class RequestForbiddenError(DeleteError):
    def __init__(self, request_id: str) -> None:
        super().__init__("You don't have permission to delete this request")
        self.request_id = request_id


class RemoteDeleteError(DeleteError):
    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Failed to delete service desk request: {status_code} - {body}")
        self.status_code = int(status_code)
        self.body = str(body or "")
