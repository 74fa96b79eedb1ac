"""Custom exception classes for structured error handling."""

from typing import Any


class LingoChatError(Exception):
    """Base exception for all lingochat errors."""

    def __init__(self, code: str, message: str, status_code: int = 500) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "code": self.code}


class EmailAlreadyExistsError(LingoChatError):
    def __init__(self, message: str = "Email already exists") -> None:
        super().__init__(code="EMAIL_EXISTS", message=message, status_code=400)


class UserNotFoundError(LingoChatError):
    # Login reports an unknown email as a bad request; invites report 404.
    def __init__(self, message: str = "User not found", status_code: int = 404) -> None:
        super().__init__(code="USER_NOT_FOUND", message=message, status_code=status_code)


class InvalidPasswordError(LingoChatError):
    def __init__(self, message: str = "Invalid password") -> None:
        super().__init__(code="INVALID_PASSWORD", message=message, status_code=400)


class AccessDeniedError(LingoChatError):
    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(code="ACCESS_DENIED", message=message, status_code=401)


class InvalidTokenError(LingoChatError):
    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(code="INVALID_TOKEN", message=message, status_code=400)


class RoomNotFoundError(LingoChatError):
    def __init__(self, message: str = "Room not found") -> None:
        super().__init__(code="ROOM_NOT_FOUND", message=message, status_code=404)


class InvalidPayloadError(LingoChatError):
    def __init__(self, message: str = "Invalid payload") -> None:
        super().__init__(code="INVALID_PAYLOAD", message=message, status_code=422)


class UnknownEventError(LingoChatError):
    def __init__(self, message: str = "Unknown event") -> None:
        super().__init__(code="UNKNOWN_EVENT", message=message, status_code=400)


class DatabaseConnectionError(LingoChatError):
    def __init__(self, message: str = "Database connection failed") -> None:
        super().__init__(code="DATABASE_CONNECTION_ERROR", message=message, status_code=503)


class RedisConnectionError(LingoChatError):
    def __init__(self, message: str = "Redis connection failed") -> None:
        super().__init__(code="REDIS_CONNECTION_ERROR", message=message, status_code=503)
