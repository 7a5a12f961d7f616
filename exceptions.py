# exceptions.py
class ApiError(Exception):
    """Base class for errors that map directly to an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(ApiError):
    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        return {"error": self.message, "field": self.field}


class DuplicateEmail(ValidationError):
    def __init__(self):
        super().__init__("email", "Email already exists")


class InvalidCredentials(ApiError):
    status_code = 400

    def __init__(self):
        super().__init__("Invalid credentials")


class MissingToken(ApiError):
    status_code = 401

    def __init__(self):
        super().__init__("Access token required")


class InvalidToken(ApiError):
    status_code = 403

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class NotFound(ApiError):
    status_code = 404

    def __init__(self, message: str = "Employee not found"):
        super().__init__(message)
