"""Application error types.

Every error a route can raise carries its HTTP status and the message the
client sees. Handlers in ``main.py`` turn them into ``{"message": ..., ...}``
JSON bodies.
"""
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError


class ConfigurationError(RuntimeError):
    """Raised at startup when required settings are missing or invalid."""


class AppError(Exception):
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, **details: Any):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, **self.details}


class ValidationFailed(AppError):
    status_code = 400
    message = "Invalid request data"

    def __init__(self, errors: List[Dict[str, str]], message: Optional[str] = None):
        super().__init__(message, errors=errors)
        self.errors = errors

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationFailed":
        errors = [
            {
                "path": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        return cls(errors)


class InvalidBookingData(ValidationFailed):
    message = "Invalid booking data"


class InvalidTableData(ValidationFailed):
    message = "Invalid table data"


class InvalidCategoryData(ValidationFailed):
    message = "Invalid category data"


class InvalidMenuItemData(ValidationFailed):
    message = "Invalid menu item data"


class InvalidImageData(ValidationFailed):
    message = "Invalid image data"


class InvalidContactData(ValidationFailed):
    message = "Invalid contact info data"


class InvalidHoursData(ValidationFailed):
    message = "Invalid opening hours data"


class InvalidLocationData(ValidationFailed):
    message = "Invalid location data"


class InvalidFloorPlanElementData(ValidationFailed):
    message = "Invalid floor plan element data"


class InvalidSettingData(ValidationFailed):
    message = "Invalid setting data"


class InvalidUserData(ValidationFailed):
    message = "Invalid registration data"


class MissingCredentials(ValidationFailed):
    message = "Email and password are required"


class InvalidStatus(AppError):
    status_code = 400
    message = "Invalid status"


class Unauthorized(AppError):
    status_code = 401
    message = "Unauthorized"


class InvalidCredentials(AppError):
    status_code = 401
    message = "Invalid credentials"


class Forbidden(AppError):
    status_code = 403
    message = "Admin access required"


class RegistrationDisabled(AppError):
    status_code = 403
    message = "Registration is currently disabled"

    def __init__(self):
        super().__init__(error="New admin registrations are not allowed at this time")


class NotFound(AppError):
    status_code = 404
    message = "Not found"

    def __init__(self, entity: str):
        super().__init__(f"{entity} not found")


class DuplicateEmail(AppError):
    # 409 would be the conventional code; existing clients expect 400
    status_code = 400
    message = "User already exists"


class BookingConflict(AppError):
    status_code = 409
    message = "Table is already booked for this date and time"
