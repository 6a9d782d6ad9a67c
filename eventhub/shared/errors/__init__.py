from .base import (
    AppError,
    DomainError,
    ImageRequiredError,
    ImageTooLargeError,
    InfrastructureError,
    UnauthorizedError,
    UnsupportedImageTypeError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "ImageRequiredError",
    "ImageTooLargeError",
    "InfrastructureError",
    "UnauthorizedError",
    "UnsupportedImageTypeError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
