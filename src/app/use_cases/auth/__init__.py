"""
Password Reset Use Cases

Request, verify and confirm an advisor password reset.
"""

from .request_password_reset_use_case import GENERIC_RESET_MESSAGE, RequestPasswordResetUseCase
from .verify_reset_token_use_case import VerifyResetTokenUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import (
    PasswordResetMessageResponse,
    ResetTokenDetails,
    VerifyResetTokenResponse,
)

__all__ = [
    # Use Cases
    "RequestPasswordResetUseCase",
    "VerifyResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    # DTOs - Responses
    "PasswordResetMessageResponse",
    "VerifyResetTokenResponse",
    # DTOs - Nested Models
    "ResetTokenDetails",
    # Constants
    "GENERIC_RESET_MESSAGE",
]
