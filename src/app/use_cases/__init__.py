"""
Use Cases

Organized into domain folders:
- auth/: Password reset flow
- maintenance/: Housekeeping jobs
"""

from .auth import (
    RequestPasswordResetUseCase,
    VerifyResetTokenUseCase,
    ConfirmPasswordResetUseCase,
)
from .maintenance import CleanupExpiredResetTokensUseCase

__all__ = [
    # Auth
    "RequestPasswordResetUseCase",
    "VerifyResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    # Maintenance
    "CleanupExpiredResetTokensUseCase",
]
