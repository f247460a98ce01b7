"""
Maintenance Use Cases

Housekeeping jobs run by the sweeper or the admin API.
"""

from .cleanup_expired_reset_tokens_use_case import (
    CleanupExpiredResetTokensResponse,
    CleanupExpiredResetTokensUseCase,
)

__all__ = [
    "CleanupExpiredResetTokensUseCase",
    "CleanupExpiredResetTokensResponse",
]
