"""
Advisor Auth Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import AdvisorStatus, ResetTokenState

# Export all entities
from .advisor import Advisor
from .password_reset_token import PasswordResetToken
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "AdvisorStatus",
    "ResetTokenState",
    # Entities
    "Advisor",
    "PasswordResetToken",
    "AuditEvent",
]
