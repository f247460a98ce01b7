"""
Advisor Auth Domain Enums

Enumeration types used across domain entities.
"""

from enum import Enum


class AdvisorStatus(str, Enum):
    """Advisor account status"""

    active = "active"
    inactive = "inactive"
    suspended = "suspended"


class ResetTokenState(str, Enum):
    """Derived lifecycle state of a password reset token (never stored)"""

    active = "active"
    used = "used"
    expired = "expired"
