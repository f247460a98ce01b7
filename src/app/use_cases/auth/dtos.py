"""
Password Reset Use Case DTOs (Data Transfer Objects)

Response classes for the password reset flow.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Response DTOs
# ============================================================================


class PasswordResetMessageResponse(BaseModel):
    """Response for request-reset and confirm-reset use cases"""

    success: bool
    message: str


class ResetTokenDetails(BaseModel):
    """Non-sensitive token details shown on the reset confirmation page"""

    model_config = ConfigDict(populate_by_name=True)

    email: str
    name: str
    expires_at: datetime = Field(alias="expiresAt")


class VerifyResetTokenResponse(BaseModel):
    """Response for verify reset token use case"""

    success: bool
    message: str
    data: ResetTokenDetails
