"""
Advisor Entity

Account record whose password the reset flow mutates.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from .enums import AdvisorStatus


class Advisor(SQLModel, table=True):
    """
    Advisor entity - a financial advisor account.

    Business Rules:
    - Email is unique and stored lowercase
    - Password stored as bcrypt hash (cost factor 12 or higher)
    - Only active advisors may reset their password
    """

    __tablename__ = "advisors"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    status: AdvisorStatus = Field(default=AdvisorStatus.active)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def is_active(self) -> bool:
        return self.status == AdvisorStatus.active
