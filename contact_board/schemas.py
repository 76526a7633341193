from datetime import datetime
from enum import Enum

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator


class MessageType(str, Enum):
    """Categories offered by the contact form's type selector."""

    CORRESPONDENCE = "correspondence"
    BUG_REPORT = "bug report"
    INQUIRY = "inquiry"

    @property
    def label(self) -> str:
        return self.value.title()


class TodoCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    todo: str = Field(min_length=1)


class ContactMessageCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    email: str
    message: str = Field(min_length=1)
    type: MessageType

    @field_validator("email")
    @classmethod
    def check_email_syntax(cls, v: str) -> str:
        """Accept a bare address only and keep it exactly as typed."""
        if "<" in v or ">" in v:
            raise ValueError("display names are not accepted")
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e)) from e
        return v


class Task(BaseModel):
    id: int
    text: str


class ContactMessage(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    message: str
    # Stored rows may carry categories the form no longer offers
    type: str
    created_at: datetime
