# =============================================================================
# core/models/contact.py - Contact Form Schemas
# =============================================================================
# ContactFormData is validated rule by rule; the first failing rule's message
# is shown to the visitor verbatim, so each rule carries its own sentence.
# =============================================================================

import unicodedata
from typing import Literal

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

NAME_MIN_LENGTH = 2
MESSAGE_MIN_LENGTH = 10


class ContactFormData(BaseModel):
    """
    A contact form submission.

    Example:
        {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "message": "Loved the Flutter case study!"
        }
    """

    # Defaults are validated too, so a missing field fails with the same rule
    # message as an empty one
    model_config = ConfigDict(validate_default=True)

    name: str = ""
    email: str = ""
    message: str = ""

    @field_validator("name", "email", "message", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("name")
    @classmethod
    def name_well_formed(cls, value: str) -> str:
        if len(value) < NAME_MIN_LENGTH:
            raise PydanticCustomError("name_too_short", "Name must be at least 2 characters")
        if any(unicodedata.category(ch) == "Cc" for ch in value):
            # The name ends up in the Subject header
            raise PydanticCustomError(
                "name_control_chars", "Name must not contain line breaks or control characters"
            )
        return value

    @field_validator("email")
    @classmethod
    def email_well_formed(cls, value: str) -> str:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            raise PydanticCustomError("email_invalid", "Please enter a valid email address")
        return value

    @field_validator("message")
    @classmethod
    def message_long_enough(cls, value: str) -> str:
        if len(value) < MESSAGE_MIN_LENGTH:
            raise PydanticCustomError("message_too_short", "Message must be at least 10 characters")
        return value


class EmailResult(BaseModel):
    """Outcome of a contact submission, returned to the visitor as-is."""

    success: bool
    message: str

    # Lets the route choose 400 vs 500; not part of the response body
    failure: Literal["validation", "delivery"] | None = Field(default=None, exclude=True)
