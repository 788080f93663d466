# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# - UserCreate: Input for POST /users
# =============================================================================

from pydantic import BaseModel, EmailStr, Field, field_validator


class UserCreate(BaseModel):
    """
    Schema for creating a user.

    Example:
        {
            "first_name": "John",
            "last_name": "Doe",
            "email": "hello@gmail.com"
        }
    """

    first_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        examples=["John"],
        description="User's first name"
    )

    last_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        examples=["Doe"],
        description="User's last name"
    )

    email: EmailStr = Field(
        ...,
        examples=["hello@gmail.com"],
        description="Email address of the user"
    )

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

