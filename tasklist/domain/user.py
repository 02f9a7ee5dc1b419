"""User domain models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    """User data transfer object."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Unique user ID from the document store")
    auth0_id: str = Field(..., description="Identity provider subject claim")
    email: str = Field(..., description="Email address reported by the identity provider")
    name: str = Field(..., description="Display name of the user")
    created_at: datetime = Field(..., description="Creation timestamp")


class UserCreate(BaseModel):
    """Pydantic model for creating a user record."""

    auth0_id: str = Field(..., min_length=1, description="Identity provider subject claim")
    email: str = Field(..., description="Email address")
    name: str = Field(..., description="Display name")

    @field_validator("email", "name")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Trim surrounding whitespace, as the store does for these fields."""
        return v.strip()
