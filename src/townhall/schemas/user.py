"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """Public view of a user, embedded as the author of content."""

    id: int
    username: str = Field(..., description="GitHub login")
    avatar_url: str

    model_config = ConfigDict(from_attributes=True)
