"""User API schemas."""

from pydantic import BaseModel, Field


class UserRef(BaseModel):
    """User as carried in UserCreatedEvent."""

    user_id: str = Field(..., min_length=1)


class UserCreatedRequest(BaseModel):
    """Request body for POST /users (UserCreatedEvent from the account service)."""

    user: UserRef


class UserCreatedResponse(BaseModel):
    """Response after the user document was created."""

    status: str = Field(default="User created successfully")
