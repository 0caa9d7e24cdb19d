from pydantic import BaseModel, ConfigDict, Field


class ORMSchema(BaseModel):
    """Base for responses built straight from ORM rows."""

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human readable error message")
