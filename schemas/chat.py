from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatMessage(BaseModel):
    role: ChatRole = Field(..., description="Author of the message.", examples=["user"])
    content: str = Field("", description="Message text.", examples=["Which bike is best for commuting?"])

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class ChatRequest(BaseModel):
    messages: list[ChatMessage] | None = Field(None, description="The conversation so far, oldest first. Must start and end with a user message.")
    productId: str | None = Field(None, description="Catalog id of the product the user is looking at, if any.", examples=["533445d-530e-4a76-9398-5d16713b827b"])


class ChatResponse(BaseModel):
    messages: list[str] = Field(default_factory=list, description="Assistant replies with product mentions marked as {{name|id}}.")
