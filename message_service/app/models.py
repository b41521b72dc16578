import time
import uuid
from typing import List
from pydantic import BaseModel, ConfigDict, Field

def now_ms() -> int:
    return int(time.time() * 1000)

class Message(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    content: str
    created_at: int = Field(alias="createdAt")

    @classmethod
    def new(cls, content: str) -> "Message":
        return cls(id=str(uuid.uuid4()), content=content, created_at=now_ms())

    def to_item(self) -> dict:
        return self.model_dump(by_alias=True)

class MessageResponse(BaseModel):
    message: Message

class MessagesResponse(BaseModel):
    messages: List[Message]

class ErrorResponse(BaseModel):
    error: str
    code: str
