from typing import Any, Mapping, NamedTuple
from database import MessageStore
from errors import ErrorCode, StoreError
from logger import log_error
from models import ErrorResponse, Message, MessageResponse, MessagesResponse
from validation import validate_message_content

class HandlerResult(NamedTuple):
    status_code: int
    body: dict

def error_result(status_code: int, error: str, code: ErrorCode) -> HandlerResult:
    return HandlerResult(status_code, ErrorResponse(error=error, code=code.value).model_dump())

def internal_error() -> HandlerResult:
    return error_result(500, "Internal server error", ErrorCode.INTERNAL_ERROR)

# Validate, persist and echo back a new message
def create_message(store: MessageStore, body: Any) -> HandlerResult:
    if body is None:
        return error_result(400, "Request body is required", ErrorCode.VALIDATION_ERROR)

    content = body.get("content") if isinstance(body, Mapping) else None
    validation = validate_message_content(content)
    if not validation.valid:
        return error_result(400, validation.error, ErrorCode.VALIDATION_ERROR)

    try:
        message = Message.new(content.strip())
        store.insert(message)
    except StoreError as e:
        log_error("Database insert error", e)
        return error_result(500, "Failed to create message", ErrorCode.DATABASE_ERROR)
    except Exception as e:
        log_error("Error creating message", e)
        return internal_error()

    return HandlerResult(201, MessageResponse(message=message).model_dump(by_alias=True))

# Full feed, newest first
def list_messages(store: MessageStore) -> HandlerResult:
    try:
        messages = store.list_all()
    except StoreError as e:
        log_error("Database query error", e)
        return error_result(500, "Failed to retrieve messages", ErrorCode.DATABASE_ERROR)
    except Exception as e:
        log_error("Error retrieving messages", e)
        return internal_error()

    return HandlerResult(200, MessagesResponse(messages=messages).model_dump(by_alias=True))
