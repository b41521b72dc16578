from typing import Any, Optional
from pydantic import BaseModel

MAX_MESSAGE_LENGTH = 280

class ValidationResult(BaseModel):
    valid: bool
    error: Optional[str] = None

# Check message content; callers must store content.strip()
def validate_message_content(content: Any) -> ValidationResult:
    if not isinstance(content, str):
        return ValidationResult(valid=False, error="Message content must be a string")

    trimmed = content.strip()
    if len(trimmed) == 0:
        return ValidationResult(valid=False, error="Message content cannot be empty")

    if len(trimmed) > MAX_MESSAGE_LENGTH:
        return ValidationResult(
            valid=False,
            error=f"Message content must be {MAX_MESSAGE_LENGTH} characters or less"
        )

    return ValidationResult(valid=True)
