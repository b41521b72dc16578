from typing import List, Optional
from error_messages import get_error_message

MAX_MESSAGE_LENGTH = 280

class Feed:
    """Client-side feed state: messages, draft, error slot and loading flag.

    Messages are kept in the order the service returned them. The feed never
    persists anything; it is a transient copy for rendering.
    """

    def __init__(self, api):
        self.api = api
        self.messages: List[dict] = []
        self.draft = ""
        self.error: Optional[str] = None
        self.loading = False

    @property
    def remaining(self) -> int:
        return MAX_MESSAGE_LENGTH - len(self.draft)

    @property
    def over_limit(self) -> bool:
        return self.remaining < 0

    @property
    def counter_text(self) -> str:
        return f"{self.remaining} characters remaining"

    @property
    def can_submit(self) -> bool:
        return bool(self.draft.strip()) and not self.loading

    async def load(self):
        try:
            messages = await self.api.get_messages()
        except Exception as e:
            self.error = get_error_message(e)
            return

        self.messages = list(messages)
        self.error = None

    async def submit(self) -> Optional[dict]:
        """Post the draft; returns the created message, or None if nothing was posted."""
        if not self.can_submit:
            return None

        self.error = None
        self.loading = True
        try:
            message = await self.api.create_message(self.draft)
        except Exception as e:
            # keep the draft so the user can retry
            self.error = get_error_message(e)
            return None
        finally:
            self.loading = False

        self.messages = [message] + self.messages
        self.draft = ""
        return message
