"""Session adapter returning a fixed viewer."""

from __future__ import annotations

from sectionlinks.core.interfaces import SessionPort


class StaticSession(SessionPort):
    """SessionPort for a single known user, e.g. one CLI invocation."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id

    def current_user_id(self) -> int:
        return self.user_id
