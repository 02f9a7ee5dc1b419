"""Authentication state shared with the presentation layer."""

from typing import Any

from tasklist.client.observable import Observable


class AuthStore(Observable):
    def __init__(self) -> None:
        super().__init__()
        self.is_authenticated = False
        self.user: dict[str, Any] | None = None

    def set_authenticated(self, is_authenticated: bool) -> None:
        self.is_authenticated = is_authenticated
        self._notify()

    def set_user(self, user: dict[str, Any] | None) -> None:
        self.user = user
        self._notify()
