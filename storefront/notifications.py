"""
Notification channel.

A single transient message surface (toast). A new message replaces the
current one; each message dismisses itself after the configured duration.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional

from storefront.config import DEFAULT_TOAST_DURATION_MS
from storefront.i18n import DEFAULT_LANGUAGE, get_text
from storefront.logging import get_logger

logger = get_logger(__name__)

# Message keys
TOAST_CART_ADDED = "toast.cart_added"
TOAST_CART_REMOVED = "toast.cart_removed"
TOAST_FAV_ADDED = "toast.fav_added"
TOAST_FAV_REMOVED = "toast.fav_removed"


@dataclass(frozen=True)
class Notification:
    message: str
    shown_at: float
    expires_at: float


class Notifier:
    """Toast surface with auto-dismiss."""

    def __init__(
        self,
        duration_ms: Optional[int] = DEFAULT_TOAST_DURATION_MS,
        lang: str = DEFAULT_LANGUAGE,
        clock: Callable[[], float] = time.monotonic,
        sink: Optional[Callable[[Notification], None]] = None,
    ):
        # 0 or missing falls back to the default duration
        self.duration_ms = duration_ms or DEFAULT_TOAST_DURATION_MS
        self.lang = lang
        self.clock = clock
        self.sink = sink
        self.history: list[Notification] = []
        self._active: Optional[Notification] = None

    def show(self, message: str) -> Notification:
        now = self.clock()
        notification = Notification(
            message=message,
            shown_at=now,
            expires_at=now + self.duration_ms / 1000,
        )
        self._active = notification
        self.history.append(notification)

        if self.sink is not None:
            try:
                self.sink(notification)
            except Exception:
                logger.error("Notification sink failed", exc_info=True)
        return notification

    def notify(self, key: str, **kwargs) -> Notification:
        """Show the translated message for key."""
        return self.show(get_text(key, self.lang, **kwargs))

    @property
    def current(self) -> Optional[str]:
        """Message still on screen, or None once dismissed."""
        if self._active is None:
            return None
        if self.clock() >= self._active.expires_at:
            self._active = None
            return None
        return self._active.message

    def dismiss(self) -> None:
        self._active = None

    @property
    def messages(self) -> list[str]:
        return [n.message for n in self.history]
