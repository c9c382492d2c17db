"""Abstract notification channel.

Components receive a notifier instead of reaching for a shared global,
so independent surfaces and conversations can be tested in isolation.
"""

from abc import ABC, abstractmethod

from .models import ToastLevel


class Notifier(ABC):
    """Capability to surface short messages to the user."""

    @abstractmethod
    def notify(self, message: str, level: ToastLevel | str = ToastLevel.SUCCESS) -> None:
        """Show a message.

        Args:
            message: Text to display
            level: "success", "error" or "info"
        """
