"""
Base Sender

Abstract interface for the mail transport.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class SendResult:
    """Result of a send attempt"""
    success: bool
    error: Optional[str] = None


@dataclass
class EmailMessage:
    """Rendered email ready for the transport"""
    to: str
    subject: str
    html: str
    text: Optional[str] = None


class BaseSender(ABC):
    """Abstract mail transport"""

    @property
    def is_configured(self) -> bool:
        """False when the transport has no credentials and should not be used"""
        return True

    @abstractmethod
    async def send(self, message: EmailMessage) -> SendResult:
        """
        Send one email.

        Args:
            message: Rendered message (recipient, subject, html, optional text)
        Returns:
            SendResult with success flag and optional error message
        """
        ...

    @abstractmethod
    async def close(self):
        """Cleanup resources"""
        ...
