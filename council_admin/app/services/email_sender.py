from abc import ABC, abstractmethod
from typing import Optional

from council_admin.domain.entities import Contact


class EmailDeliveryError(Exception):
    """Raised when an outbound email could not be delivered"""


class EmailSender(ABC):
    """Outbound account email interface - application layer"""

    @abstractmethod
    async def send_verification_email(self, email: str, name: str, token: str) -> None:
        pass

    @abstractmethod
    async def send_account_approved_email(self, email: str, name: str) -> None:
        pass

    @abstractmethod
    async def send_account_rejected_email(
        self, email: str, name: str, reason: Optional[str] = None
    ) -> None:
        pass

    @abstractmethod
    async def send_new_registration_notification(self, name: str, email: str) -> None:
        """Tell administrators a verified account is waiting for approval"""
        pass

    @abstractmethod
    async def send_password_reset_email(self, email: str, name: str, token: str) -> None:
        pass

    @abstractmethod
    async def send_test_email(self, email: str) -> None:
        """Send a connectivity check message through the configured account"""
        pass

    @abstractmethod
    async def send_contact_notification(self, contact: Contact) -> None:
        """Forward a contact form submission to the notification inbox"""
        pass

    def invalidate(self) -> None:
        """Drop cached delivery credentials so the next send rereads them"""
