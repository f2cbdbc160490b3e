"""Email Transport Interface

Defines the contract for sending invoice emails.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from pydantic import BaseModel, Field


class EmailAttachment(BaseModel):
    filename: str
    content: bytes
    mime_type: str = "application/pdf"


class OutgoingEmail(BaseModel):
    """Structured message handed to a transport"""

    from_address: str = Field(..., description="Sender, may include a display name")
    to: str = Field(..., description="Recipient address")
    bcc: Optional[str] = Field(default=None, description="Blind copy recipient")
    subject: str
    body: str
    attachments: List[EmailAttachment] = Field(default_factory=list)


class EmailDeliveryError(Exception):
    """Any failure of the underlying transport"""


class EmailTransport(ABC):
    """
    Abstract transport for outgoing email

    Implementations can send through:
    - SMTP
    - Logging only (development)
    """

    @abstractmethod
    async def send(self, message: OutgoingEmail) -> None:
        """
        Send a message

        Args:
            message: OutgoingEmail to deliver

        Raises:
            EmailDeliveryError: If delivery failed for any reason
        """
        pass
