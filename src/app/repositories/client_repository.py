"""Client Repository Interface

Read access to clients for the invoicing core.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.client import Client


class ClientRepository(ABC):

    @abstractmethod
    async def get_by_id(self, client_id: int) -> Optional[Client]:
        """
        Retrieve client by ID

        Args:
            client_id: Client ID

        Returns:
            Client if found, None otherwise
        """
        pass
