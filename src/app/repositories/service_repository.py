"""Service Repository Interface

Read access to catalog services for the invoicing core.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.service import Service


class ServiceRepository(ABC):

    @abstractmethod
    async def get_by_id(self, service_id: int) -> Optional[Service]:
        """
        Retrieve service by ID

        Args:
            service_id: Service ID

        Returns:
            Service if found, None otherwise
        """
        pass
