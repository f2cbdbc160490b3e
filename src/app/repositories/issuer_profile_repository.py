"""Issuer Profile Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.issuer_profile import IssuerProfile


class IssuerProfileRepository(ABC):

    @abstractmethod
    async def get_by_owner(self, owner_id: str) -> Optional[IssuerProfile]:
        """
        Retrieve the profile of an owner

        Args:
            owner_id: Owner identifier

        Returns:
            IssuerProfile if the owner has filled it in, None otherwise
        """
        pass
