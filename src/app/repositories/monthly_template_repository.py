"""Monthly Template Repository Interface

Defines the contract for monthly template persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.monthly_template import MonthlyTemplate


class MonthlyTemplateRepository(ABC):

    @abstractmethod
    async def create(self, template: MonthlyTemplate) -> MonthlyTemplate:
        """
        Create a new monthly template

        Args:
            template: MonthlyTemplate entity to persist

        Returns:
            Created MonthlyTemplate with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, template_id: int) -> Optional[MonthlyTemplate]:
        """
        Retrieve template by ID

        Args:
            template_id: Template ID

        Returns:
            MonthlyTemplate if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_for_month(self, owner_id: str, year: int, month: int) -> List[MonthlyTemplate]:
        """
        Retrieve an owner's templates for a calendar month

        Args:
            owner_id: Owner identifier
            year: Calendar year
            month: Calendar month (1-12)

        Returns:
            List of templates
        """
        pass

    @abstractmethod
    async def update(self, template: MonthlyTemplate) -> MonthlyTemplate:
        """
        Update an existing template

        Args:
            template: MonthlyTemplate entity with updated values

        Returns:
            Updated MonthlyTemplate
        """
        pass
