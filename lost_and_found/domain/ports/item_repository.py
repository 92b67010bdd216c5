"""Port interface for lost and found storage."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.claim import Claim
from ..models.found_item import FoundItemRecord
from ..models.lost_item import LostItemReport, LostItemSecrets


class ItemRepository(ABC):
    """Abstract interface for the lost and found store.

    This port defines the reads the matching and claim flows depend on and
    the writes their results feed. Concrete implementations live in the
    infrastructure layer (in-memory, SQLModel).
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the store (connections, tables)."""
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        """Release the store's resources."""
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the store answers a trivial query."""
        pass

    @abstractmethod
    async def add_lost_item(self, report: LostItemReport) -> LostItemReport:
        """Persist a lost item report.

        Args:
            report: Report without an id

        Returns:
            The stored report with its assigned id
        """
        pass

    @abstractmethod
    async def get_lost_item(self, lost_item_id: int) -> Optional[LostItemReport]:
        """Fetch a lost item report by id, or None if it does not exist."""
        pass

    @abstractmethod
    async def get_lost_item_secrets(self, lost_item_id: int) -> Optional[LostItemSecrets]:
        """Fetch only the verification secrets of a lost item report."""
        pass

    @abstractmethod
    async def list_lost_items(self, reporter_id: Optional[int] = None) -> List[LostItemReport]:
        """List lost item reports, newest first.

        Args:
            reporter_id: Restrict to one reporter when given
        """
        pass

    @abstractmethod
    async def add_found_item(self, record: FoundItemRecord) -> FoundItemRecord:
        """Persist a found item record and return it with its assigned id."""
        pass

    @abstractmethod
    async def list_available_found_items(self) -> List[FoundItemRecord]:
        """List found items with status 'available', in the order they were logged."""
        pass

    @abstractmethod
    async def add_claim(self, claim: Claim) -> Claim:
        """Persist a claim with its adjudicated status."""
        pass

    @abstractmethod
    async def get_claim(self, claim_id: int) -> Optional[Claim]:
        """Fetch a stored claim by id."""
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the repository name."""
        pass
