from typing import List, Optional

from museum_nav.repositories.base import Record, Repository


class DestinationService:
    """Read access to navigable points of interest"""

    def __init__(self, destinations: Repository):
        self.destinations = destinations

    async def get_by_id(self, destination_id: int) -> Optional[Record]:
        return await self.destinations.find_by_id(destination_id)

    async def list_all(self) -> List[Record]:
        return await self.destinations.list_all()
