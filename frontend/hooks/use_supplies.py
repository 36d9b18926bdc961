import logging
from typing import List, Optional

from frontend.core.api import RESPONSE_ERRORS
from frontend.schemas.supply import Supply
from frontend.services.supply_service import SupplyService

logger = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "Failed to fetch supplies."


class SupplyCollection:
    """
    Supply list state for a page: `loading`, `error` and `data`.

    Every fetch is tagged with a generation number. `unmount()` or a newer
    `refetch()` bumps the generation, and a result that comes back for an older
    one is dropped without touching state.
    """

    def __init__(self, service: SupplyService):
        self.service = service
        self.data: List[Supply] = []
        self.loading: bool = True
        self.error: Optional[str] = None
        self._generation = 0
        self._mounted = False

    def mount(self) -> None:
        self._mounted = True
        self.refetch()

    def unmount(self) -> None:
        self._mounted = False
        self._generation += 1

    def is_current(self, generation: int) -> bool:
        return self._mounted and generation == self._generation

    def refetch(self) -> None:
        self._generation += 1
        generation = self._generation
        self.loading = True
        self.error = None
        try:
            result = self.service.get_all()
        except RESPONSE_ERRORS:
            logger.exception("Error fetching supplies")
            if self.is_current(generation):
                self.error = FETCH_ERROR_MESSAGE
                self.loading = False
            return

        if not self.is_current(generation):
            logger.debug("Discarding stale supply fetch (generation %d)", generation)
            return
        self.data = result
        self.loading = False

    def find(self, supply_id: int) -> Optional[Supply]:
        for supply in self.data:
            if supply.id == supply_id:
                return supply
        return None
