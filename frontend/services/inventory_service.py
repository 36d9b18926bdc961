import logging
from typing import List

from frontend.core.api import ApiClient
from frontend.schemas.supply import InventoryTransaction, InventoryTransactionRequest

logger = logging.getLogger(__name__)

INVENTORY_PATH = "/inventory"


class InventoryService:
    """
    Append-only ledger operations. Quantity and available stock are validated by
    the server; its rejections come back as ApiError.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    def get_all(self) -> List[InventoryTransaction]:
        data = self.client.get(INVENTORY_PATH) or []
        logger.debug("Fetched %d transactions", len(data))
        return [InventoryTransaction.model_validate(item) for item in data]

    def stock_in(self, request: InventoryTransactionRequest) -> InventoryTransaction:
        return self._move("in", request.model_copy(update={"type": "IN"}))

    def stock_out(self, request: InventoryTransactionRequest) -> InventoryTransaction:
        return self._move("out", request.model_copy(update={"type": "OUT"}))

    def submit(self, request: InventoryTransactionRequest) -> InventoryTransaction:
        if request.type == "IN":
            return self.stock_in(request)
        return self.stock_out(request)

    def get_by_supply_id(self, supply_id: int) -> List[InventoryTransaction]:
        data = self.client.get(f"{INVENTORY_PATH}/supply/{supply_id}") or []
        logger.debug("Fetched %d transactions for supply_id=%s", len(data), supply_id)
        return [InventoryTransaction.model_validate(item) for item in data]

    def _move(self, direction: str, request: InventoryTransactionRequest) -> InventoryTransaction:
        logger.info(
            "Stock %s: supply_id=%s quantity=%s", direction, request.supply_id, request.quantity
        )
        data = self.client.post(f"{INVENTORY_PATH}/{direction}", json=request.to_payload())
        return InventoryTransaction.model_validate(data)
