import logging
from typing import BinaryIO, List, Optional, Union

from frontend.core.api import ApiClient
from frontend.schemas.supply import Supply, SupplyFormData

logger = logging.getLogger(__name__)

SUPPLIES_PATH = "/supplies"
EXPORT_FILENAME = "supplies.xlsx"


class SupplyService:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_all(self) -> List[Supply]:
        data = self.client.get(SUPPLIES_PATH) or []
        logger.debug("Fetched %d supplies", len(data))
        return [Supply.model_validate(item) for item in data]

    def get_by_id(self, supply_id: int) -> Supply:
        return Supply.model_validate(self.client.get(f"{SUPPLIES_PATH}/{supply_id}"))

    def create(self, form_data: SupplyFormData) -> Supply:
        created = Supply.model_validate(self.client.post(SUPPLIES_PATH, json=form_data.to_payload()))
        logger.info("Supply created: id=%s name=%s", created.id, created.name)
        return created

    def update(self, supply_id: int, form_data: SupplyFormData) -> Supply:
        updated = Supply.model_validate(
            self.client.put(f"{SUPPLIES_PATH}/{supply_id}", json=form_data.to_payload())
        )
        logger.info("Supply updated: id=%s name=%s", supply_id, updated.name)
        return updated

    def delete(self, supply_id: int) -> None:
        self.client.delete(f"{SUPPLIES_PATH}/{supply_id}")
        logger.info("Supply deleted: id=%s", supply_id)

    def import_csv(self, file: Union[bytes, BinaryIO], filename: Optional[str] = None) -> str:
        """
        Upload a CSV file as multipart form data (field "file").

        Column layout and encoding are up to the server; the response is its
        human-readable summary.
        """
        name = filename or getattr(file, "name", None) or "supplies.csv"
        resp = self.client.request(
            "POST",
            f"{SUPPLIES_PATH}/import",
            files={"file": (name.rsplit("/", 1)[-1], file, "text/csv")},
            # Drop the JSON default so requests writes the multipart boundary header.
            headers={"Content-Type": None},
        )
        if "application/json" in resp.headers.get("Content-Type", ""):
            message = resp.json()
            message = message if isinstance(message, str) else str(message)
        else:
            message = resp.text
        logger.info("CSV import finished: %s", message)
        return message

    def export_excel(self) -> bytes:
        resp = self.client.request(
            "GET",
            f"{SUPPLIES_PATH}/export",
            headers={"Accept": "application/octet-stream"},
        )
        logger.info("Excel export received: %d bytes", len(resp.content))
        return resp.content
