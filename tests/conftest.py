import csv
import io
import json
import re
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict
from rich.console import Console

from frontend.core.api import ApiClient
from frontend.core.ui import TerminalUI
from frontend.services.inventory_service import InventoryService
from frontend.services.supply_service import SupplyService

BASE_URL = "http://testserver/api"
XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class FakeBackend(BaseAdapter):
    """In-memory stand-in for the REST backend, mounted on the client's session."""

    def __init__(self):
        super().__init__()
        self.supplies: Dict[int, Dict[str, Any]] = {}
        self.transactions: List[Dict[str, Any]] = []
        self.requests: List[requests.PreparedRequest] = []
        self.down = False
        self.fail_status: Optional[int] = None
        self.export_bytes = b"PK\x03\x04 fake workbook"
        self._next_supply_id = 1
        self._next_tx_id = 1

    # -- helpers for tests --------------------------------------------------

    def add_supply(self, name="Gauze", quantity=10, unit_price=1.5, category="Medical") -> Dict[str, Any]:
        now = datetime(2024, 12, 17, 9, 0, 0).isoformat()
        supply = {
            "id": self._next_supply_id,
            "name": name,
            "quantity": quantity,
            "unitPrice": unit_price,
            "category": category,
            "createdAt": now,
            "updatedAt": now,
        }
        self.supplies[supply["id"]] = supply
        self._next_supply_id += 1
        return supply

    def calls(self, method: str, path: str) -> List[requests.PreparedRequest]:
        return [r for r in self.requests if r.method == method and urlsplit(r.url).path == "/api" + path]

    # -- adapter ------------------------------------------------------------

    def send(self, request, **kwargs):
        self.requests.append(request)
        if self.down:
            raise requests.ConnectionError("backend unreachable", request=request)
        if self.fail_status is not None:
            return self._respond(request, self.fail_status, {"message": "internal failure"})

        path = urlsplit(request.url).path
        assert path.startswith("/api/"), path
        path = path[len("/api"):]
        status, body, content_type = self._route(request, path)
        return self._respond(request, status, body, content_type)

    def close(self):
        pass

    def _route(self, request, path: str) -> Tuple[int, Any, str]:
        method = request.method
        if path == "/supplies" and method == "GET":
            return 200, list(self.supplies.values()), "application/json"
        if path == "/supplies" and method == "POST":
            payload = json.loads(request.body)
            supply = self.add_supply(payload["name"], payload["quantity"], payload["unitPrice"], payload["category"])
            # Mirrors the real backend: timestamps are not filled in on create.
            return 201, dict(supply, createdAt=None, updatedAt=None), "application/json"
        if path == "/supplies/import" and method == "POST":
            return self._import(request)
        if path == "/supplies/export" and method == "GET":
            return 200, self.export_bytes, XLSX_TYPE

        m = re.fullmatch(r"/supplies/(\d+)", path)
        if m:
            supply = self.supplies.get(int(m.group(1)))
            if supply is None:
                return 404, b"", "application/json"
            if method == "GET":
                return 200, supply, "application/json"
            if method == "PUT":
                payload = json.loads(request.body)
                supply.update(
                    name=payload["name"],
                    quantity=payload["quantity"],
                    unitPrice=payload["unitPrice"],
                    category=payload["category"],
                    updatedAt=datetime(2024, 12, 18, 9, 0, 0).isoformat(),
                )
                return 200, supply, "application/json"
            if method == "DELETE":
                del self.supplies[supply["id"]]
                return 204, b"", "application/json"

        if path == "/inventory" and method == "GET":
            return 200, self.transactions, "application/json"
        m = re.fullmatch(r"/inventory/(in|out)", path)
        if m and method == "POST":
            return self._move(m.group(1).upper(), json.loads(request.body))
        m = re.fullmatch(r"/inventory/supply/(\d+)", path)
        if m and method == "GET":
            supply_id = int(m.group(1))
            return 200, [t for t in self.transactions if t["supplyId"] == supply_id], "application/json"

        return 404, {"message": f"no route for {method} {path}"}, "application/json"

    def _move(self, tx_type: str, payload: Dict[str, Any]) -> Tuple[int, Any, str]:
        supply = self.supplies.get(payload["supplyId"])
        if supply is None:
            return 400, {"message": f"Supply not found with id: {payload['supplyId']}"}, "application/json"
        qty = payload["quantity"]
        if tx_type == "OUT" and supply["quantity"] < qty:
            return 400, {"message": f"Insufficient stock. Available: {supply['quantity']}"}, "application/json"
        supply["quantity"] += qty if tx_type == "IN" else -qty
        tx = {
            "id": self._next_tx_id,
            "supplyId": supply["id"],
            "type": tx_type,
            "quantity": qty,
            "transactionDate": datetime(2024, 12, 17, 10, self._next_tx_id % 60, 0).isoformat(),
            "note": payload.get("note"),
        }
        self._next_tx_id += 1
        self.transactions.append(tx)
        return 201, tx, "application/json"

    def _import(self, request) -> Tuple[int, Any, str]:
        content_type = request.headers.get("Content-Type", "")
        if not content_type.startswith("multipart/form-data"):
            return 415, {"message": "multipart required"}, "application/json"
        body = request.body
        if b'name="file"' not in body:
            return 400, {"message": "file part missing"}, "application/json"
        part = body.split(b"\r\n\r\n", 1)[1].rsplit(b"\r\n--", 1)[0]
        rows = list(csv.DictReader(io.StringIO(part.decode("utf-8"))))
        for row in rows:
            self.add_supply(row["name"], int(row["quantity"]), float(Decimal(row["unitPrice"])), row["category"])
        return 200, f"Imported {len(rows)} supplies".encode(), "text/plain;charset=UTF-8"

    def _respond(self, request, status: int, body: Any, content_type: str = "application/json"):
        resp = requests.Response()
        resp.status_code = status
        resp.url = request.url
        resp.request = request
        resp.encoding = "utf-8"
        resp.headers = CaseInsensitiveDict({"Content-Type": content_type})
        if isinstance(body, bytes):
            resp._content = body
        else:
            resp._content = json.dumps(body).encode("utf-8")
        return resp


class ScriptedUI(TerminalUI):
    """TerminalUI that answers prompts from a script and records what it showed."""

    def __init__(self, answers=(), confirms=()):
        super().__init__(Console(file=io.StringIO(), width=140, color_system=None))
        self.answers = list(answers)
        self.confirms = list(confirms)
        self.prompts: List[str] = []
        self.alerts: List[str] = []
        self.infos: List[str] = []

    def prompt(self, label, default=None, choices=None):
        self.prompts.append(label)
        if not self.answers:
            raise EOFError(f"no scripted answer for {label!r}")
        answer = self.answers.pop(0)
        if answer == "" and default is not None:
            return default
        return answer

    def confirm(self, message):
        self.prompts.append(message)
        return self.confirms.pop(0)

    def alert(self, message):
        self.alerts.append(message)
        super().alert(message)

    def info(self, message):
        self.infos.append(message)
        super().info(message)

    @property
    def output(self) -> str:
        return self.console.file.getvalue()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def client(backend):
    api = ApiClient(BASE_URL)
    api.session.mount("http://testserver/", backend)
    yield api
    api.close()


@pytest.fixture
def supply_service(client):
    return SupplyService(client)


@pytest.fixture
def inventory_service(client):
    return InventoryService(client)


@pytest.fixture
def ui():
    return ScriptedUI()
