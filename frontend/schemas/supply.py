from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator
from pydantic.alias_generators import to_camel


TransactionType = Literal["IN", "OUT"]


class CamelModel(BaseModel):
    # Wire format is camelCase (unitPrice, supplyId, ...); Python side stays snake_case.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Supply(CamelModel):
    id: int
    name: str
    quantity: int
    unit_price: Decimal
    # Nullable on the server side.
    category: Optional[str] = None
    # The backend leaves these null in the body of a create response.
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SupplyFormData(CamelModel):
    name: str
    quantity: int = 0
    unit_price: Decimal = Decimal("0")
    category: str = ""

    @field_validator("name")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("name is required")
        return v

    @field_validator("quantity")
    @classmethod
    def _non_negative_quantity(cls, v: int) -> int:
        if v < 0:
            raise ValueError("quantity must be >= 0")
        return v

    @field_validator("unit_price")
    @classmethod
    def _non_negative_price(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("unit price must be >= 0")
        return v

    @field_serializer("unit_price", when_used="json")
    def _price_as_number(self, v: Decimal) -> Union[float, str]:
        # JSON number when a float holds the value exactly; otherwise the decimal
        # string, which the backend's BigDecimal also accepts.
        as_float = float(v)
        return as_float if Decimal(repr(as_float)) == v else str(v)

    @classmethod
    def from_supply(cls, supply: Supply) -> "SupplyFormData":
        return cls(
            name=supply.name,
            quantity=supply.quantity,
            unit_price=supply.unit_price,
            category=supply.category or "",
        )


class InventoryTransaction(CamelModel):
    id: int
    supply_id: int
    type: TransactionType
    quantity: int
    transaction_date: Optional[datetime] = None
    note: Optional[str] = None


class InventoryTransactionRequest(CamelModel):
    supply_id: int
    type: TransactionType = "IN"
    quantity: int
    note: Optional[str] = None

    @field_validator("note")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None
