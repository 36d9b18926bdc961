from .supply import (  # noqa: F401
    InventoryTransaction,
    InventoryTransactionRequest,
    Supply,
    SupplyFormData,
    TransactionType,
)
