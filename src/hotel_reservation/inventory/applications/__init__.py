from .inventory_ledger import InventoryLedger as InventoryLedger
