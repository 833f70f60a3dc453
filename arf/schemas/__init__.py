from arf.schemas import backup, catalog, common, customer, ledger, reporting

__all__ = [
    "backup",
    "catalog",
    "common",
    "customer",
    "ledger",
    "reporting",
]
