from . import customers, dashboard, health, ledger, plans, servers, storage

__all__ = [
    "customers",
    "dashboard",
    "health",
    "ledger",
    "plans",
    "servers",
    "storage",
]
