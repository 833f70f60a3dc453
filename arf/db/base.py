# noqa: F401 to ensure models are imported for metadata
from arf.models.catalog import AppSetting, Plan, Server
from arf.models.customer import Customer
from arf.models.ledger import ManualAddition, Renewal

__all__ = [
    "AppSetting",
    "Plan",
    "Server",
    "Customer",
    "ManualAddition",
    "Renewal",
]
