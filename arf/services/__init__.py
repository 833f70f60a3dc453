from arf.services.backup import BackupService
from arf.services.catalog import CatalogService
from arf.services.customer import CustomerService
from arf.services.notification import NotificationService
from arf.services.renewal import RenewalService
from arf.services.reporting import ReportingService
from arf.services.spreadsheet import SpreadsheetImportService

__all__ = [
    "BackupService",
    "CatalogService",
    "CustomerService",
    "NotificationService",
    "RenewalService",
    "ReportingService",
    "SpreadsheetImportService",
]
