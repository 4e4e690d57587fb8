"""
Módulo core: modelos de dados, exceções, tipos e constantes.
"""

from pricepinion.core.models import (
    ProductRecord,
    CatalogEntry,
    ScrapeBatch,
    ReconciliationReport,
)
from pricepinion.core.exceptions import (
    CatalogScraperError,
    ScraperError,
    NavigationError,
    PageMissError,
    RecordValidationError,
    CatalogError,
    DatabaseError,
    CatalogEntryNotFound,
)
from pricepinion.core.types import (
    CategoryStatus,
    WriteAction,
    CatalogBackend,
)
from pricepinion.core.constants import (
    CURRENCY_SYMBOL,
    PER_POUND_PRICE_PATTERN,
    REQUIRED_PRODUCT_FIELDS,
)

__all__ = [
    # Models
    "ProductRecord",
    "CatalogEntry",
    "ScrapeBatch",
    "ReconciliationReport",
    # Exceptions
    "CatalogScraperError",
    "ScraperError",
    "NavigationError",
    "PageMissError",
    "RecordValidationError",
    "CatalogError",
    "DatabaseError",
    "CatalogEntryNotFound",
    # Types
    "CategoryStatus",
    "WriteAction",
    "CatalogBackend",
    # Constants
    "CURRENCY_SYMBOL",
    "PER_POUND_PRICE_PATTERN",
    "REQUIRED_PRODUCT_FIELDS",
]
