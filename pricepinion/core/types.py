"""
Tipos customizados e enumerações do sistema.
"""

from enum import Enum


# ENUMERAÇÕES

class CategoryStatus(str, Enum):
    """Resultado do scraping de uma categoria."""

    SUCCESS = "success"
    EMPTY = "empty"               # Grade encontrada, sem produtos
    PAGE_MISS = "page_miss"       # Grade não apareceu
    TIMEOUT = "timeout"
    FAILED = "failed"


class WriteAction(str, Enum):
    """Decisão do reconciliador para um produto válido."""

    INSERT = "insert"
    UPDATE = "update"
    UNCHANGED = "unchanged"


class CatalogBackend(str, Enum):
    """Backends de catálogo disponíveis."""

    MEMORY = "memory"
    SQLITE = "sqlite"

