"""
Módulo de catálogo: persistência e reconciliação de produtos.
Suporta memória e SQLite.
"""

from pathlib import Path
from typing import Optional

from pricepinion.catalog.base import CatalogRepository
from pricepinion.catalog.export import export_catalog_csv
from pricepinion.catalog.memory import InMemoryCatalog
from pricepinion.catalog.reconciler import CatalogReconciler
from pricepinion.catalog.sqlite_catalog import SQLiteCatalog
from pricepinion.core.types import CatalogBackend


def create_catalog(
    backend: CatalogBackend = CatalogBackend.SQLITE,
    base_path: Optional[Path] = None,
) -> CatalogRepository:
    """
    Cria o backend de catálogo.

    Args:
        backend: Tipo de backend
        base_path: Diretório do banco (None = DATA_PATH das Settings)
    """
    backend = CatalogBackend(backend)

    if backend == CatalogBackend.MEMORY:
        return InMemoryCatalog()

    from config.settings import get_settings
    settings = get_settings()
    return SQLiteCatalog(base_path or settings.data_path, settings.db_name)


__all__ = [
    "CatalogRepository",
    "CatalogReconciler",
    "InMemoryCatalog",
    "SQLiteCatalog",
    "CatalogBackend",
    "create_catalog",
    "export_catalog_csv",
]
