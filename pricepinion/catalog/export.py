"""
Exportação do catálogo para CSV.
"""

from pathlib import Path

import pandas as pd

from config.logging_config import get_logger
from pricepinion.core.models import CatalogEntry

logger = get_logger("pricepinion.catalog.export")

EXPORT_COLUMNS = [
    "id",
    "storeName",
    "productName",
    "productPrice",
    "productLink",
    "productImage",
    "lastSeenAt",
]


def entries_to_dataframe(entries: list[CatalogEntry]) -> pd.DataFrame:
    """Converte itens do catálogo para DataFrame (colunas em camelCase)."""
    rows = [entry.model_dump(mode="json", by_alias=True) for entry in entries]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_catalog_csv(entries: list[CatalogEntry], path: Path) -> Path:
    """
    Exporta itens do catálogo para um arquivo CSV.

    Args:
        entries: Itens a exportar
        path: Arquivo de destino (diretórios são criados)

    Returns:
        Path do arquivo gerado
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    df = entries_to_dataframe(entries)
    df.to_csv(path, index=False, encoding="utf-8-sig")

    logger.info("Catálogo exportado", count=len(df), filepath=str(path))
    return path
