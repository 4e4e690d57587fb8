"""
Classe base abstrata para o catálogo.
Define a interface que o reconciliador usa para consultar e gravar itens.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from config.logging_config import LoggerMixin
from pricepinion.core.models import CatalogEntry, ProductRecord
from pricepinion.core.types import CatalogBackend


class CatalogRepository(ABC, LoggerMixin):
    """
    Classe base abstrata para backends de catálogo.
    O núcleo de scraping só fala com o catálogo por esta interface.
    """

    @property
    @abstractmethod
    def backend(self) -> CatalogBackend:
        """Retorna o tipo de backend."""
        pass

    @abstractmethod
    async def find_by_identity(
        self,
        store_name: str,
        product_name: str,
    ) -> Optional[CatalogEntry]:
        """
        Busca item pela chave (loja, nome).

        Returns:
            Item existente ou None
        """
        pass

    @abstractmethod
    async def insert(self, record: ProductRecord) -> CatalogEntry:
        """
        Insere novo item a partir de um produto validado.

        Returns:
            Item criado (com id e last_seen_at)
        """
        pass

    @abstractmethod
    async def update(self, entry_id: UUID, changes: dict[str, str]) -> CatalogEntry:
        """
        Atualiza campos mutáveis de um item.

        Args:
            entry_id: ID do item
            changes: Campo -> novo valor

        Raises:
            CatalogEntryNotFound: Se o item não existe
        """
        pass

    @abstractmethod
    async def list_entries(
        self,
        store_name: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[CatalogEntry]:
        """Lista itens, opcionalmente filtrando por loja."""
        pass

    @abstractmethod
    async def count(self, store_name: Optional[str] = None) -> int:
        """Total de itens no catálogo."""
        pass
