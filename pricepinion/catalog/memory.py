"""
Catálogo em memória.
Útil para execuções de teste do scraper sem banco e para os testes.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pricepinion.catalog.base import CatalogRepository
from pricepinion.core.exceptions import CatalogEntryNotFound
from pricepinion.core.models import CatalogEntry, ProductRecord
from pricepinion.core.types import CatalogBackend


class InMemoryCatalog(CatalogRepository):
    """Catálogo em dicionário, indexado por (loja, nome)."""

    def __init__(self):
        self._entries: dict[UUID, CatalogEntry] = {}
        self._by_identity: dict[tuple[str, str], UUID] = {}
        # Contadores de escrita (inspeção em testes e relatórios)
        self.inserts = 0
        self.updates = 0

    @property
    def backend(self) -> CatalogBackend:
        return CatalogBackend.MEMORY

    @property
    def writes(self) -> int:
        return self.inserts + self.updates

    async def find_by_identity(
        self,
        store_name: str,
        product_name: str,
    ) -> Optional[CatalogEntry]:
        entry_id = self._by_identity.get((store_name, product_name))
        if entry_id is None:
            return None
        return self._entries[entry_id].model_copy()

    async def insert(self, record: ProductRecord) -> CatalogEntry:
        entry = CatalogEntry.from_record(record)
        self._entries[entry.id] = entry
        self._by_identity[entry.identity] = entry.id
        self.inserts += 1
        return entry.model_copy()

    async def update(self, entry_id: UUID, changes: dict[str, str]) -> CatalogEntry:
        entry = self._entries.get(entry_id)
        if entry is None:
            raise CatalogEntryNotFound(
                f"Item não encontrado: {entry_id}",
                backend=self.backend.value,
            )

        updated = entry.model_copy(update={**changes, "last_seen_at": datetime.now()})
        self._entries[entry_id] = updated
        self.updates += 1
        return updated.model_copy()

    async def list_entries(
        self,
        store_name: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[CatalogEntry]:
        entries = [
            e for e in self._entries.values()
            if store_name is None or e.store_name == store_name
        ]
        entries.sort(key=lambda e: (e.store_name, e.product_name))
        if limit:
            entries = entries[:limit]
        return [e.model_copy() for e in entries]

    async def count(self, store_name: Optional[str] = None) -> int:
        if store_name is None:
            return len(self._entries)
        return sum(1 for e in self._entries.values() if e.store_name == store_name)
