"""
Catálogo SQLite.
Persistência local do catálogo com índice único por (loja, nome).
"""

from datetime import datetime
from pathlib import Path
from typing import Optional
from uuid import UUID

import aiosqlite

from pricepinion.catalog.base import CatalogRepository
from pricepinion.core.constants import MUTABLE_CATALOG_FIELDS
from pricepinion.core.exceptions import CatalogEntryNotFound, DatabaseError
from pricepinion.core.models import CatalogEntry, ProductRecord
from pricepinion.core.types import CatalogBackend


class SQLiteCatalog(CatalogRepository):
    """
    Catálogo usando SQLite.
    Cada escrita é uma transação própria, leitores nunca veem linha parcial.
    """

    def __init__(self, base_path: Path, db_name: str = "catalog.db"):
        """
        Inicializa o catálogo SQLite.

        Args:
            base_path: Diretório base
            db_name: Nome do arquivo do banco
        """
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.db_path = self.base_path / db_name
        self._initialized = False

    @property
    def backend(self) -> CatalogBackend:
        return CatalogBackend.SQLITE

    async def _ensure_initialized(self) -> None:
        """Garante que a tabela existe."""
        if self._initialized:
            return

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("""
                CREATE TABLE IF NOT EXISTS products (
                    id TEXT PRIMARY KEY,
                    product_name TEXT NOT NULL,
                    store_name TEXT NOT NULL,
                    product_price TEXT NOT NULL,
                    product_link TEXT NOT NULL,
                    product_image TEXT NOT NULL,
                    last_seen_at TIMESTAMP NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            await db.execute("""
                CREATE UNIQUE INDEX IF NOT EXISTS idx_products_identity
                ON products(store_name, product_name)
            """)

            await db.commit()

        self._initialized = True
        self.logger.debug("SQLite inicializado", db_path=str(self.db_path))

    async def find_by_identity(
        self,
        store_name: str,
        product_name: str,
    ) -> Optional[CatalogEntry]:
        await self._ensure_initialized()

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT * FROM products WHERE store_name = ? AND product_name = ?",
                (store_name, product_name),
            ) as cursor:
                row = await cursor.fetchone()

        return self._row_to_entry(dict(row)) if row else None

    async def insert(self, record: ProductRecord) -> CatalogEntry:
        await self._ensure_initialized()

        entry = CatalogEntry.from_record(record)

        try:
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute("""
                    INSERT INTO products
                    (id, product_name, store_name, product_price, product_link,
                     product_image, last_seen_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                """, (
                    str(entry.id),
                    entry.product_name,
                    entry.store_name,
                    entry.product_price,
                    entry.product_link,
                    entry.product_image,
                    entry.last_seen_at.isoformat(),
                ))
                await db.commit()
        except aiosqlite.IntegrityError as e:
            raise DatabaseError(
                "Item duplicado no catálogo",
                backend=self.backend.value,
                path=str(self.db_path),
                details={"identity": list(entry.identity)},
                cause=e,
            ) from e

        return entry

    async def update(self, entry_id: UUID, changes: dict[str, str]) -> CatalogEntry:
        await self._ensure_initialized()

        unknown = set(changes) - set(MUTABLE_CATALOG_FIELDS)
        if unknown:
            raise ValueError(f"Campos não atualizáveis: {sorted(unknown)}")

        now = datetime.now()
        assignments = ", ".join(f"{name} = ?" for name in changes)
        params = [*changes.values(), now.isoformat(), str(entry_id)]

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                f"UPDATE products SET {assignments}{', ' if assignments else ''}"
                "last_seen_at = ? WHERE id = ?",
                params,
            )
            if cursor.rowcount == 0:
                raise CatalogEntryNotFound(
                    f"Item não encontrado: {entry_id}",
                    backend=self.backend.value,
                    path=str(self.db_path),
                )
            await db.commit()

            async with db.execute(
                "SELECT * FROM products WHERE id = ?",
                (str(entry_id),),
            ) as cursor:
                row = await cursor.fetchone()

        return self._row_to_entry(dict(row))

    async def list_entries(
        self,
        store_name: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[CatalogEntry]:
        await self._ensure_initialized()

        query = "SELECT * FROM products WHERE 1=1"
        params: list = []

        if store_name:
            query += " AND store_name = ?"
            params.append(store_name)

        query += " ORDER BY store_name, product_name"

        if limit:
            query += " LIMIT ?"
            params.append(limit)

        entries = []
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(query, params) as cursor:
                async for row in cursor:
                    entries.append(self._row_to_entry(dict(row)))

        return entries

    async def count(self, store_name: Optional[str] = None) -> int:
        await self._ensure_initialized()

        query = "SELECT COUNT(*) FROM products"
        params: list = []
        if store_name:
            query += " WHERE store_name = ?"
            params.append(store_name)

        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute(query, params) as cursor:
                row = await cursor.fetchone()

        return row[0]

    def _row_to_entry(self, row: dict) -> CatalogEntry:
        """Converte row do SQLite para CatalogEntry."""
        return CatalogEntry(
            id=UUID(row["id"]),
            product_name=row["product_name"],
            store_name=row["store_name"],
            product_price=row["product_price"],
            product_link=row["product_link"],
            product_image=row["product_image"],
            last_seen_at=datetime.fromisoformat(row["last_seen_at"]),
        )
