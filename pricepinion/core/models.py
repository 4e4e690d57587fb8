"""
Modelos de dados Pydantic para o sistema.
Define o produto extraído, o item persistido no catálogo e o relatório
de reconciliação.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from pricepinion.core.constants import MUTABLE_CATALOG_FIELDS, REQUIRED_PRODUCT_FIELDS


class ProductRecord(BaseModel):
    """
    Produto extraído de uma célula da grade.

    Campos não encontrados ficam None: o registro é emitido mesmo assim e
    barrado na validação do reconciliador, assim falhas de extração ficam
    visíveis nos logs.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    product_name: Optional[str] = None
    store_name: Optional[str] = None
    product_price: Optional[str] = Field(
        default=None,
        description="Preço com símbolo da moeda (ex: $2.99 ou $2.99/lb)",
    )
    product_link: Optional[str] = None
    product_image: Optional[str] = None

    @field_validator("product_name")
    @classmethod
    def clean_name(cls, v: Optional[str]) -> Optional[str]:
        """Remove espaços extras do nome."""
        if v is None:
            return v
        return " ".join(v.split())

    @property
    def identity(self) -> tuple[Optional[str], Optional[str]]:
        """Chave de identidade no catálogo: (loja, nome)."""
        return (self.store_name, self.product_name)

    def missing_fields(self) -> list[str]:
        """Campos obrigatórios ausentes ou vazios."""
        missing = []
        for name in REQUIRED_PRODUCT_FIELDS:
            value = getattr(self, name)
            if value is None or not str(value).strip():
                missing.append(name)
        return missing

    @property
    def is_complete(self) -> bool:
        """Indica se todos os campos obrigatórios estão preenchidos."""
        return not self.missing_fields()

    def to_payload(self) -> dict[str, Any]:
        """Payload no formato do catálogo (camelCase)."""
        return self.model_dump(by_alias=True)


class CatalogEntry(BaseModel):
    """Item persistido no catálogo."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: UUID = Field(default_factory=uuid4)

    product_name: str = Field(..., min_length=1)
    store_name: str = Field(..., min_length=1)
    product_price: str = Field(..., min_length=1)
    product_link: str = Field(..., min_length=1)
    product_image: str = Field(..., min_length=1)

    last_seen_at: datetime = Field(default_factory=datetime.now)

    @classmethod
    def from_record(cls, record: ProductRecord) -> "CatalogEntry":
        """Cria item a partir de um produto já validado."""
        return cls(
            product_name=record.product_name,
            store_name=record.store_name,
            product_price=record.product_price,
            product_link=record.product_link,
            product_image=record.product_image,
        )

    @property
    def identity(self) -> tuple[str, str]:
        """Chave de identidade no catálogo: (loja, nome)."""
        return (self.store_name, self.product_name)

    def diff(self, record: ProductRecord) -> dict[str, str]:
        """
        Campos mutáveis que mudaram em relação ao produto extraído.

        Returns:
            Dicionário campo -> novo valor (vazio se nada mudou)
        """
        changes = {}
        for name in MUTABLE_CATALOG_FIELDS:
            new_value = getattr(record, name)
            if new_value != getattr(self, name):
                changes[name] = new_value
        return changes


# Categoria -> produtos (None = página não encontrada ou falha)
ScrapeBatch = dict[str, Optional[list[ProductRecord]]]


class ReconciliationReport(BaseModel):
    """Resumo de uma passada de reconciliação."""

    run_id: UUID = Field(default_factory=uuid4)
    store_id: Optional[str] = None

    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    candidates: int = 0
    inserted: int = 0
    updated: int = 0
    unchanged: int = 0
    rejected: int = 0
    duplicates: int = 0

    skipped_categories: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def writes(self) -> int:
        """Total de escritas feitas no catálogo."""
        return self.inserted + self.updated

    @computed_field
    @property
    def duration_seconds(self) -> Optional[float]:
        """Duração da reconciliação em segundos."""
        if self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds()

    def mark_finished(self):
        """Marca a reconciliação como finalizada."""
        self.finished_at = datetime.now()

    def merge(self, other: "ReconciliationReport") -> "ReconciliationReport":
        """Soma contadores de outra passada (usado pelo job com várias lojas)."""
        self.candidates += other.candidates
        self.inserted += other.inserted
        self.updated += other.updated
        self.unchanged += other.unchanged
        self.rejected += other.rejected
        self.duplicates += other.duplicates
        self.skipped_categories.extend(
            f"{other.store_id}:{c}" if other.store_id else c
            for c in other.skipped_categories
        )
        return self
