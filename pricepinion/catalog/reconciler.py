"""
Reconciliador do catálogo.
Aplica o resultado de um scraping ao catálogo: valida, insere ou atualiza.
"""

from typing import Optional

from config.logging_config import LoggerMixin
from pricepinion.catalog.base import CatalogRepository
from pricepinion.core.exceptions import RecordValidationError
from pricepinion.core.models import ProductRecord, ReconciliationReport, ScrapeBatch
from pricepinion.core.types import WriteAction


class CatalogReconciler(LoggerMixin):
    """
    Reconcilia produtos extraídos com o catálogo persistido.

    Regras:
    - Produto incompleto nunca é gravado (apenas logado)
    - Identidade é (loja, nome); o mesmo produto em outra loja é outro item
    - Item existente só é regravado quando preço, link ou imagem mudam,
      então reprocessar o mesmo batch não gera escritas
    """

    def __init__(self, catalog: CatalogRepository):
        self.catalog = catalog

    async def process_scrape_results(
        self,
        batch: ScrapeBatch,
        store_id: Optional[str] = None,
    ) -> ReconciliationReport:
        """
        Processa o resultado de um scraping.

        Categorias None (página não encontrada, timeout, falha) são puladas
        e registradas no relatório.

        Args:
            batch: Categoria -> produtos
            store_id: Loja de origem (só para logs e relatório)

        Returns:
            ReconciliationReport com contadores da passada
        """
        report = ReconciliationReport(store_id=store_id)
        log = self.logger.bind(store=store_id, backend=self.catalog.backend.value)

        log.info("Reconciliando resultados", categories=list(batch))

        pending = self._collect(batch, report, log)

        for _, record in pending.values():
            action = await self._apply(record)

            if action == WriteAction.INSERT:
                report.inserted += 1
            elif action == WriteAction.UPDATE:
                report.updated += 1
            else:
                report.unchanged += 1

        report.mark_finished()

        log.info(
            "Reconciliação finalizada",
            candidates=report.candidates,
            inserted=report.inserted,
            updated=report.updated,
            unchanged=report.unchanged,
            rejected=report.rejected,
            duplicates=report.duplicates,
            skipped=report.skipped_categories,
        )

        return report

    def _collect(
        self,
        batch: ScrapeBatch,
        report: ReconciliationReport,
        log,
    ) -> dict[tuple[str, str], tuple[str, ProductRecord]]:
        """
        Achata o batch em um produto por identidade.

        Incompletos são rejeitados aqui. Um produto repetido no batch (mesmo
        nome em duas categorias ou tamanhos) fica com a última ocorrência.
        """
        pending: dict[tuple[str, str], tuple[str, ProductRecord]] = {}

        for category, products in batch.items():
            if products is None:
                report.skipped_categories.append(category)
                log.warning("Categoria sem resultados, ignorada", category=category)
                continue

            for record in products:
                report.candidates += 1
                try:
                    self.validate(record)
                except RecordValidationError as e:
                    report.rejected += 1
                    log.warning(
                        "Produto incompleto descartado",
                        category=category,
                        **e.details,
                    )
                    continue

                if record.identity in pending:
                    report.duplicates += 1
                    log.debug(
                        "Produto repetido no batch, vale o último",
                        category=category,
                        name=record.product_name,
                        previous_category=pending[record.identity][0],
                    )
                pending[record.identity] = (category, record)

        return pending

    async def _apply(self, record: ProductRecord) -> WriteAction:
        """Decide e aplica a escrita de um único produto já validado."""
        existing = await self.catalog.find_by_identity(
            record.store_name,
            record.product_name,
        )

        if existing is None:
            entry = await self.catalog.insert(record)
            self.logger.debug("Produto inserido", id=str(entry.id), name=entry.product_name)
            return WriteAction.INSERT

        changes = existing.diff(record)
        if not changes:
            return WriteAction.UNCHANGED

        await self.catalog.update(existing.id, changes)
        self.logger.debug(
            "Produto atualizado",
            id=str(existing.id),
            name=existing.product_name,
            fields=sorted(changes),
        )
        return WriteAction.UPDATE

    @staticmethod
    def validate(record: ProductRecord) -> None:
        """
        Barra produtos com campo obrigatório ausente ou vazio.

        Raises:
            RecordValidationError: Com a lista de campos faltantes
        """
        missing = record.missing_fields()
        if missing:
            raise RecordValidationError(
                missing_fields=missing,
                product_name=record.product_name,
            )
