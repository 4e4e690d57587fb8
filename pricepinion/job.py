"""
CatalogUpdateJob: execução completa de uma atualização do catálogo.
Coordena scrapers e reconciliador, loja por loja.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import structlog

from config.logging_config import LoggerMixin, setup_logging
from config.settings import get_settings
from pricepinion.catalog import CatalogReconciler, CatalogRepository, create_catalog
from pricepinion.core.models import ReconciliationReport
from pricepinion.core.types import CatalogBackend
from pricepinion.scrapers import ScraperManager


class CatalogUpdateJob(LoggerMixin):
    """
    Job de atualização do catálogo.

    Responsabilidades:
    - Executar o scraping de todas as lojas
    - Reconciliar cada ScrapeBatch com o catálogo
    - Consolidar os relatórios
    """

    def __init__(
        self,
        catalog: Optional[CatalogRepository] = None,
        manager: Optional[ScraperManager] = None,
        backend: CatalogBackend = CatalogBackend.SQLITE,
        configure_logging: bool = True,
    ):
        """
        Inicializa o job.

        Args:
            catalog: Catálogo a atualizar (None = criado pelo backend)
            manager: Gerenciador de scrapers (None = padrão)
            backend: Backend usado quando catalog não é informado
            configure_logging: Configura structlog a partir das Settings
        """
        self.settings = get_settings()

        if configure_logging:
            setup_logging(
                level=self.settings.log_level,
                log_path=self.settings.log_path,
                json_format=self.settings.log_json,
            )

        self.catalog = catalog or create_catalog(backend)
        self.manager = manager or ScraperManager()
        self.reconciler = CatalogReconciler(self.catalog)

    async def run(
        self,
        recursive: bool = False,
        stores: Optional[list[str]] = None,
    ) -> dict[str, ReconciliationReport]:
        """
        Executa scraping e reconciliação.

        Args:
            recursive: Clicar em "Load More" até esgotar a listagem
            stores: Lojas a executar (None = todas disponíveis)

        Returns:
            Loja -> relatório de reconciliação
        """
        job_id = uuid4().hex[:12]
        with structlog.contextvars.bound_contextvars(job_id=job_id):
            return await self._run(recursive, stores)

    async def _run(
        self,
        recursive: bool,
        stores: Optional[list[str]],
    ) -> dict[str, ReconciliationReport]:
        started_at = datetime.now()
        self.logger.info(
            "Job de catálogo iniciado",
            stores=stores or "all",
            recursive=recursive,
            backend=self.catalog.backend.value,
        )

        batches = await self.manager.run_all(recursive=recursive, stores=stores)

        reports: dict[str, ReconciliationReport] = {}
        for store_id, batch in batches.items():
            reports[store_id] = await self.reconciler.process_scrape_results(
                batch,
                store_id=store_id,
            )

        total = self.summarize(reports)
        self.logger.info(
            "Job de catálogo finalizado",
            stores=list(reports),
            inserted=total.inserted,
            updated=total.updated,
            rejected=total.rejected,
            duplicates=total.duplicates,
            skipped=total.skipped_categories,
            duration=f"{(datetime.now() - started_at).total_seconds():.2f}s",
        )

        return reports

    @staticmethod
    def summarize(reports: dict[str, ReconciliationReport]) -> ReconciliationReport:
        """Soma os relatórios de todas as lojas em um só."""
        total = ReconciliationReport()
        for report in reports.values():
            total.merge(report)
        total.mark_finished()
        return total
