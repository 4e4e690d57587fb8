"""
Gerenciador de scrapers.
Executa as lojas registradas e devolve um ScrapeBatch por loja.
"""

import asyncio
from datetime import datetime
from typing import Callable, Optional

from config.logging_config import LoggerMixin
from config.stores import STORES_CONFIG, StoreStatus
from pricepinion.core.models import ScrapeBatch
from pricepinion.scrapers.base import SiteScraper
from pricepinion.scrapers.coordinator import ScrapeCoordinator


class ScraperManager(LoggerMixin):
    """
    Gerenciador central de scrapers.
    Coordena a execução de várias lojas.
    """

    def __init__(
        self,
        coordinator_factory: Optional[Callable[[], ScrapeCoordinator]] = None,
    ):
        """
        Inicializa o gerenciador.

        Args:
            coordinator_factory: Cria o coordenador de cada loja (um browser
                por loja). None = coordenador padrão das Settings.
        """
        from pricepinion.scrapers import SCRAPER_REGISTRY
        self._registry = SCRAPER_REGISTRY
        self._coordinator_factory = coordinator_factory or ScrapeCoordinator
        self._scrapers: dict[str, SiteScraper] = {}

    def get_scraper(self, store_id: str) -> SiteScraper:
        """
        Obtém ou cria instância do scraper.

        Raises:
            ValueError: Se a loja não tem scraper ou configuração
        """
        if store_id not in self._scrapers:
            if store_id not in self._registry:
                raise ValueError(f"Scraper não registrado: {store_id}")

            config = STORES_CONFIG.get(store_id)
            if not config:
                raise ValueError(f"Configuração não encontrada: {store_id}")

            scraper_class = self._registry[store_id]
            self._scrapers[store_id] = scraper_class(config, self._coordinator_factory())

        return self._scrapers[store_id]

    def get_available_stores(self) -> list[str]:
        """Lojas com scraper registrado e status ativo ou em desenvolvimento."""
        return [
            store_id
            for store_id, config in STORES_CONFIG.items()
            if store_id in self._registry
            and config.status in (StoreStatus.ACTIVE, StoreStatus.DEVELOPMENT)
        ]

    async def run_store(self, store_id: str, recursive: bool = False) -> ScrapeBatch:
        """Executa o scraping de uma loja."""
        scraper = self.get_scraper(store_id)
        return await scraper.scrape_store(recursive=recursive)

    async def run_all(
        self,
        recursive: bool = False,
        stores: Optional[list[str]] = None,
    ) -> dict[str, ScrapeBatch]:
        """
        Executa todas as lojas em paralelo.

        Uma loja que falha por inteiro vira um batch com todas as
        categorias None, mantendo as chaves configuradas.

        Args:
            recursive: Carregar todas as páginas de cada categoria
            stores: Lojas a executar (None = todas disponíveis)

        Returns:
            Loja -> ScrapeBatch
        """
        available = self.get_available_stores()
        if stores:
            target_stores = [s for s in stores if s in available]
        else:
            target_stores = available

        if not target_stores:
            raise ValueError("Nenhuma loja disponível para scraping")

        started_at = datetime.now()
        self.logger.info(
            "Iniciando scraping de lojas",
            stores=target_stores,
            recursive=recursive,
        )

        results = await asyncio.gather(
            *(self.run_store(store_id, recursive) for store_id in target_stores),
            return_exceptions=True,
        )

        batches: dict[str, ScrapeBatch] = {}
        for store_id, result in zip(target_stores, results):
            if isinstance(result, Exception):
                self.logger.error(
                    "Erro na loja",
                    store=store_id,
                    error=str(result),
                )
                batches[store_id] = {
                    category: None
                    for category in STORES_CONFIG[store_id].category_urls
                }
            else:
                batches[store_id] = result

        self.logger.info(
            "Scraping de lojas finalizado",
            stores=len(batches),
            duration=f"{(datetime.now() - started_at).total_seconds():.2f}s",
        )

        return batches
