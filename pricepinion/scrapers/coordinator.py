"""
Coordenador de scraping.
Distribui as URLs de categoria em paralelo sobre um único browser e
agrega os resultados por categoria.
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncContextManager, AsyncIterator, Awaitable, Callable, Optional

from playwright.async_api import Browser, async_playwright

from config.logging_config import LoggerMixin
from config.settings import ScrapeTiming, get_settings
from pricepinion.core.constants import CHROMIUM_ARGS
from pricepinion.core.models import ProductRecord, ScrapeBatch
from pricepinion.core.types import CategoryStatus

# scrape_site(url, browser, recursive) -> produtos ou None
ScrapeFn = Callable[[str, Browser, bool], Awaitable[Optional[list[ProductRecord]]]]
BrowserFactory = Callable[[], AsyncContextManager[Browser]]
SleepFn = Callable[[float], Awaitable[None]]


@asynccontextmanager
async def launch_browser(
    headless: Optional[bool] = None,
    slow_mo: Optional[int] = None,
) -> AsyncIterator[Browser]:
    """
    Inicia o Chromium com configurações anti-detecção.
    Browser e Playwright são fechados na saída, com ou sem erro.
    """
    settings = get_settings()
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(
            headless=settings.headless if headless is None else headless,
            slow_mo=settings.slow_mo if slow_mo is None else slow_mo,
            args=CHROMIUM_ARGS,
        )
        try:
            yield browser
        finally:
            await browser.close()


class ScrapeCoordinator(LoggerMixin):
    """
    Orquestra uma rodada de scraping de uma loja.

    Responsabilidades:
    - Subir um browser compartilhado por rodada e derrubá-lo no final
    - Rodar cada categoria como tarefa independente
    - Isolar falhas: uma categoria com erro vira None sem afetar as outras
    - Fornecer o delay usado pelos scrapers (sleep_before_operation)
    """

    def __init__(
        self,
        timing: Optional[ScrapeTiming] = None,
        browser_factory: Optional[BrowserFactory] = None,
        sleep: Optional[SleepFn] = None,
    ):
        """
        Inicializa o coordenador.

        Args:
            timing: Delays e timeouts (None = Settings)
            browser_factory: Context manager assíncrono que entrega um Browser
            sleep: Função de espera em segundos (injetável nos testes)
        """
        self.timing = timing or ScrapeTiming.from_settings(get_settings())
        self._browser_factory = browser_factory or launch_browser
        self._sleep = sleep or asyncio.sleep

    async def sleep_before_operation(self, ms: int) -> None:
        """
        Espera `ms` milissegundos antes da próxima operação.

        Usado para esperar a UI renderizar e para espaçar requisições.
        Cancelável: um cancelamento da tarefa interrompe a espera.
        """
        if ms <= 0:
            return
        await self._sleep(ms / 1000)

    async def scrape_multiple_urls(
        self,
        urls_by_category: dict[str, str],
        recursive: bool,
        scrape_fn: ScrapeFn,
    ) -> ScrapeBatch:
        """
        Faz scraping de várias URLs em paralelo.

        Args:
            urls_by_category: Categoria lógica -> URL
            recursive: Se True carrega todas as páginas ("Load More")
            scrape_fn: Função de scraping da loja

        Returns:
            ScrapeBatch com exatamente as chaves recebidas, na mesma ordem.
            Categorias com falha ficam None.
        """
        started_at = datetime.now()
        categories = list(urls_by_category)

        self.logger.info(
            "Iniciando scraping de categorias",
            categories=categories,
            recursive=recursive,
        )

        if not categories:
            return {}

        semaphore = asyncio.Semaphore(self.timing.max_concurrent_pages)

        results: Optional[list] = None
        try:
            async with self._browser_factory() as browser:
                results = await asyncio.gather(
                    *(
                        self._scrape_category(
                            index,
                            category,
                            urls_by_category[category],
                            browser,
                            recursive,
                            scrape_fn,
                            semaphore,
                        )
                        for index, category in enumerate(categories)
                    ),
                )
        except Exception as e:
            # Falha ao subir ou fechar o browser: resultados já coletados valem
            self.logger.error(
                "Erro no ciclo de vida do browser",
                error=str(e),
                error_type=e.__class__.__name__,
            )
            if results is None:
                results = [None] * len(categories)

        batch: ScrapeBatch = dict(zip(categories, results))

        failed = [c for c, products in batch.items() if products is None]
        self.logger.info(
            "Scraping de categorias finalizado",
            total_products=sum(len(p) for p in batch.values() if p),
            categories_ok=len(categories) - len(failed),
            categories_failed=failed,
            duration=f"{(datetime.now() - started_at).total_seconds():.2f}s",
        )

        return batch

    async def _scrape_category(
        self,
        index: int,
        category: str,
        url: str,
        browser: Browser,
        recursive: bool,
        scrape_fn: ScrapeFn,
        semaphore: asyncio.Semaphore,
    ) -> Optional[list[ProductRecord]]:
        """Executa uma categoria isolando qualquer falha."""
        log = self.log_operation("scrape_category", category=category, url=url)

        # Espaça a abertura das categorias para não disparar tudo de uma vez
        await self.sleep_before_operation(self.timing.request_delay_ms * index)

        async with semaphore:
            try:
                products = await asyncio.wait_for(
                    scrape_fn(url, browser, recursive),
                    timeout=self.timing.category_timeout_seconds,
                )
            except asyncio.TimeoutError:
                log.error(
                    "Timeout na categoria",
                    status=CategoryStatus.TIMEOUT.value,
                    timeout_ms=self.timing.category_timeout_ms,
                )
                return None
            except Exception as e:
                log.error(
                    "Erro na categoria",
                    status=CategoryStatus.FAILED.value,
                    error=str(e),
                    error_type=e.__class__.__name__,
                )
                return None

        if products is None:
            log.warning("Grade de produtos não encontrada", status=CategoryStatus.PAGE_MISS.value)
            return None

        status = CategoryStatus.SUCCESS if products else CategoryStatus.EMPTY
        log.info("Categoria coletada", status=status.value, products=len(products))
        return list(products)
