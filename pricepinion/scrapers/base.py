"""
Classe base para scrapers de lojas.
Cada loja implementa apenas a extração da grade (scrape_page); navegação,
espera pela grade, paginação "Load More" e ciclo de vida da aba ficam aqui.
"""

from abc import ABC, abstractmethod
from typing import Optional

from playwright.async_api import (
    Browser,
    ElementHandle,
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeout,
)
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
)

from config.logging_config import LoggerMixin
from config.settings import ScrapeTiming, get_settings
from config.stores import StoreConfig, StoreSelectors
from pricepinion.core.constants import STEALTH_INIT_SCRIPT
from pricepinion.core.exceptions import NavigationError, PageMissError
from pricepinion.core.models import ProductRecord, ScrapeBatch
from pricepinion.scrapers.coordinator import ScrapeCoordinator


def _is_transient(exc: BaseException) -> bool:
    """Erro de rede ou 5xx; status 4xx não muda ao tentar de novo."""
    if not isinstance(exc, NavigationError):
        return False
    return exc.status_code is None or exc.status_code >= 500


class SiteScraper(ABC, LoggerMixin):
    """
    Classe base abstrata para todos os scrapers de lojas.
    Implementa o fluxo comum e define a interface de extração.
    """

    def __init__(
        self,
        config: StoreConfig,
        coordinator: Optional[ScrapeCoordinator] = None,
    ):
        """
        Inicializa o scraper.

        Args:
            config: Configuração da loja
            coordinator: Coordenador que fornece timing, delays e browser
        """
        self.config = config
        self.settings = get_settings()
        self.coordinator = coordinator or ScrapeCoordinator()

    @property
    def store_id(self) -> str:
        """ID da loja."""
        return self.config.id

    @property
    def store_name(self) -> str:
        """Nome exibido da loja (vai para o ProductRecord)."""
        return self.config.display_name

    @property
    def selectors(self) -> StoreSelectors:
        """Seletores CSS da loja."""
        return self.config.selectors

    @property
    def timing(self) -> ScrapeTiming:
        return self.coordinator.timing

    # MÉTODOS ABSTRATOS

    @abstractmethod
    async def scrape_page(self, container: ElementHandle) -> list[ProductRecord]:
        """
        Extrai os produtos da grade já carregada.

        Células com campos faltando são emitidas mesmo assim; a validação
        acontece no reconciliador.
        """
        pass

    # FLUXO COMUM

    async def scrape_store(
        self,
        recursive: bool = False,
        categories: Optional[list[str]] = None,
    ) -> ScrapeBatch:
        """
        Faz scraping de todas as categorias configuradas da loja.

        Args:
            recursive: Se True carrega todas as páginas de cada categoria
            categories: Subconjunto de categorias (None = todas)

        Returns:
            ScrapeBatch da loja
        """
        urls = {
            category: url
            for category, url in self.config.category_urls.items()
            if categories is None or category in categories
        }

        self.logger.info(
            "Iniciando job de scraping",
            store=self.store_id,
            categories=list(urls),
            recursive=recursive,
        )

        batch = await self.coordinator.scrape_multiple_urls(
            urls,
            recursive,
            self.scrape_site,
        )

        self.logger.info(
            "Job de scraping finalizado",
            store=self.store_id,
            products={c: len(p) if p is not None else None for c, p in batch.items()},
        )

        return batch

    async def scrape_site(
        self,
        url: str,
        browser: Browser,
        recursive: bool,
    ) -> Optional[list[ProductRecord]]:
        """
        Faz scraping de uma URL de categoria.

        Args:
            url: URL da listagem
            browser: Browser compartilhado da rodada
            recursive: Se True clica em "Load More" até acabar; se False
                só a primeira página é coletada

        Returns:
            Produtos na ordem exibida pelo site, ou None se a grade não
            apareceu dentro da janela de espera
        """
        page = await self._open_page(browser)

        try:
            await page.add_init_script(STEALTH_INIT_SCRIPT)
            await self._navigate(page, url)

            try:
                container = await self._wait_for_container(page, url)
            except PageMissError as e:
                self.logger.warning("Página sem grade de produtos", **e.to_dict())
                return None

            if recursive:
                self.logger.debug(
                    "Scraping recursivo habilitado, pode demorar",
                    url=url,
                )
                clicks = await self.load_all_pages(page)
                self.logger.debug("Paginação concluída", url=url, clicks=clicks)

                # A última página pode ainda estar renderizando
                await self.coordinator.sleep_before_operation(self.timing.scrape_delay_ms)

            return await self.scrape_page(container)

        finally:
            await self._close_page(page)

    async def load_all_pages(self, page: Page) -> int:
        """
        Clica em "Load More Results" até o botão sumir.

        Cada volta espera click_delay_ms para o botão renderizar e então
        procura o botão pelo seletor com escopo. Botão ausente encerra a
        paginação. Erro no probe ou no clique é diferente de botão
        ausente: tentamos de novo até probe_retries vezes seguidas antes
        de desistir, e nesse caso o resultado pode estar truncado.

        Returns:
            Quantidade de cliques realizados
        """
        selector = self.selectors.load_more_button
        if not selector:
            return 0

        clicks = 0
        consecutive_errors = 0

        while clicks < self.timing.max_pagination_clicks:
            await self.coordinator.sleep_before_operation(self.timing.click_delay_ms)

            try:
                button = await page.query_selector(selector)
                if button is None:
                    break
                await button.click(timeout=self.timing.container_timeout_ms)
            except PlaywrightError as e:
                consecutive_errors += 1
                if consecutive_errors > self.timing.probe_retries:
                    self.logger.warning(
                        "Paginação interrompida por erro no botão, resultado pode estar truncado",
                        clicks=clicks,
                        attempts=consecutive_errors,
                        error=str(e),
                    )
                    break
                self.logger.debug(
                    "Erro no probe do Load More, tentando de novo",
                    attempt=consecutive_errors,
                    error=str(e),
                )
                continue

            clicks += 1
            consecutive_errors = 0
        else:
            self.logger.warning(
                "Limite de cliques em Load More atingido",
                max_clicks=self.timing.max_pagination_clicks,
            )

        return clicks

    # NAVEGAÇÃO

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception(_is_transient),
        reraise=True,
    )
    async def _navigate(self, page: Page, url: str) -> None:
        """
        Navega até a URL. Sem timeout por padrão: as páginas do varejo
        podem ser lentas e preferimos completude.
        """
        self.logger.debug("Navegando para URL", url=url)

        try:
            response = await page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self.timing.navigation_timeout_ms,
            )
        except PlaywrightTimeout:
            raise
        except PlaywrightError as e:
            raise NavigationError(
                "Erro de rede ao navegar",
                store_id=self.store_id,
                url=url,
                cause=e,
            ) from e

        if response is not None and response.status >= 400:
            raise NavigationError(
                f"Status {response.status}",
                store_id=self.store_id,
                url=url,
                status_code=response.status,
            )

    async def _wait_for_container(self, page: Page, url: str) -> ElementHandle:
        """Aguarda a grade de produtos, limitado por container_timeout_ms."""
        selector = self.selectors.grid_container
        try:
            container = await page.wait_for_selector(
                selector,
                timeout=self.timing.container_timeout_ms,
            )
        except PlaywrightTimeout as e:
            raise PageMissError(
                selector=selector,
                store_id=self.store_id,
                url=url,
                cause=e,
            ) from e

        if container is None:
            raise PageMissError(selector=selector, store_id=self.store_id, url=url)

        return container

    # GERENCIAMENTO DA ABA

    async def _open_page(self, browser: Browser) -> Page:
        """Abre uma aba própria desta chamada (o script anti-automação entra em scrape_site)."""
        page = await browser.new_page(
            user_agent=self.settings.user_agent,
            viewport={"width": 1920, "height": 1080},
            locale="en-US",
        )
        return page

    async def _close_page(self, page: Page) -> None:
        try:
            await page.close()
        except PlaywrightError as e:
            self.logger.debug("Erro ao fechar aba", error=str(e))
