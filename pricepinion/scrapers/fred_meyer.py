"""
Scrapers das lojas Kroger com layout KDS.
https://www.fredmeyer.com

Estrutura da grade:
- Container: <div class="AutoGrid">
- Célula: <div class="AutoGrid-cell"><div>...card...</div></div>
- Nome: <div class="mb-4"><a class="kds-Link" aria-label="Nome" href="/p/...">
- Imagem: <a class="kds-Link"><div class="h-full"><img class="kds-Image-img" src="...">
- Preço/lb: <div><span><span class="kds-Text--s">$2.99/lb</span></span></div>
- Preço: <data class="kds-Price--alternate" value="2.99">
"""

from typing import Optional

from playwright.async_api import ElementHandle, Error as PlaywrightError

from config.stores import FRED_MEYER_CONFIG, QFC_CONFIG, StoreConfig
from pricepinion.core.models import ProductRecord
from pricepinion.scrapers.base import SiteScraper
from pricepinion.scrapers.coordinator import ScrapeCoordinator
from pricepinion.scrapers.extractors import (
    extract_from_aria,
    extract_from_value,
    extract_product_image,
    extract_product_url,
    extract_text_content,
)


class FredMeyerScraper(SiteScraper):
    """Scraper para Fred Meyer."""

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        coordinator: Optional[ScrapeCoordinator] = None,
    ):
        super().__init__(config or FRED_MEYER_CONFIG, coordinator)

    async def scrape_page(self, container: ElementHandle) -> list[ProductRecord]:
        """
        Extrai todos os produtos da grade.

        Args:
            container: Elemento .AutoGrid já carregado

        Returns:
            Produtos na ordem da grade
        """
        cells = await container.query_selector_all(self.selectors.grid_cell)

        self.logger.debug("Células encontradas", count=len(cells), store=self.store_id)

        products = []
        for cell in cells:
            try:
                products.append(await self._extract_single_product(cell))
            except PlaywrightError as e:
                # Célula removida do DOM durante a leitura: segue como registro vazio
                self.logger.warning("Erro ao ler célula", error=str(e), store=self.store_id)
                products.append(ProductRecord(store_name=self.store_name))

        return products

    async def _extract_single_product(self, cell: ElementHandle) -> ProductRecord:
        """Extrai um card. Campos não encontrados ficam None."""
        name = await extract_from_aria(cell, self.selectors.product_name)
        image = await extract_product_image(cell, self.selectors.product_image)
        price = await self._extract_price(cell)
        link = await extract_product_url(
            self.config.base_url,
            cell,
            self.selectors.product_link,
        )

        return ProductRecord(
            product_name=name,
            store_name=self.store_name,
            product_price=price,
            product_link=link,
            product_image=image,
        )

    async def _extract_price(self, cell: ElementHandle) -> Optional[str]:
        """
        Preço do produto.

        Primeiro tenta o preço por libra ("$2.99/lb"); se o span não existir
        ou não seguir o padrão, usa o preço padrão, que guarda só o número
        no atributo value e precisa do símbolo da moeda.
        """
        unit_price = await extract_text_content(cell, self.selectors.unit_price_text)
        if unit_price and self.config.unit_price_pattern.match(unit_price):
            return unit_price

        value = await extract_from_value(cell, self.selectors.price_value)
        if not value:
            return None
        return f"{self.config.currency_symbol}{value}"


class QFCScraper(FredMeyerScraper):
    """Scraper para QFC (mesma plataforma KDS da Kroger)."""

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        coordinator: Optional[ScrapeCoordinator] = None,
    ):
        super().__init__(config or QFC_CONFIG, coordinator)
