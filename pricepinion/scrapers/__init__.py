"""
Módulo de scrapers: coleta de produtos das lojas.
Cada loja é uma variante de SiteScraper; novas lojas entram no registry.
"""

from pricepinion.scrapers.base import SiteScraper
from pricepinion.scrapers.coordinator import ScrapeCoordinator, launch_browser
from pricepinion.scrapers.fred_meyer import FredMeyerScraper, QFCScraper
from pricepinion.scrapers.manager import ScraperManager

# Registry de scrapers disponíveis
SCRAPER_REGISTRY: dict[str, type[SiteScraper]] = {
    "fred_meyer": FredMeyerScraper,
    "qfc": QFCScraper,
}

__all__ = [
    "SiteScraper",
    "ScrapeCoordinator",
    "launch_browser",
    "FredMeyerScraper",
    "QFCScraper",
    "ScraperManager",
    "SCRAPER_REGISTRY",
]
