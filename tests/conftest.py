"""
Configurações e fixtures compartilhadas para pytest.
"""

from pathlib import Path

import pytest

from config.settings import ScrapeTiming, get_settings
from config.stores import FRED_MEYER_CONFIG
from pricepinion.catalog import InMemoryCatalog
from pricepinion.core.models import ProductRecord
from pricepinion.scrapers import ScrapeCoordinator
from tests.fixtures.fake_dom import FakeBrowser, FakeBrowserFactory, SleepRecorder


# AMBIENTE

@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Settings apontando para diretórios temporários, sem cache entre testes."""
    monkeypatch.setenv("DATA_PATH", str(tmp_path / "data"))
    monkeypatch.setenv("LOG_PATH", str(tmp_path / "logs"))
    for name in ("CLICK_DELAY", "SCRAPE_DELAY", "REQUEST_DELAY"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# FIXTURES DE DIRETÓRIOS

@pytest.fixture
def temp_data_dir(tmp_path) -> Path:
    """Cria diretório temporário para dados de teste."""
    data_dir = tmp_path / "catalog"
    data_dir.mkdir()
    return data_dir


# FIXTURES DE TEMPO E BROWSER

@pytest.fixture
def fast_timing() -> ScrapeTiming:
    """Delays padrão, sem espaçamento entre categorias e sem timeout."""
    return ScrapeTiming(
        click_delay_ms=500,
        scrape_delay_ms=3000,
        request_delay_ms=0,
        container_timeout_ms=1000,
        category_timeout_ms=0,
        max_pagination_clicks=10,
        probe_retries=2,
    )


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def fake_browser() -> FakeBrowser:
    return FakeBrowser()


@pytest.fixture
def browser_factory(fake_browser) -> FakeBrowserFactory:
    return FakeBrowserFactory(fake_browser)


@pytest.fixture
def coordinator(fast_timing, browser_factory, sleep_recorder) -> ScrapeCoordinator:
    """Coordenador com browser falso e sleep registrado."""
    return ScrapeCoordinator(
        timing=fast_timing,
        browser_factory=browser_factory,
        sleep=sleep_recorder,
    )


# FIXTURES DE CATÁLOGO

@pytest.fixture
def memory_catalog() -> InMemoryCatalog:
    return InMemoryCatalog()


# FIXTURES DE PRODUTOS

@pytest.fixture
def product_eggs() -> ProductRecord:
    """Produto completo: ovos."""
    return ProductRecord(
        product_name="Simple Truth Organic Large Brown Eggs",
        store_name=FRED_MEYER_CONFIG.display_name,
        product_price="$5.49",
        product_link="https://www.fredmeyer.com/p/simple-truth-organic-eggs/0001111060932",
        product_image="https://www.kroger.com/product/images/medium/front/0001111060932",
    )


@pytest.fixture
def product_beef() -> ProductRecord:
    """Produto completo com preço por libra."""
    return ProductRecord(
        product_name="Kroger 80/20 Ground Beef",
        store_name=FRED_MEYER_CONFIG.display_name,
        product_price="$4.99/lb",
        product_link="https://www.fredmeyer.com/p/kroger-ground-beef/0001111097977",
        product_image="https://www.kroger.com/product/images/medium/front/0001111097977",
    )


@pytest.fixture
def product_without_price() -> ProductRecord:
    """Produto com preço não encontrado na célula."""
    return ProductRecord(
        product_name="Organic Bananas",
        store_name=FRED_MEYER_CONFIG.display_name,
        product_price=None,
        product_link="https://www.fredmeyer.com/p/organic-bananas/0000000094011",
        product_image="https://www.kroger.com/product/images/medium/front/0000000094011",
    )
