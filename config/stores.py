"""
Configuração das lojas suportadas.
Define URLs base, categorias, seletores CSS e padrões de cada loja.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Pattern

from pricepinion.core.constants import CURRENCY_SYMBOL, PER_POUND_PRICE_PATTERN


class StoreStatus(str, Enum):
    """Status de uma loja."""
    ACTIVE = "active"
    DEVELOPMENT = "development"
    DISABLED = "disabled"


@dataclass(frozen=True)
class StoreSelectors:
    """Seletores CSS para navegação e extração."""

    # Grade de produtos (container que indica que a página carregou)
    grid_container: str = ""
    grid_cell: str = ""

    # Dados do produto (relativos à célula)
    product_name: str = ""
    product_image: str = ""
    product_link: str = ""
    unit_price_text: str = ""
    price_value: str = ""

    # Paginação ("Load More Results")
    load_more_button: str = ""


@dataclass
class StoreConfig:
    """Configuração completa de uma loja."""

    id: str
    display_name: str
    base_url: str

    # Categoria lógica -> URL da listagem
    category_urls: dict[str, str] = field(default_factory=dict)

    status: StoreStatus = StoreStatus.ACTIVE
    selectors: StoreSelectors = field(default_factory=StoreSelectors)

    # Preço por unidade exibido pelo site (ex: "$2.99/lb")
    unit_price_pattern: Pattern[str] = PER_POUND_PRICE_PATTERN
    currency_symbol: str = CURRENCY_SYMBOL

    @property
    def categories(self) -> list[str]:
        """Categorias configuradas."""
        return list(self.category_urls)


# =============================================================================
# KROGER (Fred Meyer, QFC) - mesma estrutura KDS
# =============================================================================

# ".kds-Link" se repete no card; o link do nome é o que fica dentro de ".mb-4".
# "LoadMore__load-more-button" também marca o botão "Load Previous Results",
# só o que está sob ".mt-32" carrega mais itens.
KROGER_SELECTORS = StoreSelectors(
    grid_container=".AutoGrid",
    grid_cell=".AutoGrid-cell > *",
    product_name=".mb-4 > .kds-Link",
    product_image=".kds-Link > .h-full > .kds-Image-img",
    product_link=".mb-4 > .kds-Link",
    unit_price_text="div > * > .kds-Text--s",
    price_value=".kds-Price--alternate",
    load_more_button=".mt-32 > .LoadMore__load-more-button",
)


# =============================================================================
# CONFIGURAÇÃO DO FRED MEYER
# =============================================================================

FRED_MEYER_CONFIG = StoreConfig(
    id="fred_meyer",
    display_name="Fred Meyer",
    base_url="https://www.fredmeyer.com",
    category_urls={
        "meat": "https://www.fredmeyer.com/pl/meat-seafood/18004",
        "produce": "https://www.fredmeyer.com/pl/fresh-fruits-vegetables/06?taxonomyId=06&fulfillment=all",
        "milk": "https://www.fredmeyer.com/pl/milk-plant-based-%20milk/02001",
        "cheese": "https://www.fredmeyer.com/pl/cheese/02002",
        "butter": "https://www.fredmeyer.com/pl/butter-margarine/02004",
        "eggs": "https://www.fredmeyer.com/pl/eggs-egg-substitutes/02003",
    },
    status=StoreStatus.ACTIVE,
    selectors=KROGER_SELECTORS,
)


# =============================================================================
# CONFIGURAÇÃO DO QFC
# =============================================================================

QFC_CONFIG = StoreConfig(
    id="qfc",
    display_name="QFC",
    base_url="https://www.qfc.com",
    category_urls={
        "meat": "https://www.qfc.com/pl/meat-seafood/18004",
        "produce": "https://www.qfc.com/pl/fresh-fruits-vegetables/06?taxonomyId=06&fulfillment=all",
        "milk": "https://www.qfc.com/pl/milk-plant-based-%20milk/02001",
        "eggs": "https://www.qfc.com/pl/eggs-egg-substitutes/02003",
    },
    status=StoreStatus.DEVELOPMENT,
    selectors=KROGER_SELECTORS,
)


# =============================================================================
# REGISTRO DE LOJAS
# =============================================================================

STORES_CONFIG: dict[str, StoreConfig] = {
    "fred_meyer": FRED_MEYER_CONFIG,
    "qfc": QFC_CONFIG,
}


def get_store_config(store_id: str) -> StoreConfig:
    """
    Retorna configuração de uma loja.

    Raises:
        ValueError: Se a loja não existe
    """
    if store_id not in STORES_CONFIG:
        raise ValueError(f"Loja não encontrada: {store_id}")
    return STORES_CONFIG[store_id]


def get_active_stores() -> list[StoreConfig]:
    """Retorna lojas ativas ou em desenvolvimento."""
    return [
        config for config in STORES_CONFIG.values()
        if config.status in (StoreStatus.ACTIVE, StoreStatus.DEVELOPMENT)
    ]
