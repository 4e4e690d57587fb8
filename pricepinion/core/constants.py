"""
Constantes de scraping e validação de produtos.
"""

import re
from typing import Final

# =============================================================================
# TEMPOS PADRÃO (milissegundos)
# =============================================================================

# Espera antes de procurar o botão "Load More Results"
DEFAULT_CLICK_DELAY_MS: Final[int] = 500

# Espera após a paginação, a última página ainda pode estar renderizando
DEFAULT_SCRAPE_DELAY_MS: Final[int] = 3000

# Intervalo entre o início de categorias da mesma loja
DEFAULT_REQUEST_DELAY_MS: Final[int] = 1000

# Espera máxima pela grade de produtos
DEFAULT_CONTAINER_TIMEOUT_MS: Final[int] = 30_000

# Teto por categoria (navegação não tem timeout próprio)
DEFAULT_CATEGORY_TIMEOUT_MS: Final[int] = 600_000

# Cliques máximos em "Load More" por categoria
DEFAULT_MAX_PAGINATION_CLICKS: Final[int] = 200


# =============================================================================
# PREÇOS
# =============================================================================

CURRENCY_SYMBOL: Final[str] = "$"

# "$2.99/lb" - preço por libra exibido pelas lojas Kroger
PER_POUND_PRICE_PATTERN: Final[re.Pattern] = re.compile(r"^\$[\d.]+/lb$")


# =============================================================================
# VALIDAÇÃO
# =============================================================================

# Campos obrigatórios de um ProductRecord
REQUIRED_PRODUCT_FIELDS: Final[tuple[str, ...]] = (
    "product_name",
    "store_name",
    "product_price",
    "product_link",
    "product_image",
)

# Campos atualizáveis de um item já existente no catálogo
MUTABLE_CATALOG_FIELDS: Final[tuple[str, ...]] = (
    "product_price",
    "product_link",
    "product_image",
)


# =============================================================================
# BROWSER
# =============================================================================

CHROMIUM_ARGS: Final[list[str]] = [
    "--disable-blink-features=AutomationControlled",
    "--disable-dev-shm-usage",
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-infobars",
    "--window-size=1920,1080",
]

# Esconde sinais de automação (navigator.webdriver etc)
STEALTH_INIT_SCRIPT: Final[str] = """
    Object.defineProperty(navigator, 'webdriver', {
        get: () => undefined,
    });

    window.chrome = {
        runtime: {},
    };

    Object.defineProperty(navigator, 'plugins', {
        get: () => [1, 2, 3, 4, 5],
    });

    Object.defineProperty(navigator, 'languages', {
        get: () => ['en-US', 'en'],
    });
"""
