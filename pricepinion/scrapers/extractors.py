"""
Helpers de extração de campos a partir de um elemento do DOM.

Cada função recebe a célula do produto e um seletor relativo, localiza o
primeiro descendente e lê uma única propriedade. Quando o seletor não
encontra nada o retorno é None: quem chama decide se isso é fatal.
"""

from typing import Optional
from urllib.parse import urljoin

from playwright.async_api import ElementHandle


async def _first(element: ElementHandle, selector: str) -> Optional[ElementHandle]:
    return await element.query_selector(selector)


async def _attribute(
    element: ElementHandle,
    selector: str,
    attribute: str,
) -> Optional[str]:
    child = await _first(element, selector)
    if child is None:
        return None
    value = await child.get_attribute(attribute)
    if value is None:
        return None
    return value.strip()


async def extract_from_aria(element: ElementHandle, selector: str) -> Optional[str]:
    """
    Lê o nome acessível (aria-label) do descendente.

    O aria-label do link do card traz o nome completo do produto e muda
    menos que o texto visível.
    """
    return await _attribute(element, selector, "aria-label")


async def extract_product_image(element: ElementHandle, selector: str) -> Optional[str]:
    """Lê o src da imagem do produto."""
    return await _attribute(element, selector, "src")


async def extract_text_content(element: ElementHandle, selector: str) -> Optional[str]:
    """Lê o texto do descendente, sem espaços nas pontas."""
    child = await _first(element, selector)
    if child is None:
        return None
    text = await child.text_content()
    if text is None:
        return None
    return text.strip()


async def extract_from_value(element: ElementHandle, selector: str) -> Optional[str]:
    """
    Lê o atributo value do descendente.

    O preço padrão fica num <data value="2.99">, só o número, sem moeda.
    """
    return await _attribute(element, selector, "value")


async def extract_product_url(
    base_url: str,
    element: ElementHandle,
    selector: str,
) -> Optional[str]:
    """
    Lê o href do descendente e resolve contra a URL base da loja.

    O site encurta o link para "/p/<slug>/<id>", então prefixamos o
    domínio. URLs absolutas voltam sem alteração.

    Args:
        base_url: URL base da loja (ex: https://www.fredmeyer.com)
        element: Célula do produto
        selector: Seletor do link
    """
    href = await _attribute(element, selector, "href")
    if not href:
        return None
    return urljoin(base_url, href)
