"""
Testes unitários para os helpers de extração.
"""

import pytest

from pricepinion.scrapers.extractors import (
    extract_from_aria,
    extract_from_value,
    extract_product_image,
    extract_product_url,
    extract_text_content,
)
from tests.fixtures.fake_dom import FakeElement

BASE_URL = "https://www.fredmeyer.com"


@pytest.fixture
def card() -> FakeElement:
    return FakeElement(children={
        ".link": FakeElement(attrs={
            "aria-label": "  Kroger Large White Eggs  ",
            "href": "/p/kroger-large-white-eggs/0001111060903",
        }),
        ".img": FakeElement(attrs={"src": "https://www.kroger.com/images/eggs.jpg"}),
        ".unit": FakeElement(text="\n  $0.29/lb \n"),
        ".price": FakeElement(attrs={"value": "3.49"}),
        ".absolute": FakeElement(attrs={"href": "https://cdn.example.com/p/123"}),
        ".empty": FakeElement(attrs={"href": ""}),
        ".first": [
            FakeElement(text="primeiro"),
            FakeElement(text="segundo"),
        ],
    })


class TestExtractors:
    """Testes para extração de campos."""

    @pytest.mark.asyncio
    async def test_aria_label(self, card):
        """Testa leitura do aria-label sem espaços nas pontas."""
        assert await extract_from_aria(card, ".link") == "Kroger Large White Eggs"

    @pytest.mark.asyncio
    async def test_imagem(self, card):
        assert await extract_product_image(card, ".img") == "https://www.kroger.com/images/eggs.jpg"

    @pytest.mark.asyncio
    async def test_texto(self, card):
        assert await extract_text_content(card, ".unit") == "$0.29/lb"

    @pytest.mark.asyncio
    async def test_value(self, card):
        """Testa que o value vem só com o número."""
        assert await extract_from_value(card, ".price") == "3.49"

    @pytest.mark.asyncio
    async def test_primeiro_descendente(self, card):
        """Testa que só o primeiro elemento do seletor é lido."""
        assert await extract_text_content(card, ".first") == "primeiro"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("extractor", [
        extract_from_aria,
        extract_product_image,
        extract_text_content,
        extract_from_value,
    ])
    async def test_seletor_sem_match_retorna_none(self, card, extractor):
        """Testa que seletor sem match não lança exceção."""
        assert await extractor(card, ".nao-existe") is None

    @pytest.mark.asyncio
    async def test_atributo_ausente_retorna_none(self, card):
        """Testa elemento encontrado mas sem o atributo."""
        assert await extract_from_aria(card, ".img") is None


class TestExtractProductURL:
    """Testes para resolução do link do produto."""

    @pytest.mark.asyncio
    async def test_href_relativo(self, card):
        """Testa que href relativo recebe o domínio da loja."""
        url = await extract_product_url(BASE_URL, card, ".link")

        assert url == "https://www.fredmeyer.com/p/kroger-large-white-eggs/0001111060903"

    @pytest.mark.asyncio
    async def test_href_absoluto_inalterado(self, card):
        """Testa que href absoluto volta sem alteração."""
        url = await extract_product_url(BASE_URL, card, ".absolute")

        assert url == "https://cdn.example.com/p/123"

    @pytest.mark.asyncio
    async def test_sem_link(self, card):
        assert await extract_product_url(BASE_URL, card, ".nao-existe") is None

    @pytest.mark.asyncio
    async def test_href_vazio(self, card):
        assert await extract_product_url(BASE_URL, card, ".empty") is None
