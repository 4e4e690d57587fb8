"""
Testes unitários para o CatalogReconciler.
"""

import pytest

from pricepinion.catalog import CatalogReconciler, InMemoryCatalog
from pricepinion.core.exceptions import RecordValidationError
from pricepinion.core.models import ProductRecord


@pytest.fixture
def reconciler(memory_catalog) -> CatalogReconciler:
    return CatalogReconciler(memory_catalog)


class TestValidation:
    """Testes para o portão de validação."""

    def test_produto_completo_passa(self, product_eggs):
        CatalogReconciler.validate(product_eggs)

    def test_produto_incompleto_lanca(self, product_without_price):
        with pytest.raises(RecordValidationError) as exc:
            CatalogReconciler.validate(product_without_price)

        assert exc.value.missing_fields == ["product_price"]
        assert exc.value.details["product_name"] == "Organic Bananas"

    @pytest.mark.asyncio
    async def test_grava_somente_completos(
        self,
        reconciler,
        memory_catalog,
        product_eggs,
        product_without_price,
    ):
        """Testa que só produtos com os cinco campos chegam ao catálogo."""
        report = await reconciler.process_scrape_results(
            {"eggs": [product_eggs], "produce": [product_without_price]},
        )

        assert report.inserted == 1
        assert report.rejected == 1
        assert await memory_catalog.count() == 1
        assert await memory_catalog.find_by_identity("Fred Meyer", "Organic Bananas") is None


class TestProcessScrapeResults:
    """Testes para a reconciliação."""

    @pytest.mark.asyncio
    async def test_insere_novos(self, reconciler, memory_catalog, product_eggs, product_beef):
        report = await reconciler.process_scrape_results(
            {"meat": [product_beef], "eggs": [product_eggs]},
            store_id="fred_meyer",
        )

        assert report.store_id == "fred_meyer"
        assert report.candidates == 2
        assert report.inserted == 2
        assert report.finished_at is not None
        assert memory_catalog.inserts == 2

    @pytest.mark.asyncio
    async def test_idempotente(self, reconciler, memory_catalog, product_eggs, product_beef):
        """Testa que reprocessar o mesmo batch não gera escritas."""
        batch = {"meat": [product_beef], "eggs": [product_eggs]}

        await reconciler.process_scrape_results(batch)
        writes_before = memory_catalog.writes

        report = await reconciler.process_scrape_results(batch)

        assert report.writes == 0
        assert report.unchanged == 2
        assert memory_catalog.writes == writes_before

    @pytest.mark.asyncio
    async def test_categorias_none_sao_ignoradas(
        self,
        reconciler,
        memory_catalog,
        product_eggs,
        product_beef,
    ):
        """Testa {A: [...], B: None, C: [...]}: A e C processadas, B registrada."""
        report = await reconciler.process_scrape_results({
            "meat": [product_beef],
            "milk": None,
            "eggs": [product_eggs],
        })

        assert report.inserted == 2
        assert report.skipped_categories == ["milk"]
        assert await memory_catalog.count() == 2

    @pytest.mark.asyncio
    async def test_atualiza_no_lugar(self, reconciler, memory_catalog, product_eggs):
        """Testa que mudança de preço atualiza o item existente."""
        await reconciler.process_scrape_results({"eggs": [product_eggs]})
        original = await memory_catalog.find_by_identity("Fred Meyer", product_eggs.product_name)

        cheaper = product_eggs.model_copy(update={"product_price": "$4.99"})
        report = await reconciler.process_scrape_results({"eggs": [cheaper]})

        assert report.updated == 1
        assert report.inserted == 0
        assert await memory_catalog.count() == 1

        entry = await memory_catalog.find_by_identity("Fred Meyer", product_eggs.product_name)
        assert entry.id == original.id
        assert entry.product_price == "$4.99"
        assert entry.last_seen_at >= original.last_seen_at

    @pytest.mark.asyncio
    async def test_mesmo_nome_em_outra_loja(self, reconciler, memory_catalog, product_eggs):
        """Testa que identidade é (loja, nome)."""
        qfc_eggs = product_eggs.model_copy(update={"store_name": "QFC"})

        report = await reconciler.process_scrape_results({"eggs": [product_eggs, qfc_eggs]})

        assert report.inserted == 2
        assert await memory_catalog.count(store_name="QFC") == 1

    @pytest.mark.asyncio
    async def test_duplicado_no_mesmo_batch(self, reconciler, memory_catalog, product_eggs):
        """Testa produto repetido em duas categorias: uma inserção só."""
        report = await reconciler.process_scrape_results({
            "eggs": [product_eggs],
            "dairy": [product_eggs],
        })

        assert report.candidates == 2
        assert report.inserted == 1
        assert report.duplicates == 1
        assert memory_catalog.writes == 1

    @pytest.mark.asyncio
    async def test_duplicado_com_precos_diferentes(self, reconciler, memory_catalog, product_eggs):
        """Testa mesmo nome com preço e link diferentes: vale o último, sem regravar depois."""
        other_size = product_eggs.model_copy(update={
            "product_price": "$4.49",
            "product_link": "https://www.fredmeyer.com/p/eggs/2",
        })
        batch = {"eggs": [product_eggs], "dairy": [other_size]}

        first = await reconciler.process_scrape_results(batch)
        writes_before = memory_catalog.writes

        second = await reconciler.process_scrape_results(batch)

        assert first.inserted == 1
        assert first.updated == 0
        assert first.duplicates == 1
        assert writes_before == 1
        assert second.writes == 0
        assert second.unchanged == 1
        assert memory_catalog.writes == writes_before

        entry = await memory_catalog.find_by_identity("Fred Meyer", product_eggs.product_name)
        assert entry.product_price == "$4.49"
        assert entry.product_link == "https://www.fredmeyer.com/p/eggs/2"

    @pytest.mark.asyncio
    async def test_incompleto_nao_conta_como_duplicado(
        self,
        reconciler,
        product_eggs,
        product_without_price,
    ):
        report = await reconciler.process_scrape_results({
            "produce": [product_without_price, product_without_price],
            "eggs": [product_eggs],
        })

        assert report.rejected == 2
        assert report.duplicates == 0
        assert report.inserted == 1

    @pytest.mark.asyncio
    async def test_batch_vazio(self, reconciler, memory_catalog):
        report = await reconciler.process_scrape_results({})

        assert report.candidates == 0
        assert memory_catalog.writes == 0

    @pytest.mark.asyncio
    async def test_registro_sem_loja_rejeitado(self, reconciler):
        record = ProductRecord(
            product_name="Whole Milk",
            product_price="$3.99",
            product_link="https://www.fredmeyer.com/p/milk/1",
            product_image="https://www.kroger.com/images/milk.jpg",
        )

        report = await reconciler.process_scrape_results({"milk": [record]})

        assert report.rejected == 1
        assert report.writes == 0


@pytest.mark.asyncio
async def test_catalogo_em_memoria_lista_ordenado(product_eggs, product_beef):
    catalog = InMemoryCatalog()
    await catalog.insert(product_eggs)
    await catalog.insert(product_beef)

    entries = await catalog.list_entries()

    assert [e.product_name for e in entries] == [
        "Kroger 80/20 Ground Beef",
        "Simple Truth Organic Large Brown Eggs",
    ]
    assert len(await catalog.list_entries(limit=1)) == 1
