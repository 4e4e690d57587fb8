"""
Interface de linha de comando (CLI) do pricepinion.
Usa Typer para os comandos e Rich para a saída formatada.
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from config.stores import STORES_CONFIG
from pricepinion.catalog import create_catalog, export_catalog_csv
from pricepinion.core.exceptions import CatalogScraperError
from pricepinion.core.types import CatalogBackend
from pricepinion.job import CatalogUpdateJob
from pricepinion.scrapers import ScraperManager

# Inicializa CLI
app = typer.Typer(
    name="pricepinion",
    help="Scraper de catálogos de supermercados (Fred Meyer e lojas Kroger).",
    add_completion=False,
)

# Console Rico para output formatado
console = Console()


def run_async(coro):
    """Helper para executar corrotinas."""
    return asyncio.run(coro)


@app.command("scrape")
def scrape(
    store: Optional[list[str]] = typer.Option(
        None, "--store", "-s", help="Loja específica (pode repetir)"
    ),
    recursive: bool = typer.Option(
        False, "--recursive", "-r", help="Clicar em 'Load More' até o fim da listagem"
    ),
    backend: CatalogBackend = typer.Option(
        CatalogBackend.SQLITE, "--backend", "-b", help="Backend do catálogo"
    ),
):
    """
    Coleta os produtos e atualiza o catálogo.

    Exemplos:
        pricepinion scrape
        pricepinion scrape --store fred_meyer --recursive
    """
    job = CatalogUpdateJob(backend=backend)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Coletando produtos...", total=None)

        try:
            reports = run_async(job.run(recursive=recursive, stores=store or None))
        except (ValueError, CatalogScraperError) as e:
            console.print(f"[red]Erro: {e}[/red]")
            raise typer.Exit(code=1)

    _display_reports(reports, job.summarize(reports))


@app.command("stores")
def list_stores():
    """
    Lista lojas disponíveis.
    """
    available = set(ScraperManager().get_available_stores())

    table = Table(title="Lojas Disponíveis")
    table.add_column("ID", style="cyan")
    table.add_column("Nome", style="green")
    table.add_column("Status", style="yellow")
    table.add_column("Categorias", style="blue")
    table.add_column("Scraper", justify="center")

    for config in STORES_CONFIG.values():
        table.add_row(
            config.id,
            config.display_name,
            config.status.value,
            ", ".join(config.categories),
            "[green]✓[/green]" if config.id in available else "[dim]-[/dim]",
        )

    console.print(table)


@app.command("catalog")
def show_catalog(
    store: Optional[str] = typer.Option(None, "--store", "-s", help="Filtrar por loja (nome exibido)"),
    limit: int = typer.Option(20, "--limit", "-l", help="Máximo de itens"),
):
    """
    Mostra itens do catálogo.
    """
    catalog = create_catalog(CatalogBackend.SQLITE)
    entries = run_async(catalog.list_entries(store_name=store, limit=limit))
    total = run_async(catalog.count(store_name=store))

    if not entries:
        console.print("[yellow]Catálogo vazio.[/yellow]")
        return

    table = Table(title=f"Catálogo ({total} itens)")
    table.add_column("Loja", style="cyan", width=15)
    table.add_column("Produto", style="white", width=40, overflow="fold")
    table.add_column("Preço", justify="right", style="green", width=12)
    table.add_column("Visto em", style="dim")

    for entry in entries:
        table.add_row(
            entry.store_name,
            entry.product_name,
            entry.product_price,
            entry.last_seen_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)

    if total > len(entries):
        console.print(f"[dim]... e mais {total - len(entries)} itens[/dim]")


@app.command("export")
def export(
    output: Path = typer.Argument(..., help="Arquivo de saída (CSV)"),
    store: Optional[str] = typer.Option(None, "--store", "-s", help="Filtrar por loja (nome exibido)"),
):
    """
    Exporta o catálogo para CSV.

    Exemplos:
        pricepinion export catalogo.csv
        pricepinion export fred.csv --store "Fred Meyer"
    """
    catalog = create_catalog(CatalogBackend.SQLITE)
    entries = run_async(catalog.list_entries(store_name=store))

    if not entries:
        console.print("[yellow]Nenhum dado para exportar[/yellow]")
        return

    path = export_catalog_csv(entries, output)
    console.print(f"[green]✓ {len(entries)} itens exportados para: {path}[/green]")


@app.command("version")
def version():
    """
    Exibe a versão do sistema.
    """
    from pricepinion import __version__

    console.print(f"[bold blue]pricepinion[/bold blue] v{__version__}")
    console.print("Scraper de catálogos de supermercados")


# FUNÇÕES DE DISPLAY

def _display_reports(reports, total):
    """Exibe o resultado da atualização por loja."""
    table = Table(title="Atualização do Catálogo")
    table.add_column("Loja", style="cyan")
    table.add_column("Candidatos", justify="right")
    table.add_column("Inseridos", justify="right", style="green")
    table.add_column("Atualizados", justify="right", style="yellow")
    table.add_column("Sem mudança", justify="right", style="dim")
    table.add_column("Rejeitados", justify="right", style="red")
    table.add_column("Repetidos", justify="right", style="dim")
    table.add_column("Categorias ignoradas")

    for store_id, report in reports.items():
        table.add_row(
            store_id,
            str(report.candidates),
            str(report.inserted),
            str(report.updated),
            str(report.unchanged),
            str(report.rejected),
            str(report.duplicates),
            ", ".join(report.skipped_categories) or "-",
        )

    console.print(table)

    console.print(Panel(
        f"[bold]Escritas:[/bold] {total.writes}\n"
        f"[bold]Rejeitados:[/bold] {total.rejected}\n"
        f"[bold]Repetidos no batch:[/bold] {total.duplicates}\n"
        f"[bold]Categorias ignoradas:[/bold] {len(total.skipped_categories)}",
        title="Resumo",
        border_style="blue",
    ))


# ENTRY POINT

def main():
    """Entry point principal."""
    app()


if __name__ == "__main__":
    main()
