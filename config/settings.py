"""
Configurações globais do sistema usando Pydantic Settings.
Carrega variáveis de ambiente e define valores padrão.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pricepinion.core.constants import (
    DEFAULT_CATEGORY_TIMEOUT_MS,
    DEFAULT_CLICK_DELAY_MS,
    DEFAULT_CONTAINER_TIMEOUT_MS,
    DEFAULT_MAX_PAGINATION_CLICKS,
    DEFAULT_REQUEST_DELAY_MS,
    DEFAULT_SCRAPE_DELAY_MS,
)


class Settings(BaseSettings):
    """Configurações principais do sistema."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Ambiente
    env: Literal["development", "production", "testing"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False

    # Delays (milissegundos) - CLICK_DELAY e SCRAPE_DELAY
    click_delay: int = DEFAULT_CLICK_DELAY_MS
    scrape_delay: int = DEFAULT_SCRAPE_DELAY_MS

    # Espaçamento entre aberturas de categorias (pacing)
    request_delay: int = Field(default=DEFAULT_REQUEST_DELAY_MS, ge=0)

    # Timeouts (milissegundos, 0 = sem limite)
    navigation_timeout: int = Field(default=0, ge=0)
    container_timeout: int = Field(default=DEFAULT_CONTAINER_TIMEOUT_MS, ge=1000)
    category_timeout: int = Field(default=DEFAULT_CATEGORY_TIMEOUT_MS, ge=0)

    # Paginação
    max_pagination_clicks: int = Field(default=DEFAULT_MAX_PAGINATION_CLICKS, ge=1)
    probe_retries: int = Field(default=2, ge=0, le=10)

    # Limite de abas simultâneas no mesmo browser
    max_concurrent_pages: int = Field(default=6, ge=1, le=32)

    # Paths
    data_path: Path = Field(default=Path("./data"))
    log_path: Path = Field(default=Path("./logs"))
    db_name: str = "catalog.db"

    # User Agent
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        )
    )

    # Playwright
    headless: bool = True
    slow_mo: int = Field(default=0, ge=0, le=1000)

    @field_validator("click_delay", "scrape_delay", mode="before")
    @classmethod
    def fallback_delay(cls, v: Any, info) -> int:
        """
        Delays ausentes, inválidos ou não positivos voltam ao padrão.
        Uma variável de ambiente mal formatada não deve derrubar o job.
        """
        default = cls.model_fields[info.field_name].default
        try:
            value = int(str(v).strip())
        except (TypeError, ValueError):
            return default
        return value if value > 0 else default

    @field_validator("data_path", "log_path", mode="after")
    @classmethod
    def ensure_path_exists(cls, v: Path) -> Path:
        """Garante que os diretórios existam."""
        v.mkdir(parents=True, exist_ok=True)
        return v


@dataclass(frozen=True)
class ScrapeTiming:
    """
    Parâmetros de tempo de uma rodada de scraping.

    Injetado no coordenador para que os testes não dependam de
    variáveis de ambiente. Todos os valores em milissegundos.
    """

    click_delay_ms: int = DEFAULT_CLICK_DELAY_MS
    scrape_delay_ms: int = DEFAULT_SCRAPE_DELAY_MS
    request_delay_ms: int = DEFAULT_REQUEST_DELAY_MS
    navigation_timeout_ms: int = 0
    container_timeout_ms: int = DEFAULT_CONTAINER_TIMEOUT_MS
    category_timeout_ms: int = DEFAULT_CATEGORY_TIMEOUT_MS
    max_pagination_clicks: int = DEFAULT_MAX_PAGINATION_CLICKS
    probe_retries: int = 2
    max_concurrent_pages: int = 6

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScrapeTiming":
        """Monta a configuração de tempo a partir das Settings."""
        return cls(
            click_delay_ms=settings.click_delay,
            scrape_delay_ms=settings.scrape_delay,
            request_delay_ms=settings.request_delay,
            navigation_timeout_ms=settings.navigation_timeout,
            container_timeout_ms=settings.container_timeout,
            category_timeout_ms=settings.category_timeout,
            max_pagination_clicks=settings.max_pagination_clicks,
            probe_retries=settings.probe_retries,
            max_concurrent_pages=settings.max_concurrent_pages,
        )

    @property
    def category_timeout_seconds(self) -> Optional[float]:
        """Timeout por categoria em segundos (None = sem limite)."""
        if self.category_timeout_ms <= 0:
            return None
        return self.category_timeout_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """
    Retorna instância singleton das configurações.
    Usa cache para evitar recarregar .env múltiplas vezes.
    """
    return Settings()
