"""
Hierarquia de exceções do sistema.
Todas as exceções herdam de CatalogScraperError para facilitar tratamento.
"""

from typing import Any, Optional


class CatalogScraperError(Exception):
    """
    Exceção base do sistema.

    Contexto extra (loja, URL, seletor...) vai para `details`, que é o que
    aparece nos logs estruturados via to_dict().
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        text = self.message
        if self.details:
            text = f"{text} | Details: {self.details}"
        if self.cause:
            text = f"{text} | Caused by: {self.cause}"
        return text

    def to_dict(self) -> dict[str, Any]:
        """Serializa exceção para dicionário."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
        }

    @staticmethod
    def _merge(details: Optional[dict[str, Any]], **context: Any) -> dict[str, Any]:
        """Junta ao details os campos de contexto que têm valor."""
        merged = dict(details or {})
        merged.update({key: value for key, value in context.items() if value})
        return merged


# EXCEÇÕES DE SCRAPING

class ScraperError(CatalogScraperError):
    """Erro de scraping de uma loja/URL."""

    def __init__(
        self,
        message: str,
        *,
        store_id: Optional[str] = None,
        url: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            details=self._merge(details, store_id=store_id, url=url),
            cause=cause,
        )
        self.store_id = store_id
        self.url = url


class NavigationError(ScraperError):
    """Falha ao abrir a página (erro de rede ou status HTTP >= 400)."""

    def __init__(
        self,
        message: str = "Falha na navegação",
        *,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
        **kwargs,
    ):
        super().__init__(
            message,
            details=self._merge(details, status_code=status_code),
            **kwargs,
        )
        self.status_code = status_code


class PageMissError(ScraperError):
    """Grade de produtos não apareceu (layout mudou ou página não carregou)."""

    def __init__(
        self,
        message: str = "Container de produtos não encontrado",
        *,
        selector: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        **kwargs,
    ):
        super().__init__(
            message,
            details=self._merge(details, failed_selector=selector),
            **kwargs,
        )
        self.selector = selector


# EXCEÇÕES DE VALIDAÇÃO

class RecordValidationError(CatalogScraperError):
    """Produto incompleto barrado antes do catálogo."""

    def __init__(
        self,
        message: str = "Produto incompleto",
        *,
        missing_fields: Optional[list[str]] = None,
        product_name: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        **kwargs,
    ):
        super().__init__(
            message,
            details=self._merge(
                details,
                missing_fields=missing_fields,
                product_name=product_name,
            ),
            **kwargs,
        )
        self.missing_fields = missing_fields or []


# EXCEÇÕES DE CATÁLOGO

class CatalogError(CatalogScraperError):
    """Erro de persistência do catálogo."""

    def __init__(
        self,
        message: str,
        *,
        backend: Optional[str] = None,
        path: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        **kwargs,
    ):
        super().__init__(
            message,
            details=self._merge(details, backend=backend, path=path),
            **kwargs,
        )


class DatabaseError(CatalogError):
    """Erro do banco SQLite (ex: identidade duplicada)."""


class CatalogEntryNotFound(CatalogError):
    """Atualização de um item que não existe no catálogo."""
