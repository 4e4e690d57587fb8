"""
Configuração de logging estruturado usando structlog.

structlog passa pelo logging padrão, então os eventos do job e das
bibliotecas (aiosqlite, asyncio) saem pelos mesmos handlers: console
legível (ou JSON) e, com log_path, um arquivo JSON por dia de execução.
"""

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

import structlog
from structlog.typing import Processor

LOGGER_PREFIX = "pricepinion"

# Bibliotecas que poluem o log em DEBUG
NOISY_LOGGERS = ("asyncio", "aiosqlite")

# Handlers instalados por setup_logging (substituídos a cada chamada)
_installed_handlers: list[logging.Handler] = []


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _formatter(renderer: Processor) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def setup_logging(
    level: str = "INFO",
    log_path: Optional[Path] = None,
    json_format: bool = False,
) -> structlog.stdlib.BoundLogger:
    """
    Configura o sistema de logging.

    Pode ser chamada mais de uma vez (CLI e job): os handlers instalados
    na chamada anterior são substituídos, os de terceiros ficam.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR)
        log_path: Diretório do arquivo de log (None = só console)
        json_format: Console em JSON, para execuções agendadas

    Returns:
        Logger raiz do projeto
    """
    level_value = logging.getLevelName(level.upper())

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if json_format:
        console_renderer: Processor = structlog.processors.JSONRenderer()
    else:
        console_renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(_formatter(console_renderer))
    handlers: list[logging.Handler] = [console_handler]

    if log_path:
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(
            log_path / f"{LOGGER_PREFIX}-{date.today():%Y%m%d}.log",
            encoding="utf-8",
        )
        file_handler.setFormatter(_formatter(structlog.processors.JSONRenderer()))
        handlers.append(file_handler)

    root = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
        _installed_handlers.append(handler)
    root.setLevel(level_value)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level_value, logging.WARNING))

    return get_logger()


def get_logger(name: str = LOGGER_PREFIX, **context) -> structlog.stdlib.BoundLogger:
    """
    Retorna um logger com contexto.

    Args:
        name: Nome do logger
        **context: Contexto adicional para bind
    """
    logger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger


class LoggerMixin:
    """Mixin para adicionar logging a classes (logger com o nome da classe)."""

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        if not hasattr(self, "_logger"):
            self._logger = get_logger(f"{LOGGER_PREFIX}.{type(self).__name__}")
        return self._logger

    def log_operation(self, operation: str, **kwargs) -> structlog.stdlib.BoundLogger:
        """Logger com a operação e o contexto dela já bindados."""
        return self.logger.bind(operation=operation, **kwargs)
