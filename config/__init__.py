"""
Módulo de configuração do sistema.
Exporta as configurações principais para uso em todo o projeto.
"""

from config.settings import Settings, ScrapeTiming, get_settings
from config.stores import StoreConfig, STORES_CONFIG
from config.logging_config import setup_logging

__all__ = [
    "Settings",
    "ScrapeTiming",
    "get_settings",
    "StoreConfig",
    "STORES_CONFIG",
    "setup_logging",
]
