from .config import (
    ClientConfig, GLOBAL_OPTIONS, GlobalOptions, ConfigManager, resolve_config,
)
from .app import app, main

__all__ = [
    'ClientConfig', 'GLOBAL_OPTIONS', 'GlobalOptions',
    'ConfigManager', 'resolve_config',
    'app', 'main'
]
