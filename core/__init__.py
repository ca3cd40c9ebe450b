"""
Veo Studio Core Components

Provides foundational infrastructure shared by the generation service and the
command line host:
- Environment driven configuration
"""

from .config import Config, get_config, reload_config

__all__ = ["Config", "get_config", "reload_config"]
