from .load import ConfigError, load_config
from .model import Config

__all__ = ["Config", "ConfigError", "load_config"]
