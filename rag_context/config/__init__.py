from .loader import config_get, load_config

__all__ = ["config_get", "load_config"]
