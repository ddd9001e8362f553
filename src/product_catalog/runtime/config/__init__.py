from .config_data import PRODUCT_CACHE, ConfigData
from .config_template import load_config, load_templated_yaml

__all__ = ["PRODUCT_CACHE", "ConfigData", "load_config", "load_templated_yaml"]
