from .loader import load_config
from .models import ChainConfig, TransformConfig

__all__ = [
    "ChainConfig",
    "TransformConfig",
    "load_config",
]
