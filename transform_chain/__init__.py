"""Synchronous, filename-aware transform chains."""

from transform_chain.chain import Next, TransformChain
from transform_chain.errors import (
    BadMatcherError,
    ConfigError,
    TransformChainError,
    TransformDefinitionError,
    TransformLoadError,
)
from transform_chain.naming import ANONYMOUS, function_name
from transform_chain.transform import DEFAULT_EXTENSIONS, Transform

__all__ = [
    "ANONYMOUS",
    "DEFAULT_EXTENSIONS",
    "BadMatcherError",
    "ConfigError",
    "Next",
    "Transform",
    "TransformChain",
    "TransformChainError",
    "TransformDefinitionError",
    "TransformLoadError",
    "function_name",
]
