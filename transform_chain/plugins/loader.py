"""Build transform chains from configuration: import paths and entry points."""

from __future__ import annotations

import importlib
import importlib.metadata
import logging
import re
from typing import Any

from transform_chain.chain import TransformChain
from transform_chain.config.models import ChainConfig, TransformConfig
from transform_chain.errors import TransformDefinitionError, TransformLoadError
from transform_chain.transform import Transform

logger = logging.getLogger(__name__)

# Entry point group for installable transforms
ENTRY_POINT_GROUP = "transform_chain.transforms"


class TransformLoader:
    """Resolves configured transforms and assembles them into a chain."""

    def __init__(self, config: ChainConfig):
        self._config = config

    def discover(self) -> list[str]:
        """Scan entry_points for registered transforms. Returns their names."""
        eps = importlib.metadata.entry_points(group=ENTRY_POINT_GROUP)
        return [ep.name for ep in eps]

    def resolve(self, path: str) -> Any:
        """Import an object from a ``package.module:attr`` path."""
        module_path, sep, attr_path = path.partition(":")
        if not sep or not module_path or not attr_path:
            raise TransformLoadError(path, "expected 'package.module:attribute'")
        try:
            obj: Any = importlib.import_module(module_path)
        except ImportError as e:
            raise TransformLoadError(path, str(e)) from e
        for attr in attr_path.split("."):
            try:
                obj = getattr(obj, attr)
            except AttributeError as e:
                raise TransformLoadError(path, f"no attribute '{attr}'") from e
        return obj

    def load_plugin(self, name: str) -> Any:
        """Load a transform registered under *name* in the entry point group."""
        eps = importlib.metadata.entry_points(group=ENTRY_POINT_GROUP)
        for ep in eps:
            if ep.name == name:
                try:
                    return ep.load()
                except Exception as e:
                    raise TransformLoadError(name, str(e)) from e
        raise TransformLoadError(name, f"no entry point in group '{ENTRY_POINT_GROUP}'")

    def build_definition(self, entry: TransformConfig) -> Transform:
        """Turn one config entry into a Transform."""
        if entry.plugin is not None:
            target = self.load_plugin(entry.plugin)
        elif entry.transform is not None:
            target = self.resolve(entry.transform)
        else:
            target = None

        if isinstance(target, Transform):
            # Plugins may ship a ready-made Transform; config can't reshape it.
            return target

        options: dict[str, Any] = {}
        if isinstance(target, dict):
            options.update(target)
        elif callable(target):
            options["transform"] = target
        elif target is not None:
            raise TransformDefinitionError(
                f"'{entry.plugin or entry.transform}' is not a callable or a transform definition"
            )

        if entry.regex is not None:
            try:
                options["match"] = re.compile(entry.regex)
            except re.error as e:
                raise TransformDefinitionError(f"Invalid regex '{entry.regex}': {e}") from e
        elif entry.match is not None:
            options["match"] = entry.match

        if entry.extensions is not None:
            options["extensions"] = entry.extensions
        options.setdefault("extensions", self._config.default_extensions)

        verbose = entry.verbose if entry.verbose is not None else self._config.verbose
        options["verbose"] = options.get("verbose", False) or verbose
        if entry.name is not None:
            options["name"] = entry.name
        if entry.post_load_hook is not None:
            options["post_load_hook"] = self.resolve(entry.post_load_hook)

        return Transform.from_definition(options)

    def build_chain(self) -> TransformChain:
        """Build a TransformChain from every configured entry, in order."""
        chain = TransformChain()
        for entry in self._config.transforms:
            transform = self.build_definition(entry)
            if entry.position == "prepend":
                chain.prepend_transform(transform)
            else:
                chain.append_transform(transform)
            logger.debug("%s transform %s", entry.position, transform.name)
        logger.info("Transform chain: %s", [t.name for t in chain])
        return chain


def build_chain(config: ChainConfig) -> TransformChain:
    return TransformLoader(config).build_chain()
