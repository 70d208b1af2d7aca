"""YAML config loading with env var expansion.

Config files are looked up in order: the ``--config`` path, the file named
by ``$TRANSFORM_CHAIN_CONFIG``, ``./transform_chain.yaml`` and finally
``~/.transform_chain/config.yaml``. The first non-empty file wins.
"""

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from transform_chain.errors import ConfigError

from .models import ChainConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TRANSFORM_CHAIN_CONFIG"

# ${VAR} or ${VAR:-fallback}
_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def _candidate_paths(cli_path: str | None) -> list[Path]:
    explicit = [(cli_path, "--config"), (os.environ.get(CONFIG_ENV_VAR), CONFIG_ENV_VAR)]
    paths = []
    for value, source in explicit:
        if not value:
            continue
        path = Path(value).expanduser()
        if not path.exists():
            raise ConfigError(f"Config file not found: {value} (from {source})")
        paths.append(path)
    paths.append(Path("./transform_chain.yaml"))
    paths.append(Path.home() / ".transform_chain" / "config.yaml")
    return paths


def load_config(cli_path: str | None = None) -> ChainConfig:
    """Load the first non-empty config file, or the defaults if there is none."""
    for path in _candidate_paths(cli_path):
        if not path.is_file():
            continue
        try:
            raw = yaml.safe_load(path.read_text())
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if raw is None:
            continue
        if not isinstance(raw, dict):
            raise ConfigError(
                f"Invalid config in {path}: expected a mapping, got {type(raw).__name__}"
            )
        try:
            config = ChainConfig(**_expand_env_vars(raw))
        except ValidationError as e:
            raise ConfigError(f"Invalid config in {path}: {e}") from e
        logger.debug("loaded config from %s (%d transform(s))", path, len(config.transforms))
        return config

    return ChainConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ``${VAR}`` and ``${VAR:-fallback}`` in strings.

    Unset variables without a fallback expand to the empty string.
    """
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), m.group(2) or ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `transform-chain config init`
DEFAULT_CONFIG_TEMPLATE = """\
# transform_chain.yaml

# Extensions used by transforms that don't list their own
default_extensions: [".js"]

# Log every transform application
verbose: false

# Transforms run in order; "prepend" entries are moved to the front
transforms: []
#  - transform: "my_package.transforms:strip_comments"
#    match: ["**/src/**/*.js", "!**/vendor/**"]
#  - plugin: "coffee"                # entry point in transform_chain.transforms
#    extensions: [".coffee"]
#  - transform: "my_package.transforms:banner"
#    regex: "lib/.*\\\\.js$"
#    name: "banner"
#    position: "prepend"
#  - post_load_hook: "my_package.coverage:record"

# Logging
log_level: "info"              # debug | info | warn | error
"""
