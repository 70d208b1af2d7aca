from typing import Annotated, Literal

from pydantic import BaseModel, BeforeValidator, Field, model_validator


def _check_extensions(value: object) -> object:
    # A single extension may be written as a bare string.
    if isinstance(value, str):
        value = [value]
    if isinstance(value, list):
        for ext in value:
            if not isinstance(ext, str):
                continue
            if len(ext) < 2 or not ext.startswith("."):
                raise ValueError(f"extension {ext!r} must start with '.' (e.g. '.js')")
            if "/" in ext or "\\" in ext:
                raise ValueError(f"extension {ext!r} must not contain a path separator")
    return value


Extensions = Annotated[list[str], BeforeValidator(_check_extensions)]


class TransformConfig(BaseModel):
    """One transform entry in transform_chain.yaml."""

    transform: str | None = None
    plugin: str | None = None
    match: str | list[str] | None = None
    regex: str | None = None
    extensions: Extensions | None = None
    verbose: bool | None = None
    name: str | None = None
    post_load_hook: str | None = None
    position: Literal["append", "prepend"] = "append"

    @model_validator(mode="after")
    def _check_sources(self) -> "TransformConfig":
        if self.match is not None and self.regex is not None:
            raise ValueError("'match' and 'regex' cannot both be set")
        if self.transform is not None and self.plugin is not None:
            raise ValueError("'transform' and 'plugin' cannot both be set")
        if self.transform is None and self.plugin is None and self.post_load_hook is None:
            raise ValueError("one of 'transform', 'plugin' or 'post_load_hook' is required")
        return self


class ChainConfig(BaseModel):
    transforms: list[TransformConfig] = Field(default_factory=list)
    default_extensions: Extensions = Field(default_factory=lambda: [".js"])
    verbose: bool = False
    log_level: Literal["debug", "info", "warn", "error"] = "info"
