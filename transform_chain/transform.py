"""Transform: a single filename-aware stage of a transform chain."""

from __future__ import annotations

import logging
import os
import traceback
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from transform_chain.errors import TransformDefinitionError
from transform_chain.matchers import normalize_matcher
from transform_chain.naming import ANONYMOUS, function_name

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = (".js",)

# Keys accepted by Transform.from_definition, mapped to constructor arguments.
_DEFINITION_KEYS = {
    "transform": "transform",
    "match": "match",
    "extensions": "extensions",
    "verbose": "verbose",
    "name": "name",
    "post_load_hook": "post_load_hook",
    "postLoadHook": "post_load_hook",
    "log": "log",
}

Transformer = Callable[[Any, str, Callable[..., Any]], Any]


class Transform:
    """Wraps one transform function together with the files it applies to.

    A transform applies to a file when the file's extension is one of
    ``extensions`` and, if a ``match`` was given, the absolute path passes it.
    The wrapped function receives ``(value, filename, next)`` and decides
    whether to call ``next`` to run the rest of the chain.

    ``Transform(existing)`` returns *existing* itself.
    """

    def __new__(cls, transform: object = None, **options: Any) -> Transform:
        if isinstance(transform, Transform):
            if options:
                raise TransformDefinitionError(
                    "Options cannot be applied to an existing Transform: "
                    + ", ".join(sorted(options))
                )
            return transform
        return super().__new__(cls)

    def __init__(
        self,
        transform: Transformer | None = None,
        *,
        match: object = None,
        extensions: Iterable[str] | str | None = None,
        verbose: bool = False,
        name: str | None = None,
        post_load_hook: Callable[[str], None] | None = None,
        log: Callable[..., None] | None = None,
    ) -> None:
        if isinstance(transform, Transform):
            return
        if transform is not None and not callable(transform):
            raise TransformDefinitionError(
                "The transform function must be callable. "
                f"Got: {type(transform).__name__}; "
                "use Transform.from_definition() for a mapping of options"
            )
        if isinstance(extensions, str):
            extensions = [extensions]
        self._extensions = tuple(extensions) if extensions is not None else DEFAULT_EXTENSIONS
        self._matcher = normalize_matcher(match)
        self._transformer = transform
        self._verbose = bool(verbose)
        self._log_sink = log

        if not name and transform is not None:
            name = function_name(transform) or ANONYMOUS
        self._name = name
        self._post_load_hook = post_load_hook

    @classmethod
    def from_definition(cls, definition: object) -> Transform:
        """Build a Transform from a callable or a mapping of options.

        An existing Transform is returned as-is.
        """
        if isinstance(definition, Transform):
            return definition
        if isinstance(definition, Mapping):
            unknown = sorted(str(k) for k in definition if k not in _DEFINITION_KEYS)
            if unknown:
                raise TransformDefinitionError(
                    f"Unknown transform option(s): {', '.join(unknown)}"
                )
            return cls(**{_DEFINITION_KEYS[k]: v for k, v in definition.items()})
        if callable(definition):
            return cls(definition)
        raise TransformDefinitionError(
            "A transform must be a Transform, a callable, or a mapping of options. "
            f"Got: {type(definition).__name__}"
        )

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def extensions(self) -> tuple[str, ...]:
        return self._extensions

    @property
    def verbose(self) -> bool:
        return self._verbose

    @property
    def post_load_hook(self) -> Callable[[str], None] | None:
        return self._post_load_hook

    def __repr__(self) -> str:
        return f"Transform(name={self._name!r}, extensions={list(self._extensions)!r})"

    def matches(self, filename: object) -> bool:
        """Return True if this transform should be applied to *filename*."""
        if not isinstance(filename, str):
            return False
        if os.path.splitext(filename)[1] not in self._extensions:
            return False
        return self._matcher is None or bool(self._matcher(os.path.abspath(filename)))

    def transform(self, value: Any, filename: str, next: Callable[..., Any]) -> Any:
        """Apply the wrapped function, or hand straight off to *next*."""
        if self._transformer is None or not self.matches(filename):
            return next(value, filename)

        if self._verbose:
            self.log(f"Applying transform {self._name} to {filename}")

        try:
            return self._transformer(value, filename, next)
        except Exception as exc:
            return self.handle_exception(exc, value, filename, next)

    def handle_exception(
        self, exc: Exception, value: Any, filename: str, next: Callable[..., Any]
    ) -> Any:
        """Recover from an exception raised by the wrapped function.

        Forwards the original input to the next matching transform if there
        is one, otherwise returns the input unmodified. Override to change
        the fallback.
        """
        has_next = next.has_next()
        self.log(
            "Error in transform",
            self._name,
            "for",
            filename,
            "; calling next transform" if has_next else "; returning original code",
        )
        self.log(str(exc) or repr(exc))
        self.log("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))

        return next(value, filename) if has_next else value

    def log(self, *args: object) -> None:
        """Log an error line built from *args*, like a console error call.

        Uses the ``log`` callable given at construction when there is one.
        """
        if self._log_sink is not None:
            self._log_sink(*args)
            return
        logger.error(" ".join(str(arg) for arg in args))
