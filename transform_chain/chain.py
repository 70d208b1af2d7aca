"""TransformChain: runs an ordered list of transforms over a value."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from transform_chain.transform import Transform

logger = logging.getLogger(__name__)


def _has_match(transforms: Iterable[Transform], filename: object) -> bool:
    return any(t.matches(filename) for t in transforms)


class Next:
    """Continuation handed to each transform during a single chain run.

    Calling it runs the remaining transforms. ``has_match`` and ``has_next``
    report whether any of the transforms not yet consumed would apply.
    """

    def __init__(self, transforms: Sequence[Transform], filename: str) -> None:
        self._transforms = tuple(transforms)
        self._cursor = 0
        self._filename = filename

    @property
    def filename(self) -> str:
        """Most recent filename passed down the chain."""
        return self._filename

    @property
    def remaining(self) -> tuple[Transform, ...]:
        return self._transforms[self._cursor:]

    def __call__(self, value: Any, filename: str | None = None) -> Any:
        if filename is None:
            filename = self._filename
        self._filename = filename

        while self._cursor < len(self._transforms):
            transform = self._transforms[self._cursor]
            self._cursor += 1
            if transform.matches(filename):
                return transform.transform(value, filename, self)
        return value

    def has_match(self, filename: str | None = None) -> bool:
        """True if a remaining transform matches *filename* (default: current file)."""
        return _has_match(self.remaining, filename or self._filename)

    def has_next(self) -> bool:
        return self.has_match()


class TransformChain:
    """Ordered collection of transforms applied to a value keyed by filename."""

    def __init__(self, transforms: Iterable[object] = ()) -> None:
        self._transforms: list[Transform] = []
        for definition in transforms:
            self.append_transform(definition)

    def __len__(self) -> int:
        return len(self._transforms)

    def __iter__(self) -> Iterator[Transform]:
        return iter(list(self._transforms))

    def append_transform(self, transform: object) -> None:
        """Add a transform (or transform definition) to the end of the chain."""
        self._transforms.append(Transform.from_definition(transform))

    def prepend_transform(self, transform: object) -> None:
        """Add a transform (or transform definition) to the start of the chain."""
        self._transforms.insert(0, Transform.from_definition(transform))

    def has_match(self, filename: object) -> bool:
        """Return True if at least one transform in the chain matches *filename*."""
        return _has_match(self._transforms, filename)

    def transform(self, value: Any, filename: str) -> Any:
        """Run *value* through every matching transform for *filename*.

        Transforms added while a run is in progress do not affect that run.
        """
        next = Next(self._transforms, filename)
        logger.debug("running %d transform(s) for %s", len(self._transforms), filename)
        return next(value, filename)

    def notify_post_load_hooks(self, filename: str) -> None:
        """Call every transform's ``post_load_hook`` with *filename*.

        Hooks run in chain order whether or not their transform matches the file.
        """
        for transform in list(self._transforms):
            if transform.post_load_hook is not None:
                transform.post_load_hook(filename)
