"""Best-effort names for transform functions, used in logs."""

from __future__ import annotations

import functools
import inspect

ANONYMOUS = "[anonymous]"


def function_name(fn: object) -> str | None:
    """Return a readable name for *fn*, or None if it has none.

    Lambdas and other generated callables (``<lambda>``, ``<genexpr>``) count
    as anonymous.
    """
    if isinstance(fn, functools.partial):
        return function_name(fn.func)

    name = getattr(fn, "__name__", None)
    if isinstance(name, str):
        if not name or name.startswith("<"):
            return None
        return name

    if callable(fn) and not inspect.isclass(fn):
        return type(fn).__name__
    return None
