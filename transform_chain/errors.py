"""Exception types raised while configuring a transform chain."""


class TransformChainError(Exception):
    """Base class for configuration-time errors."""


class BadMatcherError(TransformChainError, TypeError):
    """Raised when a transform is given a matcher of an unsupported type."""

    def __init__(self, matcher: object) -> None:
        self.matcher_type = type(matcher).__name__
        super().__init__(
            "Bad matcher, if supplied it should be a function, regexp, string, "
            f"or list of strings. Got: {self.matcher_type}"
        )


class TransformDefinitionError(TransformChainError, TypeError):
    """Raised when a transform definition cannot be turned into a Transform."""


class TransformLoadError(TransformChainError, ImportError):
    """Raised when a configured import path or plugin cannot be loaded."""

    def __init__(self, target: str, reason: str) -> None:
        self.target = target
        super().__init__(f"Could not load '{target}': {reason}")


class ConfigError(TransformChainError, ValueError):
    """Raised for unreadable or invalid configuration files."""
