"""Exception hierarchy for recipe-locator.

All framework-specific exceptions inherit from :class:`LocatorError`, making it
easy to catch any locator error with a single ``except LocatorError`` clause.
"""

from typing import Any


def _name_of(target: Any) -> str:
    if isinstance(target, type):
        return f"{target.__module__}.{target.__qualname__}"
    return str(target)


class LocatorError(Exception):
    """Base exception for all recipe-locator errors."""

    pass


class NotFoundError(LocatorError):
    """Raised when no registry entry and no loadable recipe exist for an identifier.

    Attributes:
        key: The identifier that could not be located.
    """

    def __init__(self, key: str):
        super().__init__(f"Failed to locate object for identifier '{key}'!")
        self.key = key


class ContainerError(LocatorError):
    """Raised for errors while building an entry from its recipe."""

    def __init__(self, msg: str):
        super().__init__(msg)


class NotConstructibleError(ContainerError):
    """Raised when a recipe target cannot be instantiated.

    The target is abstract, a protocol, not a class at all, or could not be
    imported from the recipe's ``name``.

    Attributes:
        target: The class (or the unresolved dotted path) from the recipe.
    """

    def __init__(self, target: Any, reason: str | None = None):
        msg = f"Not possible to instantiate '{_name_of(target)}'!"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)
        self.target = target


class InsufficientArgumentsError(ContainerError):
    """Raised when a recipe supplies fewer parameters than a callable requires.

    Attributes:
        target: The class, or ``"Class::method"`` for enum value lookups.
        required: Number of parameters the callable requires.
        supplied: Number of parameters the recipe supplied.
    """

    def __init__(self, target: Any, required: int, supplied: int):
        super().__init__(f"Not enough parameters for {_name_of(target)}! (required {required}, got {supplied})")
        self.target = target
        self.required = required
        self.supplied = supplied


class ComponentCreationError(ContainerError):
    """Raised when the target's own code fails while an entry is being built.

    Covers exceptions from constructors, enum value lookups and
    post-construction methods.

    Attributes:
        key: The identifier being built.
        cause: The original exception.
    """

    def __init__(self, key: str, cause: Exception):
        super().__init__(f"Failed to create object for identifier '{key}'; cause: {cause.__class__.__name__}: {cause}")
        self.key = key
        self.cause = cause


class ConfigurationError(LocatorError):
    """Raised for configuration problems (invalid sources, unreadable files)."""

    def __init__(self, msg: str):
        super().__init__(msg)
