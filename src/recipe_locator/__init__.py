# recipe_locator/__init__.py
from ._version import __version__

from .config import (
    Configuration, configuration,
    TreeSource, DictSource, FileSource, EnvSource,
)
from .exceptions import (
    LocatorError, NotFoundError, ContainerError,
    NotConstructibleError, InsufficientArgumentsError,
    ComponentCreationError, ConfigurationError,
)
from .introspection import Introspector, SignatureIntrospector, ParameterInfo, SignatureInfo
from .locator import Locator
from .recipe import Recipe, PostMethod
from .recipe_store import RecipeStore

__all__ = [
    "__version__",
    "Locator",
    "Recipe",
    "PostMethod",
    "RecipeStore",
    "Introspector",
    "SignatureIntrospector",
    "ParameterInfo",
    "SignatureInfo",
    "Configuration",
    "configuration",
    "TreeSource",
    "DictSource",
    "FileSource",
    "EnvSource",
    "LocatorError",
    "NotFoundError",
    "ContainerError",
    "NotConstructibleError",
    "InsufficientArgumentsError",
    "ComponentCreationError",
    "ConfigurationError",
]
