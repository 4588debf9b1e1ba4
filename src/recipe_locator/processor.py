import logging
from typing import Any, Dict

from .exceptions import ComponentCreationError, LocatorError
from .introspection import Introspector
from .parameters import ParameterResolver
from .recipe import Recipe

_logger = logging.getLogger(__name__)


class PostConstructionProcessor:
    """Applies the after-build part of a recipe to a new instance.

    Registers singletons and runs the recipe's post-construction methods.
    The registry and recipe cache are the locator's own dicts, shared by
    reference.
    """

    def __init__(
        self,
        registry: Dict[str, Any],
        cache: Dict[str, Recipe],
        introspector: Introspector,
        resolver: ParameterResolver,
    ) -> None:
        self._registry = registry
        self._cache = cache
        self._introspector = introspector
        self._resolver = resolver

    def process(self, key: str, instance: Any) -> Any:
        recipe = self._cache[key]

        if recipe.singleton:
            _logger.debug("Registering singleton '%s'", key)
            self._registry[key] = instance

        for method in recipe.methods:
            if method.params is not None:
                signature = self._introspector.describe_method(instance, method.name)
                args = signature.fit(self._resolver.resolve(method.params, signature.parameters))
            else:
                args = []

            _logger.debug("Calling %s.%s() for '%s'", type(instance).__qualname__, method.name, key)
            try:
                output = getattr(instance, method.name)(*args)
            except LocatorError:
                raise
            except Exception as e:
                raise ComponentCreationError(key, e) from e

            if method.return_replaces_instance:
                instance = output

        return instance
