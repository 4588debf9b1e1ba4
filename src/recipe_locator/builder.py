import logging
from typing import Any

from .exceptions import ComponentCreationError, InsufficientArgumentsError, LocatorError, NotConstructibleError
from .introspection import Introspector
from .parameters import ParameterResolver
from .recipe import Recipe

_logger = logging.getLogger(__name__)


class InstanceBuilder:
    """Creates a new instance from a :class:`Recipe`.

    Args:
        introspector: Answers questions about the recipe's target class.
        resolver: Resolves constructor parameter specs.
    """

    def __init__(self, introspector: Introspector, resolver: ParameterResolver) -> None:
        self._introspector = introspector
        self._resolver = resolver

    def build(self, key: str, recipe: Recipe) -> Any:
        """Build the object described by *recipe* for identifier *key*.

        Every parameter is resolved; those beyond the constructor's positional
        parameters are then dropped unless it takes ``*args``.

        Raises:
            NotConstructibleError: The target is missing, not importable,
                abstract or a protocol.
            InsufficientArgumentsError: The recipe supplies fewer params than
                the constructor (or enum value lookup) requires.
            ComponentCreationError: The target's own code raised.
        """
        target = self._introspector.resolve_target(recipe.target)
        is_enum = self._introspector.is_enum(target)

        if not is_enum and not self._introspector.is_instantiable(target):
            raise NotConstructibleError(target)

        if is_enum:
            if len(recipe.params) < 1:
                raise InsufficientArgumentsError(f"{target.__module__}.{target.__qualname__}::from", 1, 0)
            return self._create(key, target, [recipe.params[0]])

        ctor = self._introspector.describe_constructor(target)
        if not ctor.declared or ctor.total == 0:
            return self._create(key, target, [])

        if len(recipe.params) < ctor.required:
            raise InsufficientArgumentsError(target, ctor.required, len(recipe.params))

        args = self._resolver.resolve(recipe.params, ctor.parameters)
        return self._create(key, target, ctor.fit(args))

    def _create(self, key: str, target: type, args: list) -> Any:
        _logger.debug("Building '%s' as %s with %d argument(s)", key, target.__qualname__, len(args))
        try:
            return target(*args)
        except LocatorError:
            raise
        except Exception as e:
            raise ComponentCreationError(key, e) from e
