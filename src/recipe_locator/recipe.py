"""Recipe descriptors.

A :class:`Recipe` tells the locator how to build the object for one
identifier: which class to instantiate, with which parameters, whether to keep
the result as a singleton, and which methods to call on it afterwards.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class PostMethod:
    """A method invoked on a freshly built instance.

    Attributes:
        name: Method name looked up on the current instance.
        params: Parameter specs, or ``None`` when the method takes no
            arguments from the recipe.
        return_replaces_instance: If ``True`` the method's return value
            becomes the instance for later methods and the final result.
    """
    name: str
    params: Optional[Tuple[Any, ...]] = None
    return_replaces_instance: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PostMethod":
        params = data.get("params")
        return cls(
            name=data.get("name"),
            params=tuple(params) if isinstance(params, (list, tuple)) else None,
            return_replaces_instance=data.get("return_replaces_instance", False) is True,
        )


@dataclass(frozen=True)
class Recipe:
    """Immutable construction recipe for one identifier.

    Attributes:
        target: Dotted import path of the class or enum to build
            (``"package.module.Class"``); ``None`` if the declaration
            omits it, which surfaces as an error at build time.
        params: Constructor parameter specs.
        singleton: Whether the built instance is kept in the registry.
        methods: Post-construction methods, in call order.
    """
    target: Optional[str]
    params: Tuple[Any, ...] = ()
    singleton: bool = False
    methods: Tuple[PostMethod, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Recipe":
        """Build a recipe from a parsed declaration.

        Only the shape the store already checked is relied upon; anything
        else is taken as-is. ``singleton`` must be literally ``true``.
        """
        methods = data.get("methods")
        if not isinstance(methods, (list, tuple)):
            methods = ()
        return cls(
            target=data.get("name"),
            params=tuple(data.get("params") or ()),
            singleton=data.get("singleton", False) is True,
            methods=tuple(PostMethod.from_mapping(m) for m in methods if isinstance(m, Mapping)),
        )
