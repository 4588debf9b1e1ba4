"""Signature introspection used to build recipe targets.

The locator never inspects classes directly; it asks an :class:`Introspector`.
:class:`SignatureIntrospector` is the default, built on :mod:`inspect` and
:func:`typing.get_type_hints`.
"""

import builtins
import importlib
import inspect
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Tuple

from .exceptions import NotConstructibleError

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True)
class ParameterInfo:
    """A declared positional parameter.

    Attributes:
        name: Parameter name.
        annotation: Declared type, ``inspect.Parameter.empty`` if none.
        has_default: Whether the parameter may be omitted.
    """
    name: str
    annotation: Any = inspect.Parameter.empty
    has_default: bool = False

    @property
    def is_str(self) -> bool:
        """``True`` when the declared type is exactly :class:`str`."""
        return self.annotation is str or self.annotation == "str"


@dataclass(frozen=True)
class SignatureInfo:
    """What a constructor or method accepts positionally.

    ``parameters`` lists named positional parameters; a ``*args`` catch-all
    only sets ``variadic`` and counts towards ``total``, never ``required``.
    A callable whose signature cannot be read is reported as variadic.
    """
    parameters: Tuple[ParameterInfo, ...] = ()
    declared: bool = True
    variadic: bool = False

    @property
    def total(self) -> int:
        return len(self.parameters) + (1 if self.variadic else 0)

    @property
    def required(self) -> int:
        return sum(1 for p in self.parameters if not p.has_default)

    def fit(self, args: List[Any]) -> List[Any]:
        """Drop arguments the callable has no positional slot for."""
        if self.variadic:
            return args
        return args[:len(self.parameters)]


class Introspector(Protocol):
    def resolve_target(self, path: Optional[str]) -> type: ...

    def is_instantiable(self, target: type) -> bool: ...

    def is_enum(self, target: type) -> bool: ...

    def describe_constructor(self, target: type) -> SignatureInfo: ...

    def describe_method(self, instance: Any, name: str) -> SignatureInfo: ...


def _type_hints(fn: Callable[..., Any]) -> dict:
    try:
        return typing.get_type_hints(fn)
    except Exception:
        return {}


def _describe_callable(fn: Callable[..., Any]) -> SignatureInfo:
    try:
        sig = inspect.signature(fn)
    except (ValueError, TypeError):
        return SignatureInfo(variadic=True)

    if inspect.isclass(fn):
        hints = _type_hints(fn.__init__) if fn.__init__ is not object.__init__ else _type_hints(fn.__new__)
    else:
        hints = _type_hints(fn)
    out = []
    variadic = False
    for name, param in sig.parameters.items():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            variadic = True
        if param.kind not in _POSITIONAL:
            continue
        out.append(
            ParameterInfo(
                name=name,
                annotation=hints.get(name, param.annotation),
                has_default=param.default is not inspect.Parameter.empty,
            )
        )
    return SignatureInfo(parameters=tuple(out), variadic=variadic)


class SignatureIntrospector:
    """Default :class:`Introspector` backed by runtime signatures."""

    def resolve_target(self, path: Optional[str]) -> type:
        """Import the class named by a dotted *path* (``"pkg.mod.Class"``).

        Nested classes are reachable as ``"pkg.mod.Outer.Inner"``.

        Raises:
            NotConstructibleError: If *path* is empty or cannot be imported.
        """
        if not isinstance(path, str) or not path:
            raise NotConstructibleError(path, "recipe does not name a target")
        parts = path.split(".")
        for i in range(len(parts) - 1, 0, -1):
            try:
                obj: Any = importlib.import_module(".".join(parts[:i]))
            except ImportError:
                continue
            try:
                for attr in parts[i:]:
                    obj = getattr(obj, attr)
            except AttributeError:
                break
            return obj
        if len(parts) == 1 and isinstance(getattr(builtins, path, None), type):
            return getattr(builtins, path)
        raise NotConstructibleError(path, "target could not be imported")

    def is_instantiable(self, target: type) -> bool:
        if not isinstance(target, type):
            return False
        if inspect.isabstract(target):
            return False
        if getattr(target, "_is_protocol", False):
            return False
        return not issubclass(target, Enum)

    def is_enum(self, target: type) -> bool:
        return isinstance(target, type) and issubclass(target, Enum)

    def describe_constructor(self, target: type) -> SignatureInfo:
        if target.__init__ is object.__init__ and target.__new__ is object.__new__:
            return SignatureInfo(declared=False)
        return _describe_callable(target)

    def describe_method(self, instance: Any, name: str) -> SignatureInfo:
        if not isinstance(name, str):
            return SignatureInfo(variadic=True)
        method = getattr(instance, name, None)
        if method is None or not callable(method):
            return SignatureInfo(variadic=True)
        return _describe_callable(method)
