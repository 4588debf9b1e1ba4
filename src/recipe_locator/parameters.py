from typing import Any, List, Protocol, Sequence

from .constants import ESCAPE_MARKER
from .introspection import ParameterInfo


class _Getter(Protocol):
    def get(self, key: str) -> Any: ...


class ParameterResolver:
    """Turns recipe parameter specs into call arguments.

    For each position, in order of precedence:

    1. a non-string value is passed through verbatim;
    2. a string starting with ``!`` is passed through with the marker
       stripped;
    3. a string at a position declared as ``str`` is passed through as is;
    4. any other string is an identifier, resolved with ``locator.get``.

    Lookup failures from step 4 propagate unchanged.
    """

    def __init__(self, locator: _Getter) -> None:
        self._locator = locator

    def resolve(self, params: Sequence[Any], declared: Sequence[ParameterInfo] = ()) -> List[Any]:
        out: List[Any] = []
        for idx, value in enumerate(params):
            if not isinstance(value, str):
                out.append(value)
                continue
            if value.startswith(ESCAPE_MARKER):
                out.append(value[len(ESCAPE_MARKER):])
                continue
            if idx < len(declared) and declared[idx].is_str:
                out.append(value)
                continue
            out.append(self._locator.get(value))
        return out
