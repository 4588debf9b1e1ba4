"""Shared configuration object and its sources.

Provides the :class:`TreeSource` family (:class:`DictSource`,
:class:`FileSource`, :class:`EnvSource`), the read-only :class:`Configuration`
that every locator seeds into its registry under ``config``, and the
:func:`configuration` builder that assembles them. :func:`load_document` is
the JSON/YAML parser shared with recipe files.
"""

import copy
import json
import os
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from .exceptions import ConfigurationError

_MISSING = object()


def load_document(path: str) -> Any:
    """Parse a JSON (``.json``) or YAML (``.yaml``/``.yml``) file as plain data.

    YAML needs ``PyYAML`` (``pip install recipe-locator[yaml]``). Errors from
    opening or parsing the file propagate to the caller.

    Raises:
        ValueError: If the extension is neither JSON nor YAML.
    """
    ext = os.path.splitext(path)[1].lower()
    with open(path, encoding="utf-8") as f:
        if ext == ".json":
            return json.load(f)
        if ext in (".yaml", ".yml"):
            import yaml
            return yaml.safe_load(f)
    raise ValueError(f"Unsupported document type: {path}")


class TreeSource:
    """A source of nested configuration; :meth:`get_tree` returns the mapping."""

    def get_tree(self) -> Mapping[str, Any]:
        raise NotImplementedError


class DictSource(TreeSource):
    """In-memory configuration, e.g. ``DictSource({"db": {"host": "localhost"}})``."""

    def __init__(self, data: Mapping[str, Any]):
        self._data = data

    def get_tree(self) -> Mapping[str, Any]:
        return self._data


class FileSource(TreeSource):
    """Configuration read from a JSON or YAML file.

    An empty YAML file yields an empty tree.

    Args:
        path: File to read; the extension picks the parser.
        optional: If ``True`` a missing file yields an empty tree instead
            of an error, so deployment-specific files can be left out.

    Raises:
        ConfigurationError: If the file is missing (and not optional),
            cannot be parsed, or PyYAML is not installed for a YAML file.
    """

    def __init__(self, path: Union[str, os.PathLike], optional: bool = False):
        self._path = os.fspath(path)
        self._optional = optional

    def get_tree(self) -> Mapping[str, Any]:
        if self._optional and not os.path.isfile(self._path):
            return {}
        try:
            return load_document(self._path) or {}
        except ImportError:
            raise ConfigurationError("PyYAML not installed")
        except Exception as e:
            raise ConfigurationError(f"Failed to load config file {self._path}: {e}")


class EnvSource(TreeSource):
    """Tree source built from prefixed environment variables.

    ``APP_DB__HOST=x`` with ``prefix="APP_"`` becomes ``{"db": {"host": "x"}}``.
    Keys are lower-cased and ``__`` separates nesting levels.

    Args:
        prefix: Only variables starting with this prefix are read; it is
            stripped before building the key.
        environ: Mapping to read instead of ``os.environ``.
    """

    def __init__(self, prefix: str, environ: Optional[Mapping[str, str]] = None) -> None:
        if not prefix:
            raise ConfigurationError("EnvSource requires a non-empty prefix")
        self.prefix = prefix
        self._environ = environ

    def get_tree(self) -> Mapping[str, Any]:
        env = os.environ if self._environ is None else self._environ
        tree: Dict[str, Any] = {}
        for name, value in env.items():
            if not name.startswith(self.prefix):
                continue
            parts = [p.lower() for p in name[len(self.prefix):].split("__") if p]
            if not parts:
                continue
            cur = tree
            for part in parts[:-1]:
                nxt = cur.get(part)
                if not isinstance(nxt, dict):
                    nxt = {}
                    cur[part] = nxt
                cur = nxt
            cur[parts[-1]] = value
        return tree


def _deep_merge(a: Any, b: Any) -> Any:
    if isinstance(a, dict) and isinstance(b, dict):
        out = dict(a)
        for k, v in b.items():
            out[k] = _deep_merge(out[k], v) if k in out else v
        return out
    return b


class Configuration:
    """Read-only hierarchical configuration.

    Values are addressed with dotted paths (``"db.host"``). The object is
    what recipes receive when they ask for the ``config`` identifier.
    """

    def __init__(self, tree: Optional[Mapping[str, Any]] = None) -> None:
        self._tree: Dict[str, Any] = dict(tree or {})

    def _walk(self, path: str) -> Any:
        cur: Any = self._tree
        for part in path.split("."):
            if isinstance(cur, Mapping) and part in cur:
                cur = cur[part]
            else:
                return _MISSING
        return cur

    def get(self, path: str, default: Any = None) -> Any:
        value = self._walk(path)
        return default if value is _MISSING else value

    def subtree(self, prefix: str) -> "Configuration":
        value = self._walk(prefix)
        if not isinstance(value, Mapping):
            raise ConfigurationError(f"Missing config prefix: {prefix}")
        return Configuration(value)

    def as_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._tree)

    def __getitem__(self, path: str) -> Any:
        value = self._walk(path)
        if value is _MISSING:
            raise KeyError(path)
        return value

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self._walk(path) is not _MISSING

    def __iter__(self) -> Iterator[str]:
        return iter(self._tree)

    def __len__(self) -> int:
        return len(self._tree)

    def __repr__(self) -> str:
        return f"Configuration({sorted(self._tree)!r})"


def configuration(*sources: TreeSource, overrides: Optional[Mapping[str, Any]] = None) -> Configuration:
    """Build a :class:`Configuration` from one or more tree sources.

    Sources are deep-merged in order, later sources winning. ``overrides``
    is a nested mapping merged last.

    Raises:
        ConfigurationError: If a source is not a :class:`TreeSource` or does
            not produce a mapping.

    Example:
        >>> cfg = configuration(
        ...     DictSource({"db": {"host": "localhost"}}),
        ...     EnvSource(prefix="APP_"),
        ...     overrides={"debug": True},
        ... )
    """
    acc: Dict[str, Any] = {}
    for src in sources:
        if not isinstance(src, TreeSource):
            raise ConfigurationError(f"Unknown configuration source type: {type(src)}")
        tree = src.get_tree()
        if not isinstance(tree, Mapping):
            raise ConfigurationError(f"Configuration source {type(src).__name__} did not produce a mapping")
        acc = _deep_merge(acc, dict(tree))
    if overrides:
        acc = _deep_merge(acc, dict(overrides))
    return Configuration(acc)
