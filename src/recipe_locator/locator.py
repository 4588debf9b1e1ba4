"""The recipe-driven object locator."""

import os
from typing import Any, Dict, Iterable, Optional, Union

from .builder import InstanceBuilder
from .config import Configuration
from .constants import CONFIG_ID, LOCATOR_ID, LOGGER, SEARCH_PATH_KEY
from .exceptions import NotFoundError
from .introspection import Introspector, SignatureIntrospector
from .parameters import ParameterResolver
from .processor import PostConstructionProcessor
from .recipe import Recipe
from .recipe_store import RecipeStore

SearchPath = Union[str, os.PathLike, Iterable[Union[str, os.PathLike]]]


class Locator:
    """Builds objects by identifier from declarative recipes.

    Every locator owns a registry of resolved objects and a cache of loaded
    recipes. The registry is seeded with the shared configuration under
    ``config`` and with the locator itself under ``locator``.

    Lookup order for :meth:`get`:

    1. an object already in the registry is returned unchanged;
    2. a cached recipe is built and post-processed;
    3. otherwise the recipe is loaded from the store, cached, and step 2
       runs once;
    4. with no recipe, :class:`NotFoundError` is raised.

    A locator is not thread-safe; callers sharing one across threads must
    serialize access themselves.

    Args:
        config: The shared configuration object.
        search_path: Directories searched for ``locator/locate.<id>.*``.
            Defaults to the ``locator.search_path`` configuration value,
            then to the current working directory.
        store: Recipe store to use instead of building one from
            ``search_path``.
        introspector: Signature introspection capability.

    Example:
        >>> locator = Locator(configuration(DictSource({})), search_path="etc")
        >>> logger = locator.get("logger")
    """

    def __init__(
        self,
        config: Configuration,
        search_path: Optional[SearchPath] = None,
        *,
        store: Optional[RecipeStore] = None,
        introspector: Optional[Introspector] = None,
    ) -> None:
        self._registry: Dict[str, Any] = {}
        self._cache: Dict[str, Recipe] = {}
        self._config = config

        self._registry[CONFIG_ID] = config
        self._registry[LOCATOR_ID] = self

        if store is None:
            if search_path is None:
                search_path = config.get(SEARCH_PATH_KEY) or os.getcwd()
            store = RecipeStore(search_path)
        self._store = store

        self._introspector = introspector or SignatureIntrospector()
        resolver = ParameterResolver(self)
        self._builder = InstanceBuilder(self._introspector, resolver)
        self._processor = PostConstructionProcessor(self._registry, self._cache, self._introspector, resolver)

        self._registry_hits = 0
        self._builds = 0

    @property
    def config(self) -> Configuration:
        return self._config

    @property
    def store(self) -> RecipeStore:
        return self._store

    def override(self, key: str, obj: Any) -> None:
        """Register *obj* under *key*, taking precedence over any recipe."""
        LOGGER.debug("Overriding '%s' with %s", key, type(obj).__qualname__)
        self._registry[key] = obj

    def has(self, key: str) -> bool:
        """Return ``True`` if :meth:`get` can find an entry for *key*.

        A ``True`` result means ``get(key)`` will not raise
        :class:`NotFoundError`; building the entry may still fail. Loading
        a recipe here caches it just like :meth:`get` does.
        """
        if key in self._registry:
            return True
        if key in self._cache:
            return True
        self._load_recipe(key)
        return key in self._cache

    def get(self, key: str) -> Any:
        """Return the object for *key*.

        Raises:
            NotFoundError: No registry entry and no loadable recipe for *key*.
            ContainerError: The recipe could not be turned into an object.
        """
        if key in self._registry:
            self._registry_hits += 1
            return self._registry[key]

        if key in self._cache:
            return self._new_instance(key)

        self._load_recipe(key)

        if key in self._cache:
            return self._new_instance(key)

        raise NotFoundError(key)

    def get_or_none(self, key: str) -> Optional[Any]:
        """Like :meth:`get`, but return ``None`` when *key* is unknown.

        Only :class:`NotFoundError` for *key* itself is suppressed; a
        missing nested dependency and build errors still propagate.
        """
        try:
            return self.get(key)
        except NotFoundError as e:
            if e.key != key:
                raise
            return None

    def stats(self) -> Dict[str, Any]:
        return {
            "registered": sorted(self._registry),
            "recipes_cached": sorted(self._cache),
            "registry_hits": self._registry_hits,
            "builds": self._builds,
        }

    def _load_recipe(self, key: str) -> None:
        recipe = self._store.load(key)
        if recipe is not None:
            self._cache[key] = recipe

    def _new_instance(self, key: str) -> Any:
        instance = self._builder.build(key, self._cache[key])
        self._builds += 1
        return self._processor.process(key, instance)
