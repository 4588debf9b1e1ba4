"""File-based recipe declarations.

A recipe for identifier ``logger`` lives in ``locator/locate.logger.json``
(or ``.yaml`` / ``.yml``) below one of the directories on the search path.
Files are parsed as plain data, nothing in them is executed.
"""

import logging
import os
from typing import Iterable, List, Optional, Union

from .config import load_document
from .constants import RECIPE_EXTENSIONS, RECIPE_NAMESPACE, RECIPE_PREFIX
from .recipe import Recipe

_logger = logging.getLogger(__name__)


class RecipeStore:
    """Locates and parses recipe declarations on a search path.

    Args:
        search_path: A directory, or an ordered iterable of directories.
            Entries are searched first to last and the first declaration
            found wins.
    """

    def __init__(self, search_path: Union[str, os.PathLike, Iterable[Union[str, os.PathLike]]]):
        if isinstance(search_path, (str, os.PathLike)):
            search_path = [search_path]
        self.search_path: List[str] = [os.fspath(p) for p in search_path]

    def find(self, key: str) -> Optional[str]:
        """Return the path the declaration for *key* would be loaded from.

        Returns:
            The first existing file, or ``None`` if no declaration exists.
        """
        if not key or os.sep in key or (os.altsep and os.altsep in key):
            return None
        for base in self.search_path:
            for ext in RECIPE_EXTENSIONS:
                path = os.path.join(base, RECIPE_NAMESPACE, f"{RECIPE_PREFIX}{key}.{ext}")
                if os.path.isfile(path):
                    return path
        return None

    def load(self, key: str) -> Optional[Recipe]:
        """Load the recipe for *key*.

        The parsed document must map *key* to a mapping whose ``params`` is
        a list and whose ``methods``, if given, is a list too. A missing file,
        a file that fails to parse, or any other shape yields ``None``.
        """
        path = self.find(key)
        if path is None:
            _logger.debug("No recipe declaration for '%s'", key)
            return None

        try:
            document = load_document(path)
        except Exception as e:
            _logger.warning("Ignoring unreadable recipe declaration %s: %s", path, e)
            return None

        if not isinstance(document, dict):
            return None
        declaration = document.get(key)
        if (
            not isinstance(declaration, dict)
            or not isinstance(declaration.get("params"), list)
            or (declaration.get("methods") is not None and not isinstance(declaration["methods"], list))
        ):
            _logger.debug("Recipe declaration %s has no valid entry for '%s'", path, key)
            return None

        _logger.debug("Loaded recipe for '%s' from %s", key, path)
        return Recipe.from_mapping(declaration)
