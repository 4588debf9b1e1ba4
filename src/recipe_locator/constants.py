"""Constants used throughout recipe-locator.

This module defines the framework logger, the identifiers seeded into every
locator registry, and the naming convention used to find recipe declarations.
"""

import logging

LOGGER_NAME: str = "recipe_locator"
"""Default logger name for recipe-locator."""

LOGGER: logging.Logger = logging.getLogger(LOGGER_NAME)
"""Pre-configured logger instance for recipe-locator internal diagnostics."""

CONFIG_ID: str = "config"
"""Registry identifier of the shared configuration object."""

LOCATOR_ID: str = "locator"
"""Registry identifier under which a locator registers itself."""

ESCAPE_MARKER: str = "!"
"""Leading character that forces a string parameter to be taken literally."""

RECIPE_NAMESPACE: str = "locator"
"""Directory (relative to a search path entry) holding recipe declarations."""

RECIPE_PREFIX: str = "locate."
"""File name prefix of a recipe declaration (``locate.<id>.<ext>``)."""

RECIPE_EXTENSIONS: tuple = ("json", "yaml", "yml")
"""Recipe file extensions, in lookup order."""

SEARCH_PATH_KEY: str = "locator.search_path"
"""Configuration key holding the recipe search path."""
