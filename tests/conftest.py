import json

import pytest

from recipe_locator import Locator, configuration, DictSource


@pytest.fixture
def write_recipe(tmp_path):
    """Write ``locator/locate.<key>.json`` below ``tmp_path``.

    ``body`` is the whole document; pass ``raw`` to write text verbatim.
    """
    folder = tmp_path / "locator"
    folder.mkdir(exist_ok=True)

    def _write(key, body=None, *, raw=None, ext="json"):
        path = folder / f"locate.{key}.{ext}"
        path.write_text(raw if raw is not None else json.dumps(body), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config():
    return configuration(DictSource({"app": {"name": "demo"}}))


@pytest.fixture
def locator(config, tmp_path):
    return Locator(config, search_path=tmp_path)
