import pytest

import sample_app
from recipe_locator import (
    ComponentCreationError,
    Configuration,
    InsufficientArgumentsError,
    Locator,
    NotFoundError,
    RecipeStore,
    configuration,
    DictSource,
)
from recipe_locator.recipe import Recipe


def test_registry_is_seeded_with_config_and_self(locator, config):
    assert locator.get("config") is config
    assert locator.get("locator") is locator
    assert locator.config is config


def test_unknown_identifier_raises_not_found(locator):
    with pytest.raises(NotFoundError) as exc:
        locator.get("nope")
    assert exc.value.key == "nope"
    assert "nope" in str(exc.value)
    assert locator.has("nope") is False


def test_end_to_end_singleton_logger(locator, config, write_recipe):
    write_recipe("logger", {"logger": {"name": "sample_app.FileLogger", "params": ["config"], "singleton": True}})

    first = locator.get("logger")
    assert isinstance(first, sample_app.FileLogger)
    assert first.config is config

    second = locator.get("logger")
    assert second is first
    assert locator.stats()["builds"] == 1


def test_registry_hit_never_reconsults_store(locator, monkeypatch):
    marker = object()
    locator.override("thing", marker)

    def fail(key):
        raise AssertionError("store consulted")

    monkeypatch.setattr(locator.store, "load", fail)

    assert locator.get("thing") is marker
    assert locator.get("thing") is marker
    assert locator.has("thing") is True


def test_non_singleton_returns_fresh_instances(locator, write_recipe):
    write_recipe("plain", {"plain": {"name": "sample_app.Plain", "params": []}})

    a = locator.get("plain")
    b = locator.get("plain")

    assert isinstance(a, sample_app.Plain)
    assert a is not b
    assert "plain" not in locator.stats()["registered"]
    assert "plain" in locator.stats()["recipes_cached"]


def test_singleton_skips_post_methods_on_later_calls(locator, write_recipe):
    write_recipe("counter", {"counter": {
        "name": "sample_app.Counter",
        "params": [],
        "singleton": True,
        "methods": [{"name": "record", "params": ["!once"]}],
    }})

    first = locator.get("counter")
    locator.get("counter")
    locator.get("counter")

    assert first.calls == [("once",)]


def test_singleton_flag_must_be_true(locator, write_recipe):
    write_recipe("plain", {"plain": {"name": "sample_app.Plain", "params": [], "singleton": "yes"}})

    assert locator.get("plain") is not locator.get("plain")


def test_recipe_is_loaded_only_once(locator, write_recipe, monkeypatch):
    write_recipe("plain", {"plain": {"name": "sample_app.Plain", "params": []}})
    calls = []
    original = locator.store.load

    def counting(key):
        calls.append(key)
        return original(key)

    monkeypatch.setattr(locator.store, "load", counting)

    locator.get("plain")
    locator.get("plain")
    assert locator.has("plain")

    assert calls == ["plain"]


def test_missing_recipe_is_looked_up_again(locator, write_recipe):
    assert locator.has("late") is False

    write_recipe("late", {"late": {"name": "sample_app.Plain", "params": []}})

    assert locator.has("late") is True
    assert isinstance(locator.get("late"), sample_app.Plain)


def test_has_caches_loaded_recipe(locator, write_recipe):
    write_recipe("plain", {"plain": {"name": "sample_app.Plain", "params": []}})

    assert locator.has("plain") is True
    assert "plain" in locator.stats()["recipes_cached"]


def test_has_is_true_even_if_build_would_fail(locator, write_recipe):
    write_recipe("broken", {"broken": {"name": "sample_app.Broken", "params": []}})

    assert locator.has("broken") is True
    with pytest.raises(ComponentCreationError):
        locator.get("broken")


def test_override_wins_over_recipe(locator, write_recipe):
    write_recipe("plain", {"plain": {"name": "sample_app.Plain", "params": []}})
    assert isinstance(locator.get("plain"), sample_app.Plain)

    replacement = object()
    locator.override("plain", replacement)

    assert locator.get("plain") is replacement


def test_override_can_replace_seeded_config(locator):
    other = Configuration({"x": 1})
    locator.override("config", other)
    assert locator.get("config") is other


def test_nested_not_found_names_deepest_identifier(locator, write_recipe):
    write_recipe("outer", {"outer": {"name": "sample_app.Holder", "params": ["middle"]}})
    write_recipe("middle", {"middle": {"name": "sample_app.Holder", "params": ["missing"]}})

    with pytest.raises(NotFoundError) as exc:
        locator.get("outer")

    assert exc.value.key == "missing"


def test_nested_dependencies_are_resolved(locator, write_recipe):
    write_recipe("outer", {"outer": {"name": "sample_app.Holder", "params": ["inner"]}})
    write_recipe("inner", {"inner": {"name": "sample_app.Holder", "params": ["!leaf"]}})

    outer = locator.get("outer")

    assert isinstance(outer.value, sample_app.Holder)
    assert outer.value.value == "leaf"


def test_recipe_can_request_the_locator(locator, write_recipe):
    write_recipe("holder", {"holder": {"name": "sample_app.Holder", "params": ["locator"]}})

    assert locator.get("holder").value is locator


def test_get_or_none_returns_none_for_unknown(locator):
    assert locator.get_or_none("nope") is None


def test_get_or_none_returns_instance(locator, write_recipe):
    write_recipe("plain", {"plain": {"name": "sample_app.Plain", "params": []}})

    assert isinstance(locator.get_or_none("plain"), sample_app.Plain)


def test_get_or_none_propagates_other_errors(locator, write_recipe):
    write_recipe("pair", {"pair": {"name": "sample_app.Pair", "params": ["!a"]}})

    with pytest.raises(InsufficientArgumentsError):
        locator.get_or_none("pair")


def test_get_or_none_propagates_nested_not_found(locator, write_recipe):
    write_recipe("holder", {"holder": {"name": "sample_app.Holder", "params": ["missing"]}})

    with pytest.raises(NotFoundError) as exc:
        locator.get_or_none("holder")
    assert exc.value.key == "missing"


def test_search_path_from_configuration(tmp_path, write_recipe):
    write_recipe("plain", {"plain": {"name": "sample_app.Plain", "params": []}})
    cfg = configuration(DictSource({"locator": {"search_path": [str(tmp_path)]}}))

    loc = Locator(cfg)

    assert loc.store.search_path == [str(tmp_path)]
    assert isinstance(loc.get("plain"), sample_app.Plain)


def test_custom_store_is_used(config):
    class StaticStore(RecipeStore):
        def __init__(self):
            super().__init__([])

        def load(self, key):
            if key == "plain":
                return Recipe(target="sample_app.Plain")
            return None

    loc = Locator(config, store=StaticStore())

    assert isinstance(loc.get("plain"), sample_app.Plain)
    assert loc.has("other") is False


def test_stats_counts_hits_and_builds(locator, write_recipe):
    write_recipe("plain", {"plain": {"name": "sample_app.Plain", "params": []}})

    locator.get("plain")
    locator.get("plain")
    locator.get("config")

    stats = locator.stats()
    assert stats["builds"] == 2
    assert stats["registry_hits"] == 1
    assert stats["registered"] == ["config", "locator"]


def test_debug_logging_on_build(locator, write_recipe, caplog):
    caplog.set_level("DEBUG", logger="recipe_locator")
    write_recipe("plain", {"plain": {"name": "sample_app.Plain", "params": []}})
    locator.get("plain")

    assert any("Loaded recipe for 'plain'" in line for line in caplog.messages)
    assert any("Building 'plain'" in line for line in caplog.messages)


def test_surplus_params_accepted_end_to_end(locator, write_recipe):
    write_recipe("settings", {"settings": {
        "name": "sample_app.Settings",
        "params": ["!base", "!extra"],
        "methods": [{"name": "touch", "params": ["!m", "!extra"]}],
    }})

    settings = locator.get("settings")

    assert settings.name == "base"
    assert settings.touched == ["m"]


def test_method_without_name_fails_inside_error_hierarchy(locator, write_recipe):
    write_recipe("n", {"n": {"name": "sample_app.Plain", "params": [], "methods": [{"params": ["!x"]}]}})

    with pytest.raises(ComponentCreationError):
        locator.get("n")
