from __future__ import annotations

import json
from pathlib import Path

import pytest

from vibevim.keymaps import (
    ActionRef,
    KeymapRegistry,
    KeyStroke,
    apply_user_keybinds,
    default_keybinds,
    load_default_keymaps,
    load_user_keybinds,
    parse_keybind_payload,
    require_binding,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_registry() -> KeymapRegistry:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    return registry


def write_keybinds(tmp_path: Path, payload: object) -> Path:
    path = tmp_path / "keybinds.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_register_action_rejects_duplicates() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action("normal.test"))

    with pytest.raises(ValueError):
        registry.register_action(make_action("normal.test"))

    registry.register_action(make_action("normal.test"), replace=True)
    assert registry.get_action("normal", "test").id == "normal.test"


def test_get_action_unknown_raises_key_error() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.get_action("normal", "missing")
    assert registry.find_action("normal", "missing") is None


def test_action_ref_exposes_context_and_name() -> None:
    action = make_action("normal.move_left")

    assert action.context == "normal"
    assert action.name == "move_left"
    assert action.telemetry_name == "normal.move_left"


def test_defaults_cover_every_context() -> None:
    registry = make_registry()
    stats = registry.stats()

    assert stats.contexts == ("command", "explorer", "global", "insert", "normal", "search")
    assert registry.bindings_for("normal", "move_to_first_line") == (
        require_binding("g g"),
    )
    assert require_binding("Ctrl+c") in registry.bindings_for("command", "cancel")
    assert require_binding("Ctrl+c") in registry.bindings_for("search", "cancel")


def test_every_default_binding_has_a_handler() -> None:
    registry = make_registry()

    for context, actions in default_keybinds().items():
        for action in actions:
            assert registry.find_action(context, action) is not None, (context, action)


def test_set_bindings_bumps_revision() -> None:
    registry = KeymapRegistry()
    before = registry.revision()

    registry.set_bindings("normal", "move_left", [require_binding("h")])
    registry.add_binding("normal", "move_left", require_binding("Left"))

    assert registry.revision() == before + 2
    assert [b.key_signature for b in registry.bindings_for("normal", "move_left")] == [
        "h",
        "Left",
    ]
    assert registry.remove_action_bindings("normal", "move_left") is True
    assert registry.remove_action_bindings("normal", "move_left") is False


def test_iter_context_keeps_table_order() -> None:
    registry = make_registry()

    actions = [action for action, _ in registry.iter_context("normal")]

    assert actions[:3] == ["move_left", "move_left", "move_down"]


def test_merge_replaces_whole_action() -> None:
    registry = make_registry()

    registry.merge({"normal": {"move_left": [require_binding("y")]}})

    assert registry.bindings_for("normal", "move_left") == (require_binding("y"),)
    assert registry.bindings_for("normal", "move_right") == (
        require_binding("l"),
        require_binding("Right"),
    )


def test_parse_payload_skips_invalid_entries() -> None:
    payload = {
        "normal": {
            "move_left": ["y", "Bogus+q", 3],
            "move_right": ["NotAKey"],
            "move_up": "k",
        },
        "insert": ["not", "a", "dict"],
    }

    overrides = parse_keybind_payload(payload)

    assert overrides == {"normal": {"move_left": [require_binding("y")]}}


def test_parse_payload_ignores_non_object() -> None:
    assert parse_keybind_payload(["normal"]) == {}


def test_load_user_keybinds_missing_or_malformed(tmp_path: Path) -> None:
    assert load_user_keybinds(tmp_path / "absent.json") == {}
    assert load_user_keybinds(None) == {}

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert load_user_keybinds(broken) == {}


def test_apply_user_keybinds_merges_over_defaults(tmp_path: Path) -> None:
    registry = make_registry()
    path = write_keybinds(
        tmp_path,
        {
            "normal": {"move_left": ["y", "Ctrl+h"], "move_right": ["???"]},
            "global": {"toggle_sidebar": ["Space t"]},
        },
    )

    overrides = apply_user_keybinds(registry, path)

    assert set(overrides) == {"normal", "global"}
    assert registry.bindings_for("normal", "move_left") == (
        require_binding("y"),
        require_binding("Ctrl+h"),
    )
    # every string invalid: the defaults survive
    assert registry.bindings_for("normal", "move_right")[0].first == KeyStroke("l")
    assert registry.bindings_for("global", "toggle_sidebar") == (
        require_binding("Space t"),
    )
