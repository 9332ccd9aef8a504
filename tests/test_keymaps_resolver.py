from __future__ import annotations

from vibevim.keymaps import (
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    load_default_keymaps,
    require_binding,
)


def build_registry(table: dict[str, dict[str, list[str]]]) -> KeymapRegistry:
    registry = KeymapRegistry()
    for context, actions in table.items():
        for action, keys in actions.items():
            registry.set_bindings(context, action, [require_binding(k) for k in keys])
    return registry


def test_resolver_matches_single_key() -> None:
    resolver = KeymapResolver(build_registry({"normal": {"move_left": ["h"]}}))

    result = resolver.resolve("normal", KeyStroke("h"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.action == "move_left"
    assert result.match.context == "normal"
    assert not result.starts_chord


def test_resolver_reports_pending_for_chord_first_key() -> None:
    resolver = KeymapResolver(build_registry({"normal": {"top": ["g g"]}}))

    result = resolver.resolve("normal", KeyStroke("g"))

    assert result.status == "pending"
    assert result.starts_chord
    assert result.match is not None and result.match.action == "top"


def test_resolver_completes_chord_with_second_key() -> None:
    resolver = KeymapResolver(build_registry({"global": {"sidebar": ["Space e"]}}))

    upper = resolver.resolve_chord_completion("global", "sidebar", KeyStroke("E"))
    other = resolver.resolve("global", KeyStroke("x"), pending_action="sidebar")

    assert upper.status == "match"
    assert upper.match is not None and upper.match.action == "sidebar"
    assert other.status == "miss"


def test_pending_lookup_only_considers_pending_action() -> None:
    resolver = KeymapResolver(
        build_registry({"normal": {"top": ["g g"], "down": ["j"]}})
    )

    result = resolver.resolve("normal", KeyStroke("j"), pending_action="top")

    assert result.status == "miss"


def test_first_match_in_table_order_wins() -> None:
    resolver = KeymapResolver(
        build_registry({"normal": {"first": ["x"], "second": ["x"]}})
    )

    result = resolver.resolve("normal", KeyStroke("x"))

    assert result.match is not None and result.match.action == "first"


def test_resolver_misses_unknown_context_and_modifiers() -> None:
    resolver = KeymapResolver(build_registry({"normal": {"move_left": ["h"]}}))

    assert resolver.resolve("visual", KeyStroke("h")).status == "miss"
    assert resolver.resolve("normal", KeyStroke("h", ("ctrl",))).status == "miss"


def test_default_table_resolves_stock_keys() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)

    colon = resolver.resolve("normal", KeyStroke(":"))
    window = resolver.resolve("global", KeyStroke("w", ("ctrl",)))
    cancel = resolver.resolve("command", KeyStroke("c", ("ctrl",)))

    assert colon.match is not None and colon.match.action == "enter_command_mode"
    assert window.status == "pending"
    assert cancel.match is not None and cancel.match.action == "cancel"
