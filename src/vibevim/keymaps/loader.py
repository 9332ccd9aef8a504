"""Load user keybind overrides from the JSON config file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from vibevim.runtime import telemetry

from .models import Binding, KeybindMap
from .parser import parse_binding
from .registry import KeymapRegistry

logger = telemetry.get_logger("vibevim.keymaps.loader")


def parse_keybind_payload(payload: Any) -> KeybindMap:
    """Turn ``{context: {action: [keyStrings...]}}`` into a keybind map.

    Entries with the wrong shape or unparseable key strings are skipped one
    by one. An action left without any valid binding is dropped so that the
    default bindings survive the merge.
    """

    if not isinstance(payload, dict):
        logger.warning("keybinds payload is not a JSON object; ignoring it")
        return {}

    keybinds: KeybindMap = {}
    for context, actions in payload.items():
        if not isinstance(context, str) or not isinstance(actions, dict):
            logger.warning("skipping keybind context %r", context)
            continue
        for action, keys in actions.items():
            if not isinstance(action, str) or not isinstance(keys, list):
                logger.warning("skipping keybind entry %s.%r", context, action)
                continue
            bindings: list[Binding] = []
            for text in keys:
                binding = parse_binding(text) if isinstance(text, str) else None
                if binding is None:
                    logger.warning(
                        "skipping invalid key %r for %s.%s", text, context, action
                    )
                    continue
                bindings.append(binding)
            if bindings:
                keybinds.setdefault(context, {})[action] = bindings
    return keybinds


def load_user_keybinds(path: Optional[Path | str]) -> KeybindMap:
    """Read overrides from ``path``; missing or broken files yield ``{}``."""

    if path is None:
        return {}
    path = Path(path).expanduser()
    if not path.is_file():
        return {}
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        logger.warning("failed to read keybinds from %s: %s", path, exc)
        return {}
    return parse_keybind_payload(payload)


def apply_user_keybinds(
    registry: KeymapRegistry, path: Optional[Path | str]
) -> KeybindMap:
    """Merge the overrides found at ``path`` into ``registry``."""

    overrides = load_user_keybinds(path)
    if overrides:
        registry.merge(overrides)
        telemetry.record_event(
            "keymaps.user_loaded",
            data={"path": str(path), "contexts": ",".join(sorted(overrides))},
            logger_name="vibevim.keymaps",
        )
    return overrides


__all__ = [
    "apply_user_keybinds",
    "load_user_keybinds",
    "parse_keybind_payload",
]
