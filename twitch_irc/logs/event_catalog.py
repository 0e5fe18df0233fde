"""Event template catalog for ``BotLogger.log_event``.

``event_templates.json`` maps ``domain -> action -> template``; this module
flattens it to ``{(domain, action): template}``. Entries that are not
strings are ignored, and an unreadable file leaves a single
``("app", "load_error")`` entry so logging keeps working on derived texts.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

DEFAULT_TEMPLATES_PATH = Path(__file__).with_name("event_templates.json")

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}


def _flatten(raw: Any) -> dict[tuple[str, str], str]:
    if not isinstance(raw, Mapping):
        return {}
    return {
        (domain, action): template
        for domain, actions in raw.items()
        if isinstance(domain, str) and isinstance(actions, Mapping)
        for action, template in actions.items()
        if isinstance(action, str) and isinstance(template, str)
    }


def _load_event_templates(path: Path | None = None) -> dict[tuple[str, str], str]:
    try:
        text = (path or DEFAULT_TEMPLATES_PATH).read_text(encoding="utf-8")
        return _flatten(json.loads(text))
    except FileNotFoundError:
        return {("app", "load_error"): "Event templates file missing"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Failed to load event templates: {e}"[:200]}


def reload_event_templates(path: Path | None = None) -> None:
    """Re-read the catalog, from ``path`` if given."""
    global EVENT_TEMPLATES  # noqa: PLW0603
    EVENT_TEMPLATES = _load_event_templates(path)


reload_event_templates()

__all__ = ["DEFAULT_TEMPLATES_PATH", "EVENT_TEMPLATES", "reload_event_templates"]
