"""
ModePreferences -- which automation mode the user asked for, per pillar.

A global mode applies everywhere unless a pillar ("content", "pr", "seo",
"command", ...) carries its own override. resolve() then caps the selected
mode at a surface's ceiling and reports whether the cap kicked in, which is
what the mode switcher shows as "Capped".

This store belongs to the calling collaborator: its output becomes
RequestContext.requested_mode. The governor never reads it.
"""

import logging
import threading
from dataclasses import dataclass

from .governance import mode_ladder
from .governance.models import AutomationMode

logger = logging.getLogger(__name__)

DEFAULT_GLOBAL_MODE = AutomationMode.MANUAL


class PreferenceSource:
    PILLAR = "pillar"
    GLOBAL = "global"


@dataclass(frozen=True)
class ModeResolution:
    """Selected vs effective mode for one pillar after the ceiling."""

    pillar: str
    selected: AutomationMode
    effective: AutomationMode
    ceiling: AutomationMode | None
    ceiling_applied: bool
    source: str


class ModePreferences:
    """
    Thread-safe global + per-pillar mode selection.

    Usage:
        prefs = ModePreferences()
        prefs.set_global_mode("copilot")
        prefs.set_pillar_mode("pr", "autopilot")
        resolution = prefs.resolve("pr", ceiling="copilot")
        # resolution.effective == copilot, resolution.ceiling_applied is True
    """

    def __init__(self, global_mode: AutomationMode | str = DEFAULT_GLOBAL_MODE):
        self._global_mode = mode_ladder.parse_mode(global_mode)
        self._overrides: dict[str, AutomationMode] = {}
        self._lock = threading.Lock()

    @property
    def global_mode(self) -> AutomationMode:
        return self._global_mode

    def set_global_mode(self, mode: AutomationMode | str) -> None:
        parsed = mode_ladder.parse_mode(mode)
        with self._lock:
            self._global_mode = parsed
        logger.info(f"[ModePreferences] Global mode set to {parsed.value}")

    def set_pillar_mode(self, pillar: str, mode: AutomationMode | str) -> None:
        parsed = mode_ladder.parse_mode(mode)
        with self._lock:
            self._overrides[pillar] = parsed
        logger.info(f"[ModePreferences] {pillar} override set to {parsed.value}")

    def clear_pillar_override(self, pillar: str) -> bool:
        """Drop a pillar override. Returns False if there was none."""
        with self._lock:
            removed = self._overrides.pop(pillar, None) is not None
        if removed:
            logger.info(f"[ModePreferences] {pillar} override cleared")
        return removed

    def has_override(self, pillar: str) -> bool:
        with self._lock:
            return pillar in self._overrides

    def selected_mode(self, pillar: str) -> AutomationMode:
        with self._lock:
            return self._overrides.get(pillar, self._global_mode)

    def resolve(
        self, pillar: str, ceiling: AutomationMode | str | None = None
    ) -> ModeResolution:
        with self._lock:
            override = self._overrides.get(pillar)
            selected = override if override is not None else self._global_mode
        source = PreferenceSource.PILLAR if override is not None else PreferenceSource.GLOBAL

        if ceiling is None:
            return ModeResolution(
                pillar=pillar,
                selected=selected,
                effective=selected,
                ceiling=None,
                ceiling_applied=False,
                source=source,
            )

        ceiling_mode = mode_ladder.parse_mode(ceiling)
        effective = mode_ladder.clamp(selected, ceiling_mode)
        return ModeResolution(
            pillar=pillar,
            selected=selected,
            effective=effective,
            ceiling=ceiling_mode,
            ceiling_applied=effective != selected,
            source=source,
        )
