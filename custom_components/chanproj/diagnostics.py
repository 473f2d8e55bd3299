"""Diagnostics support for chanproj."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from chanproj_lib import UNDEF, RawReference, redact_for_diagnostics
from chanproj_lib.const import (
    CHANNEL_EVENT_SNAPSHOT,
    CHANNEL_EVENT_SNAPSHOT_URL,
    CHANNEL_EVENT_VIDEO_LOCAL_URL,
    CHANNEL_EVENT_VIDEO_VPN_URL,
)
from chanproj_lib.redact import SENSITIVE_KEYS

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import CONF_KIND, DATA_COORDINATOR, DATA_HUB, DOMAIN
from .coordinator import ChanProjDataUpdateCoordinator
from .hub import ProjectorHub

_STATE_KEYS = SENSITIVE_KEYS | {
    CHANNEL_EVENT_SNAPSHOT,
    CHANNEL_EVENT_SNAPSHOT_URL,
    CHANNEL_EVENT_VIDEO_LOCAL_URL,
    CHANNEL_EVENT_VIDEO_VPN_URL,
}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    data = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    hub: ProjectorHub | None = data.get(DATA_HUB) if data else None
    coordinator: ChanProjDataUpdateCoordinator | None = (
        data.get(DATA_COORDINATOR) if data else None
    )
    records = hub.get_records() if hub is not None else []
    linked: list[str] = []
    states: dict[str, Any] = {}
    if coordinator is not None:
        linked = sorted(coordinator.session.linked_channels)
        states = {
            channel_id: _plain(coordinator.channel_state(channel_id))
            for channel_id in linked
        }

    return {
        "entry_id": entry.entry_id,
        "kind": entry.data.get(CONF_KIND),
        "data": redact_for_diagnostics(dict(entry.data)),
        "options": redact_for_diagnostics(dict(entry.options)),
        "context": redact_for_diagnostics(_plain(hub.context) if hub else None),
        "records": {
            type(record).__name__: redact_for_diagnostics(_plain(record))
            for record in records
        },
        "linked_channels": linked,
        "channel_states": redact_for_diagnostics(states, _STATE_KEYS),
    }


def _plain(value: Any) -> Any:
    """Flatten records, contexts and projected states into JSON values."""
    if value is None or value is UNDEF:
        return None
    if isinstance(value, RawReference):
        return value.url
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, datetime):
        return value.isoformat()
    if is_dataclass(value):
        return {field.name: _plain(getattr(value, field.name)) for field in fields(value)}
    if isinstance(value, Mapping):
        # Zone maps are keyed by int.
        return {str(key): _plain(item) for key, item in value.items()}
    return value
