"""Shared entity helpers for the chanproj integration."""

from __future__ import annotations

from enum import Enum
from typing import Any

from chanproj_lib import UNDEF

from homeassistant.config_entries import ConfigEntry
from homeassistant.exceptions import ServiceValidationError
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, MANUFACTURER
from .coordinator import ChanProjDataUpdateCoordinator
from .hub import ProjectorHub


def device_info_for_entry(hub: ProjectorHub, entry: ConfigEntry) -> DeviceInfo:
    """Build device info for entities tied to a config entry."""
    module_type = hub.context.module_type
    return DeviceInfo(
        identifiers={(DOMAIN, entry.entry_id)},
        name=hub.name or entry.title,
        manufacturer=MANUFACTURER,
        model=module_type.value if module_type is not None else hub.kind,
    )


def entry_value(entry: ConfigEntry, key: str, default: Any = None) -> Any:
    """Return an option value, falling back to the entry data."""
    if key in entry.options:
        return entry.options[key]
    return entry.data.get(key, default)


def build_unique_id(entry: ConfigEntry, channel_id: str) -> str:
    """Build a stable unique ID in <entry_id>:<channel_id> format."""
    return f"{entry.entry_id}:{channel_id}"


def channel_id_from_unique_id(entry: ConfigEntry, unique_id: str) -> str | None:
    """Return the channel id encoded in a unique ID of this entry."""
    prefix = f"{entry.entry_id}:"
    if not unique_id.startswith(prefix):
        return None
    return unique_id[len(prefix) :] or None


def to_native(state: Any) -> Any:
    """Convert a projected state into a Home Assistant native value."""
    if state is UNDEF:
        return None
    if isinstance(state, Enum):
        return state.value
    return state


class ChanProjChannelEntity(CoordinatorEntity[ChanProjDataUpdateCoordinator]):
    """An entity backed by one projected channel; adding it links the channel."""

    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: ChanProjDataUpdateCoordinator,
        hub: ProjectorHub,
        entry: ConfigEntry,
        channel_id: str,
    ) -> None:
        """Initialize the channel entity."""
        super().__init__(coordinator)
        self._hub = hub
        self._entry = entry
        self._channel_id = channel_id
        self._attr_unique_id = build_unique_id(entry, channel_id)
        self._attr_device_info = device_info_for_entry(hub, entry)

    @property
    def channel_id(self) -> str:
        """Return the projected channel id."""
        return self._channel_id

    @property
    def projected_state(self) -> Any:
        """Return the last projected state of the channel."""
        return self.coordinator.channel_state(self._channel_id)

    @property
    def available(self) -> bool:
        """Return if the entity is available."""
        return self._hub.is_ready

    async def async_added_to_hass(self) -> None:
        """Link the channel when the entity is added."""
        await super().async_added_to_hass()
        self.coordinator.async_link_channel(self._channel_id)

    async def async_will_remove_from_hass(self) -> None:
        """Unlink the channel when the entity is removed."""
        self.coordinator.async_unlink_channel(self._channel_id)
        await super().async_will_remove_from_hass()

    async def async_set_zone_state(self, state: Any) -> None:
        """Set the state of an alarm zone."""
        raise ServiceValidationError(f"{self.entity_id} is not an alarm zone")

    async def async_send_command(self, command: str) -> None:
        """Send a command to the alarm controller."""
        raise ServiceValidationError(f"{self.entity_id} does not accept alarm commands")
