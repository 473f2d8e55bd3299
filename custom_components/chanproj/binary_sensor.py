"""Binary sensors for chanproj alarm readiness flags and zones."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import Any

from chanproj_lib import OpenClosed, channel_index, group_channel_id
from chanproj_lib import const as channels
import voluptuous as vol

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
    BinarySensorEntityDescription,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers import entity_platform
from homeassistant.helpers.entity_platform import AddConfigEntryEntitiesCallback

from .const import (
    ATTR_STATE,
    CONF_ZONE_COUNT,
    CONF_ZONE_TYPES,
    DATA_COORDINATOR,
    DATA_HUB,
    DEFAULT_ZONE_COUNT,
    DOMAIN,
    KIND_ALARM,
    SERVICE_SET_ZONE_STATE,
)
from .coordinator import ChanProjDataUpdateCoordinator
from .entity import ChanProjChannelEntity, entry_value
from .hub import ProjectorHub

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class ChanProjBinarySensorDescription(BinarySensorEntityDescription):
    """Describe a projected boolean channel."""

    key: str


READINESS_SENSORS: tuple[ChanProjBinarySensorDescription, ...] = (
    ChanProjBinarySensorDescription(
        key=channels.CHANNEL_INTERNAL_ARMING_POSSIBLE,
        name="Internal arming possible",
    ),
    ChanProjBinarySensorDescription(
        key=channels.CHANNEL_EXTERNAL_ARMING_POSSIBLE,
        name="External arming possible",
    ),
    ChanProjBinarySensorDescription(
        key=channels.CHANNEL_PASSTHROUGH_POSSIBLE,
        name="Passthrough possible",
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up chanproj binary sensors from a config entry."""
    data = hass.data[DOMAIN][entry.entry_id]
    hub: ProjectorHub = data[DATA_HUB]
    coordinator: ChanProjDataUpdateCoordinator = data[DATA_COORDINATOR]
    if hub.kind != KIND_ALARM:
        return

    entities: list[BinarySensorEntity] = [
        ChanProjReadinessBinarySensor(coordinator, hub, entry, description)
        for description in READINESS_SENSORS
    ]
    zone_count = int(entry_value(entry, CONF_ZONE_COUNT, DEFAULT_ZONE_COUNT))
    zone_types: Mapping[str, str] = entry_value(entry, CONF_ZONE_TYPES, {}) or {}
    for zone in range(1, zone_count + 1):
        channel_id = group_channel_id(channels.CHANNEL_ALARM_ZONE_PREFIX, zone)
        zone_type = zone_types.get(channel_id, channels.DEFAULT_ZONE_TYPE.value)
        entities.append(
            ChanProjZoneBinarySensor(coordinator, hub, entry, channel_id, zone_type)
        )
    _LOGGER.debug("Adding %s alarm zone entities", zone_count)
    async_add_entities(entities)

    platform = entity_platform.async_get_current_platform()
    platform.async_register_entity_service(
        SERVICE_SET_ZONE_STATE,
        {vol.Required(ATTR_STATE): vol.Any(bool, int, float, str)},
        "async_set_zone_state",
    )


class ChanProjReadinessBinarySensor(ChanProjChannelEntity, BinarySensorEntity):
    """An alarm controller readiness flag."""

    entity_description: ChanProjBinarySensorDescription

    def __init__(
        self,
        coordinator: ChanProjDataUpdateCoordinator,
        hub: ProjectorHub,
        entry: ConfigEntry,
        description: ChanProjBinarySensorDescription,
    ) -> None:
        super().__init__(coordinator, hub, entry, description.key)
        self.entity_description = description

    @property
    def is_on(self) -> bool | None:
        state = self.projected_state
        if isinstance(state, bool):
            return state
        return None


class ChanProjZoneBinarySensor(ChanProjChannelEntity, BinarySensorEntity):
    """An alarm zone; on while the zone is open."""

    _attr_device_class = BinarySensorDeviceClass.OPENING

    def __init__(
        self,
        coordinator: ChanProjDataUpdateCoordinator,
        hub: ProjectorHub,
        entry: ConfigEntry,
        channel_id: str,
        zone_type: str,
    ) -> None:
        """Initialize the zone sensor."""
        super().__init__(coordinator, hub, entry, channel_id)
        self._zone = channel_index(channel_id, channels.CHANNEL_ALARM_ZONE_PREFIX)
        self._attr_name = f"Zone {self._zone}"
        self._attr_extra_state_attributes = {channels.ZONE_PROPERTY_TYPE: zone_type}

    @property
    def is_on(self) -> bool | None:
        """Return true if the zone is open."""
        state = self.projected_state
        if isinstance(state, OpenClosed):
            return state is OpenClosed.OPEN
        return None

    async def async_set_zone_state(self, state: Any) -> None:
        """Ask the alarm controller to open or close this zone."""
        self.coordinator.async_zone_command(self.channel_id, state)
