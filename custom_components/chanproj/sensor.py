"""Sensors for chanproj channels."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

from chanproj_lib import ArmStatus, EventType, UnsupportedAlarmCommand, VideoStatus
from chanproj_lib import const as channels
import voluptuous as vol

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorEntityDescription,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import UnitOfTime
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ServiceValidationError
from homeassistant.helpers import config_validation as cv, entity_platform
from homeassistant.helpers.entity_platform import AddConfigEntryEntitiesCallback

from .const import ATTR_COMMAND, DATA_COORDINATOR, DATA_HUB, DOMAIN, KIND_ALARM, SERVICE_SEND_COMMAND
from .coordinator import ChanProjDataUpdateCoordinator
from .entity import ChanProjChannelEntity, to_native
from .hub import ProjectorHub

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class ChanProjSensorDescription(SensorEntityDescription):
    """Describe a projected channel sensor."""

    key: str
    accepts_commands: bool = False


ALARM_SENSORS: tuple[ChanProjSensorDescription, ...] = (
    ChanProjSensorDescription(
        key=channels.CHANNEL_STATUS,
        name="Status",
        device_class=SensorDeviceClass.ENUM,
        options=[status.name for status in ArmStatus],
        accepts_commands=True,
    ),
    ChanProjSensorDescription(
        key=channels.CHANNEL_COUNTDOWN,
        name="Countdown",
        native_unit_of_measurement=UnitOfTime.SECONDS,
    ),
)

CAMERA_SENSORS: tuple[ChanProjSensorDescription, ...] = (
    ChanProjSensorDescription(
        key=channels.CHANNEL_EVENT_TYPE,
        name="Event type",
        device_class=SensorDeviceClass.ENUM,
        options=[event_type.name for event_type in EventType],
    ),
    ChanProjSensorDescription(key=channels.CHANNEL_EVENT_MESSAGE, name="Event message"),
    ChanProjSensorDescription(
        key=channels.CHANNEL_EVENT_TIME,
        name="Event time",
        device_class=SensorDeviceClass.TIMESTAMP,
    ),
    ChanProjSensorDescription(key=channels.CHANNEL_EVENT_PERSON_ID, name="Event person id"),
    ChanProjSensorDescription(key=channels.CHANNEL_EVENT_CAMERA_ID, name="Event camera id"),
    ChanProjSensorDescription(key=channels.CHANNEL_EVENT_SUBTYPE, name="Event subtype"),
    ChanProjSensorDescription(
        key=channels.CHANNEL_EVENT_SNAPSHOT_URL,
        name="Event snapshot URL",
        entity_registry_enabled_default=False,
    ),
    ChanProjSensorDescription(
        key=channels.CHANNEL_EVENT_VIDEO_STATUS,
        name="Event video status",
        device_class=SensorDeviceClass.ENUM,
        options=[status.name for status in VideoStatus],
    ),
    ChanProjSensorDescription(key=channels.CHANNEL_EVENT_VIDEO_LOCAL_URL, name="Event local video URL"),
    ChanProjSensorDescription(key=channels.CHANNEL_EVENT_VIDEO_VPN_URL, name="Event VPN video URL"),
    ChanProjSensorDescription(
        key=channels.CHANNEL_LAST_SEEN,
        name="Last seen",
        device_class=SensorDeviceClass.TIMESTAMP,
        entity_registry_enabled_default=False,
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up chanproj sensors from a config entry."""
    data = hass.data[DOMAIN][entry.entry_id]
    hub: ProjectorHub = data[DATA_HUB]
    coordinator: ChanProjDataUpdateCoordinator = data[DATA_COORDINATOR]
    descriptions = ALARM_SENSORS if hub.kind == KIND_ALARM else CAMERA_SENSORS
    async_add_entities(
        ChanProjSensor(coordinator, hub, entry, description) for description in descriptions
    )

    if hub.kind == KIND_ALARM:
        platform = entity_platform.async_get_current_platform()
        platform.async_register_entity_service(
            SERVICE_SEND_COMMAND,
            {vol.Required(ATTR_COMMAND): cv.string},
            "async_send_command",
        )


class ChanProjSensor(ChanProjChannelEntity, SensorEntity):
    """Representation of a projected channel as a sensor."""

    entity_description: ChanProjSensorDescription

    def __init__(
        self,
        coordinator: ChanProjDataUpdateCoordinator,
        hub: ProjectorHub,
        entry: ConfigEntry,
        description: ChanProjSensorDescription,
    ) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, hub, entry, description.key)
        self.entity_description = description

    @property
    def native_value(self) -> Any:
        """Return the projected value."""
        return to_native(self.projected_state)

    async def async_send_command(self, command: str) -> None:
        """Forward an alarm controller command."""
        if not self.entity_description.accepts_commands:
            await super().async_send_command(command)
            return
        try:
            self._hub.async_send_command(command)
        except UnsupportedAlarmCommand as err:
            _LOGGER.warning("%s", err.message)
            raise ServiceValidationError(err.message) from err
