"""Hub wrapper between the device/cloud client and the projector."""

from __future__ import annotations

from collections.abc import Callable
import logging

from chanproj_lib import (
    AlarmCommand,
    ChannelProjector,
    DomainRecord,
    OpenClosed,
    ProjectionContext,
    ProjectorConfig,
    channel_index,
    parse_alarm_command,
)
from chanproj_lib.const import CHANNEL_ALARM_ZONE_PREFIX

from homeassistant.core import HomeAssistant, callback

from .const import ATTR_CHANNEL, ATTR_COMMAND, ATTR_STATE, ATTR_ZONE, EVENT_ALARM_COMMAND, EVENT_ZONE_COMMAND

_LOGGER = logging.getLogger(__name__)


class ProjectorHub:
    """Hold the latest record of one device and fan it out to subscribers."""

    def __init__(
        self,
        hass: HomeAssistant,
        entry_id: str,
        kind: str,
        context: ProjectionContext,
        name: str | None,
    ) -> None:
        """Initialize the hub."""
        self._hass = hass
        self._entry_id = entry_id
        self._kind = kind
        self._context = context
        self._name = name
        self._projector = ChannelProjector(ProjectorConfig(logger_name=__name__))
        self._records: dict[type, DomainRecord] = {}
        self._latest: DomainRecord | None = None
        self._callbacks: list[Callable[[DomainRecord | None], None]] = []

    @property
    def kind(self) -> str:
        """Return the binding kind (alarm or camera)."""
        return self._kind

    @property
    def name(self) -> str | None:
        """Return the configured device name."""
        return self._name

    @property
    def context(self) -> ProjectionContext:
        """Return the static projection context."""
        return self._context

    @property
    def projector(self) -> ChannelProjector:
        """Return the shared projector."""
        return self._projector

    @property
    def is_ready(self) -> bool:
        """Return if a record has been delivered."""
        return bool(self._records)

    def get_record(self) -> DomainRecord | None:
        """Return the most recently delivered record."""
        return self._latest

    def get_records(self) -> list[DomainRecord]:
        """Return the latest record of each delivered type, in delivery order."""
        return list(self._records.values())

    @callback
    def async_push_record(self, record: DomainRecord) -> None:
        """Replace the record of the same type; called by the device/cloud client."""
        _LOGGER.debug("New %s record for %s", type(record).__name__, self._entry_id)
        self._records.pop(type(record), None)
        self._records[type(record)] = record
        self._latest = record
        for cb in list(self._callbacks):
            cb(record)

    def subscribe(self, callback_fn: Callable[[DomainRecord | None], None]) -> Callable[[], None]:
        """Subscribe to record replacements."""
        self._callbacks.append(callback_fn)
        return lambda: self.unsubscribe(callback_fn)

    def unsubscribe(self, callback_fn: Callable[[DomainRecord | None], None]) -> bool:
        """Unsubscribe from record replacements."""
        if callback_fn in self._callbacks:
            self._callbacks.remove(callback_fn)
            return True
        return False

    @callback
    def async_forward_zone_state(self, channel_id: str, state: OpenClosed) -> None:
        """Forward a resolved zone state to the command dispatcher."""
        zone = channel_index(channel_id, CHANNEL_ALARM_ZONE_PREFIX)
        self._hass.bus.async_fire(
            EVENT_ZONE_COMMAND,
            {
                "entry_id": self._entry_id,
                ATTR_CHANNEL: channel_id,
                ATTR_ZONE: zone,
                ATTR_STATE: state.value,
            },
        )

    @callback
    def async_send_command(self, text: str) -> AlarmCommand:
        """Parse an alarm command and forward it to the command dispatcher."""
        command = parse_alarm_command(text)
        _LOGGER.debug("Alarm controller %s received command %s", self._entry_id, command.value)
        self._hass.bus.async_fire(
            EVENT_ALARM_COMMAND,
            {"entry_id": self._entry_id, ATTR_COMMAND: command.value},
        )
        return command
