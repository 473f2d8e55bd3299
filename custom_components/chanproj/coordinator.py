"""Data update coordinator for the chanproj integration."""

from __future__ import annotations

from collections.abc import Callable
import logging
from typing import Any

from chanproj_lib import UNDEF, DomainRecord, ProjectedState, ProjectionSession

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.exceptions import ServiceValidationError
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from .const import DOMAIN
from .hub import ProjectorHub

_LOGGER = logging.getLogger(__name__)


class ChanProjDataUpdateCoordinator(DataUpdateCoordinator[DomainRecord | None]):
    """Coordinate record replacements and linked channel projections."""

    def __init__(
        self,
        hass: HomeAssistant,
        hub: ProjectorHub,
        entry: ConfigEntry,
    ) -> None:
        """Initialize the coordinator."""
        super().__init__(hass, _LOGGER, name=DOMAIN, config_entry=entry)
        self._hub = hub
        self._states: dict[str, ProjectedState] = {}
        self._unsubscribe: Callable[[], None] | None = None
        self.session = ProjectionSession(
            hub.projector,
            hub.context,
            self._update_state,
            logger=_LOGGER,
        )

    async def async_start(self) -> None:
        """Subscribe to hub records and seed the delivered ones."""
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._unsubscribe = self._hub.subscribe(self._process_record)
        records = self._hub.get_records()
        if not records:
            self._set_record(None)
        for record in records:
            self._set_record(record)

    async def async_stop(self) -> None:
        """Stop coordinating updates."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def channel_state(self, channel_id: str) -> ProjectedState:
        """Return the last pushed state of a linked channel."""
        return self._states.get(channel_id, UNDEF)

    @callback
    def async_link_channel(self, channel_id: str) -> None:
        """Link a channel; its state is pushed right away."""
        self.session.link(channel_id)

    @callback
    def async_unlink_channel(self, channel_id: str) -> None:
        """Unlink a channel and forget its cached state."""
        self.session.unlink(channel_id)
        self._states.pop(channel_id, None)

    @callback
    def async_zone_command(self, channel_id: str, command: Any) -> None:
        """Resolve a zone command and forward it through the hub."""
        state = self.session.handle_zone_command(channel_id, command)
        if state is None:
            raise ServiceValidationError(
                f"Command {command!r} cannot be applied to {channel_id}"
            )
        self._hub.async_forward_zone_state(channel_id, state)

    @callback
    def _process_record(self, record: DomainRecord | None) -> None:
        """Process a record replacement from the hub."""
        self._set_record(record)

    def _set_record(self, record: DomainRecord | None) -> None:
        """Project linked channels, then notify entities."""
        self.session.replace_record(record)
        self.async_set_updated_data(record)

    def _update_state(self, channel_id: str, state: ProjectedState) -> None:
        self._states[channel_id] = state
