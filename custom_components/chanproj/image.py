"""Event snapshot image for chanproj cameras."""

from __future__ import annotations

from chanproj_lib import RawReference
from chanproj_lib.const import CHANNEL_EVENT_SNAPSHOT

from homeassistant.components.image import ImageEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.entity_platform import AddConfigEntryEntitiesCallback
from homeassistant.util import dt as dt_util

from .const import DATA_COORDINATOR, DATA_HUB, DOMAIN, KIND_CAMERA
from .coordinator import ChanProjDataUpdateCoordinator
from .entity import ChanProjChannelEntity
from .hub import ProjectorHub


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up the event snapshot image from a config entry."""
    data = hass.data[DOMAIN][entry.entry_id]
    hub: ProjectorHub = data[DATA_HUB]
    coordinator: ChanProjDataUpdateCoordinator = data[DATA_COORDINATOR]
    if hub.kind != KIND_CAMERA:
        return
    async_add_entities([ChanProjSnapshotImage(coordinator, hub, entry)])


class ChanProjSnapshotImage(ChanProjChannelEntity, ImageEntity):
    """Snapshot of the last camera event, fetched from its reference URL."""

    _attr_name = "Event snapshot"

    def __init__(
        self,
        coordinator: ChanProjDataUpdateCoordinator,
        hub: ProjectorHub,
        entry: ConfigEntry,
    ) -> None:
        """Initialize the snapshot image."""
        super().__init__(coordinator, hub, entry, CHANNEL_EVENT_SNAPSHOT)
        ImageEntity.__init__(self, coordinator.hass)
        self._snapshot_url: str | None = None

    @property
    def image_url(self) -> str | None:
        """Return the URL of the current snapshot."""
        return self._snapshot_url

    async def async_added_to_hass(self) -> None:
        """Link the channel and pick up the current snapshot."""
        await super().async_added_to_hass()
        self._refresh_snapshot()

    @callback
    def _handle_coordinator_update(self) -> None:
        self._refresh_snapshot()
        super()._handle_coordinator_update()

    def _refresh_snapshot(self) -> None:
        state = self.projected_state
        url = state.url if isinstance(state, RawReference) else None
        if url == self._snapshot_url:
            return
        self._snapshot_url = url
        self._cached_image = None
        self._attr_image_last_updated = dt_util.utcnow()
