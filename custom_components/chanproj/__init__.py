"""Set up the chanproj integration."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_VENDOR_PATH = Path(__file__).resolve().parent / "vendor" / "chanproj"
if _VENDOR_PATH.exists() and str(_VENDOR_PATH) not in sys.path:
    sys.path.insert(0, str(_VENDOR_PATH))

from chanproj_lib import (
    MalformedChannelId,
    ModuleType,
    ProjectionContext,
    channel_index,
    is_group_channel,
    reconcile_zones,
)
from chanproj_lib.const import CHANNEL_ALARM_ZONE_PREFIX

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_NAME, Platform
from homeassistant.core import HomeAssistant
from homeassistant.helpers import entity_registry as er

from .const import (
    CONF_KIND,
    CONF_LOCAL_URL,
    CONF_MODULE_TYPE,
    CONF_VPN_URL,
    CONF_ZONE_COUNT,
    DATA_COORDINATOR,
    DATA_HUB,
    DEFAULT_ZONE_COUNT,
    DOMAIN,
    KIND_ALARM,
)
from .coordinator import ChanProjDataUpdateCoordinator
from .entity import channel_id_from_unique_id, entry_value
from .hub import ProjectorHub

_LOGGER = logging.getLogger(__name__)

PLATFORMS: list[Platform] = [
    Platform.BINARY_SENSOR,
    Platform.IMAGE,
    Platform.SENSOR,
]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up chanproj from a config entry."""
    kind = entry.data[CONF_KIND]
    context = _context_from_entry(entry)
    hub = ProjectorHub(hass, entry.entry_id, kind, context, entry.data.get(CONF_NAME))

    if kind == KIND_ALARM:
        zone_count = int(entry_value(entry, CONF_ZONE_COUNT, DEFAULT_ZONE_COUNT))
        _LOGGER.debug(
            "Initializing alarm controller '%s' with %s alarm zones",
            entry.title,
            zone_count,
        )
        _async_reconcile_zone_entities(hass, entry, zone_count)

    coordinator = ChanProjDataUpdateCoordinator(hass, hub, entry)
    await coordinator.async_start()
    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = {
        DATA_HUB: hub,
        DATA_COORDINATOR: coordinator,
    }
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    entry.async_on_unload(entry.add_update_listener(_async_update_listener))
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a chanproj config entry."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    data = hass.data.get(DOMAIN, {}).pop(entry.entry_id, None)
    if data is not None:
        coordinator: ChanProjDataUpdateCoordinator | None = data.get(DATA_COORDINATOR)
        if coordinator is not None:
            await coordinator.async_stop()
    return unload_ok


async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry when its options change."""
    await hass.config_entries.async_reload(entry.entry_id)


def _context_from_entry(entry: ConfigEntry) -> ProjectionContext:
    module_type = entry_value(entry, CONF_MODULE_TYPE)
    return ProjectionContext(
        local_url=entry_value(entry, CONF_LOCAL_URL),
        vpn_url=entry_value(entry, CONF_VPN_URL),
        module_type=ModuleType(module_type) if module_type else None,
    )


def _async_reconcile_zone_entities(
    hass: HomeAssistant, entry: ConfigEntry, zone_count: int
) -> None:
    """Remove zone entities beyond the configured zone count."""
    registry = er.async_get(hass)
    entity_ids: dict[str, str] = {}
    for entity in er.async_entries_for_config_entry(registry, entry.entry_id):
        channel_id = channel_id_from_unique_id(entry, entity.unique_id)
        if channel_id is None or not is_group_channel(
            channel_id, CHANNEL_ALARM_ZONE_PREFIX
        ):
            continue
        try:
            channel_index(channel_id, CHANNEL_ALARM_ZONE_PREFIX)
        except MalformedChannelId as err:
            _LOGGER.warning("Skipping zone entity %s: %s", entity.entity_id, err.message)
            continue
        entity_ids[channel_id] = entity.entity_id

    plan = reconcile_zones(entity_ids, zone_count, CHANNEL_ALARM_ZONE_PREFIX)
    for channel_id in plan.remove:
        _LOGGER.debug("Removing alarm zone %s", channel_id)
        registry.async_remove(entity_ids[channel_id])
    if plan.create:
        _LOGGER.debug("Creating alarm zones %s", ", ".join(plan.create))
