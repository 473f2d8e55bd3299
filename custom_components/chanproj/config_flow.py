"""Config flow for the chanproj integration."""

from __future__ import annotations

from typing import Any

from chanproj_lib import ModuleType
import voluptuous as vol

from homeassistant.config_entries import (
    ConfigEntry,
    ConfigFlow,
    ConfigFlowResult,
    OptionsFlow,
)
from homeassistant.const import CONF_NAME
from homeassistant.core import callback
from homeassistant.helpers import config_validation as cv
from homeassistant.helpers.selector import selector

from .const import (
    CONF_KIND,
    CONF_LOCAL_URL,
    CONF_MODULE_TYPE,
    CONF_VPN_URL,
    CONF_ZONE_COUNT,
    DEFAULT_ZONE_COUNT,
    DOMAIN,
    KIND_ALARM,
    KINDS,
    MAX_ZONE_COUNT,
)
from .entity import entry_value

MODULE_TYPES = [module_type.value for module_type in ModuleType if module_type is not ModuleType.UNKNOWN]

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_NAME): cv.string,
        vol.Required(CONF_KIND, default=KIND_ALARM): selector(
            {"select": {"options": list(KINDS)}}
        ),
    }
)


def _alarm_schema(zone_count: int) -> vol.Schema:
    return vol.Schema(
        {
            vol.Required(CONF_ZONE_COUNT, default=zone_count): vol.All(
                vol.Coerce(int), vol.Range(min=0, max=MAX_ZONE_COUNT)
            ),
        }
    )


def _camera_schema(
    module_type: str | None, local_url: str | None, vpn_url: str | None
) -> vol.Schema:
    module_key = (
        vol.Required(CONF_MODULE_TYPE, default=module_type)
        if module_type
        else vol.Required(CONF_MODULE_TYPE)
    )
    return vol.Schema(
        {
            module_key: selector({"select": {"options": MODULE_TYPES}}),
            vol.Optional(
                CONF_LOCAL_URL, description={"suggested_value": local_url}
            ): cv.url,
            vol.Optional(
                CONF_VPN_URL, description={"suggested_value": vpn_url}
            ): cv.url,
        }
    )


class ChanProjConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for chanproj."""

    VERSION = 1
    MINOR_VERSION = 1

    def __init__(self) -> None:
        """Initialize the flow."""
        self._data: dict[str, Any] = {}

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> OptionsFlow:
        """Return the options flow handler."""
        return ChanProjOptionsFlow()

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Choose a name and what kind of device is bound."""
        if user_input is not None:
            self._async_abort_entries_match({CONF_NAME: user_input[CONF_NAME]})
            self._data = dict(user_input)
            if user_input[CONF_KIND] == KIND_ALARM:
                return await self.async_step_alarm()
            return await self.async_step_camera()

        return self.async_show_form(step_id="user", data_schema=STEP_USER_DATA_SCHEMA)

    async def async_step_alarm(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Configure the number of alarm zones."""
        if user_input is not None:
            return self._async_create(user_input)
        return self.async_show_form(
            step_id="alarm", data_schema=_alarm_schema(DEFAULT_ZONE_COUNT)
        )

    async def async_step_camera(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Configure the camera module type and video base URLs."""
        if user_input is not None:
            return self._async_create(user_input)
        return self.async_show_form(
            step_id="camera", data_schema=_camera_schema(None, None, None)
        )

    def _async_create(self, user_input: dict[str, Any]) -> ConfigFlowResult:
        data = {**self._data, **user_input}
        return self.async_create_entry(title=data[CONF_NAME], data=data)


class ChanProjOptionsFlow(OptionsFlow):
    """Edit zone count or camera settings; saving reloads the entry."""

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Manage the options."""
        entry = self.config_entry
        is_alarm = entry.data.get(CONF_KIND) == KIND_ALARM
        if user_input is not None:
            options = {**entry.options, **user_input}
            if not is_alarm:
                # A cleared optional URL must override the one in entry data.
                for key in (CONF_LOCAL_URL, CONF_VPN_URL):
                    if key not in user_input:
                        options[key] = None
            return self.async_create_entry(data=options)

        if is_alarm:
            schema = _alarm_schema(
                int(entry_value(entry, CONF_ZONE_COUNT, DEFAULT_ZONE_COUNT))
            )
        else:
            schema = _camera_schema(
                entry_value(entry, CONF_MODULE_TYPE),
                entry_value(entry, CONF_LOCAL_URL),
                entry_value(entry, CONF_VPN_URL),
            )
        return self.async_show_form(step_id="init", data_schema=schema)
