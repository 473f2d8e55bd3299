"""Constants for chanproj."""

DOMAIN = "chanproj"
MANUFACTURER = "Channel Projector"

CONF_KIND = "kind"
CONF_ZONE_COUNT = "zone_count"
CONF_MODULE_TYPE = "module_type"
CONF_LOCAL_URL = "local_url"
CONF_VPN_URL = "vpn_url"
CONF_ZONE_TYPES = "zone_types"

KIND_ALARM = "alarm"
KIND_CAMERA = "camera"
KINDS = (KIND_ALARM, KIND_CAMERA)

DEFAULT_ZONE_COUNT = 1
MAX_ZONE_COUNT = 128

DATA_HUB = "hub"
DATA_COORDINATOR = "coordinator"

SERVICE_SET_ZONE_STATE = "set_zone_state"
SERVICE_SEND_COMMAND = "send_command"
ATTR_CHANNEL = "channel"
ATTR_STATE = "state"
ATTR_COMMAND = "command"
ATTR_ZONE = "zone"

EVENT_ZONE_COMMAND = f"{DOMAIN}_zone_command"
EVENT_ALARM_COMMAND = f"{DOMAIN}_alarm_command"
