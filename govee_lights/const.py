"""Constants for the Govee Lights client."""

DEFAULT_BASE_URL = "https://developer-api.govee.com/v1"
DEVICES_PATH = "/devices"
DEVICE_CONTROL_PATH = "/devices/control"
DEVICE_STATE_PATH = "/devices/state"

API_KEY_ENV = "GOVEE_API_KEY"
API_KEY_HEADER = "Govee-API-Key"
DEFAULT_TIMEOUT = 10.0

COMMAND_TURN = "turn"
COMMAND_BRIGHTNESS = "brightness"
COMMAND_COLOR_TEMPERATURE = "colorTem"
COMMAND_COLOR = "color"

SUCCESS_CODE = 200
