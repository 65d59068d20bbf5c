"""Application constants

Central place for names, paths, timings and menu labels so the
rest of the code base does not carry magic strings.
"""


# ==================== Application info ====================
class AppInfo:
    """Basic application information"""

    NAME = "TuyaTray"
    VERSION = "0.1.0"
    DESCRIPTION = "System tray control for Tuya cloud devices"
    TOOLTIP = "Tuya Smart Device Control"


# ==================== File paths ====================
class Paths:
    """File path constants"""

    CONFIG_DIR_NAME = "TuyaTray"
    CONFIG_FILE_NAME = "config.json"
    LOG_DIR_NAME = "logs"
    LOG_FILE_NAME = "app.log"


# ==================== Timing ====================
class Timing:
    """Timer intervals"""

    POLL_INTERVAL_MS = 5000
    NOTIFICATION_TIMEOUT_MS = 4000
    # renew the access token this long before it expires; the SDK itself
    # renews inside a request once less than 60 s remain
    TOKEN_RENEW_MARGIN_MS = 120_000


# ==================== Cloud API ====================
class CloudPaths:
    """Tuya OpenAPI endpoints"""

    USER_DEVICES = "/v1.0/users/{user_id}/devices"
    DEVICE_STATUS = "/v1.0/devices/{device_id}/status"
    DEVICE_COMMANDS = "/v1.0/devices/{device_id}/commands"


# ==================== Menu labels ====================
class MenuLabels:
    """Tray menu texts"""

    OPEN_CONFIGURATION = "Open Configuration"
    QUIT = "Quit"
    NOT_CONFIGURED = "Not configured"
    LOADING = "Loading devices..."
    NO_DEVICES = "No devices found"
    DEVICES_FAILED = "Failed to load devices"
    NO_STATUS = "No status reported"
    STATUS_FAILED = "Status unavailable"
    ON = "On"
    OFF = "Off"
