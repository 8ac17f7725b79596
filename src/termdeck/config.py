"""termdeck configuration

Settings are grouped by concern:
- Layout: split defaults
- Tabs: titles and placeholder session ids
- IDs: generated identifier shape
- Backend: session backend transport
- Dispatcher: command history
- Web: control surface host/port
- Logging / metrics
"""

import os

# === Layout ===
DEFAULT_SPLIT_SIZES = (50.0, 50.0)  # sizes of a freshly split leaf (percent)
SIZE_TOTAL = 100.0  # sizes of a split always start out summing to this

# === Tabs ===
LOCAL_TAB_TITLE = "Local"
SETTINGS_TAB_TITLE = "Settings"
SETTINGS_SESSION_ID = "settings"  # settings tabs are not backed by a session
DEFAULT_SFTP_PATH = "/"

# === IDs ===
ID_TIMESTAMP_WIDTH = 13  # milliseconds since epoch, zero padded
ID_COUNTER_WIDTH = 6
ID_RANDOM_SUFFIX_LENGTH = 4  # 0 disables the random suffix

# === Backend ===
BACKEND_URL = os.environ.get("TERMDECK_BACKEND_URL", "")  # empty => in-memory backend
BACKEND_TIMEOUT = 10.0  # seconds

# === Dispatcher ===
DISPATCH_HISTORY_MAX_LENGTH = 100  # recent commands kept for debugging

# === Web ===
WEB_HOST = os.environ.get("TERMDECK_WEB_HOST", "127.0.0.1")
WEB_PORT = int(os.environ.get("TERMDECK_WEB_PORT", "8766"))

# === Logging ===
LOG_LEVEL = os.environ.get("TERMDECK_LOG_LEVEL", "INFO")

# === Metrics ===
METRICS_ENABLED = True
