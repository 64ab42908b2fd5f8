"""Central configuration for the Mission Deck."""

from pathlib import Path

# Base paths
BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = BASE_DIR / "data"
CATALOG_DIR = DATA_DIR / "catalog"
STATE_DIR = DATA_DIR / "state"
UI_ASSETS_DIR = DATA_DIR / "ui_assets"
IMAGES_DIR = DATA_DIR / "images"

# Static reference data and persisted fleet
CATALOG_PATH = CATALOG_DIR / "satellites.json"
FLEET_STORE_PATH = STATE_DIR / "fleet.json"

# Fleet store keys (same names the browser build kept in local storage)
FLEET_KEY = "configuredSatellites"
ACTIVE_NORAD_KEY = "activeSatelliteNoradId"
ACTIVE_DATA_KEY = "activeSatelliteData"

# Catalog vocabulary
ORBIT_TYPES = ["LEO", "POLAR", "SSO", "GEO"]
DOWNLINK_RATES = ["High", "Base"]
DEFAULT_CATEGORY_IMAGE = "/images/EO.gif"

# Used when a catalog entry does not carry its own NORAD id (ISS)
DEFAULT_NORAD_ID = 25544

# Upstream services
N2YO_BASE_URL = "https://api.n2yo.com/rest/v1/satellite"
SWPC_BASE_URL = "https://services.swpc.noaa.gov/products"

# Observer used for position requests
DEFAULT_OBSERVER_LAT = 41.702
DEFAULT_OBSERVER_LNG = -76.014
DEFAULT_OBSERVER_ALT = 0
DEFAULT_POSITION_SECONDS = 2

# Refresh cadence (seconds)
POSITIONS_REFRESH_SECONDS = 20
TELEMETRY_STEP_SECONDS = 1
EVENT_LOG_STEP_SECONDS = 3
COMMAND_TICK_SECONDS = 5

# Buffer sizes
TELEMETRY_WINDOW = 20
EVENT_LOG_SIZE = 8
CONSOLE_MAX_LOGS = 100

# Mock reboot safety code
REBOOT_CONFIRM_CODE = "000000"

# User facing messages
MSG_SELECT_BEFORE_DATES = "Please select an orbit and downlink rate before choosing dates."
MSG_TRACKING_FAILED = "Failed to fetch satellite data. Please try again later."
MSG_SPACE_WEATHER_FAILED = "Failed to fetch space weather data"
