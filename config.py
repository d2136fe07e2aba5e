"""DHT22 Station - Configuration

Pin numbers use BCM (Broadcom) numbering scheme.
Physical pin numbers noted in comments for cross-reference.

  BCM 16 = Physical Pin 36  (DHT22 data, wiringPi 27)

The DHT22 data line needs a pull-up to 3.3V. Most breakout modules carry
one on board; the input line also enables the internal pull-up.

Values here are defaults. A YAML file (station.yaml) can override the
"dht22" and "web" sections, and CLI flags override both.
"""

import copy
import logging
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# DHT22 protocol timing
# ---------------------------------------------------------------------------
WAKE_HOLD_MS = 10           # line held HIGH before the start signal
TRIGGER_LOW_MS = 18         # start signal, DHT22 needs >= 1 ms
RELEASE_HIGH_US = 40        # host releases line before listening
TICK_US = 1                 # one polling step
STATE_TIMEOUT_TICKS = 255   # longest countable run; also "line went quiet"
BIT_THRESHOLD_TICKS = 16    # HIGH run longer than this is a '1'
MAX_TRANSITIONS = 85        # 2 ack + 2 per bit * 40 + 1 trailing
PREAMBLE_TRANSITIONS = 2    # sensor "ready" acknowledgement
FRAME_BITS = 40             # 5 fields of 8 bits, last one is the checksum

# ---------------------------------------------------------------------------
# Sensor definitions
# ---------------------------------------------------------------------------
SENSORS = {
    "dht22": {
        "pin": 16,              # BCM 16 = Physical Pin 36
        "interval_ms": 10000,   # DHT22 needs >= 2s between reads
        "count": 5000,          # reads per run of the console loop
    },
}

WEB = {
    "host": "0.0.0.0",
    "port": 5000,
}

DEFAULT_CONFIG_PATH = "station.yaml"


def load_config(path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load station config, overlaying a YAML file on the built-in defaults.

    Returns a dict with "dht22" and "web" sections. Unknown top-level keys
    in the file are ignored. A missing file is not an error.
    """
    merged = {
        "dht22": copy.deepcopy(SENSORS["dht22"]),
        "web": dict(WEB),
    }

    try:
        with open(path) as f:
            loaded = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file not found: %s (using defaults)", path)
        return merged

    if not isinstance(loaded, dict):
        logger.warning("Config file %s is not a mapping, ignoring it", path)
        return merged

    for section in ("dht22", "web"):
        overrides = loaded.get(section) or {}
        if not isinstance(overrides, dict):
            logger.warning("Config section '%s' is not a mapping, ignoring it", section)
            continue
        merged[section].update(overrides)

    return merged
