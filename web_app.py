#!/usr/bin/env python3
"""DHT22 Station — Web mode.

Polls the DHT22 in a background thread and serves the latest reading
as JSON for dashboards and scripts on the local network.

Usage:
    python3 web_app.py              # Normal mode
    python3 web_app.py --demo       # Simulated sensor data
    python3 web_app.py --port 5000  # Custom port

Routes:
    GET /api/reading   latest record ({"source": "none"} until data exists)
    GET /api/status    read statistics for the sensor
"""

__version__ = "1.0.0"

import argparse
import logging

from flask import Flask, jsonify

from config import DEFAULT_CONFIG_PATH, load_config
from sensors.dht22 import DHT22Sensor
from sources.sensor_source import SensorSource

logger = logging.getLogger(__name__)


def create_app(source: SensorSource) -> Flask:
    """Create the Flask application serving ``source``."""
    app = Flask(__name__)

    # ─── Routes: Sensor snapshot ───

    @app.route("/api/reading")
    def reading():
        """Return the latest record, or the no-data record before the first poll."""
        latest = source.latest()
        if latest is None:
            return jsonify({"source": "none"})
        return jsonify(latest)

    # ─── Routes: Status ───

    @app.route("/api/status")
    def status():
        return jsonify({**source.status(), "version": __version__})

    return app


def build_source(cfg, demo=False) -> SensorSource:
    """Create the DHT22 sensor and its polling source from the "dht22" config."""
    sensor = DHT22Sensor(-1 if demo else cfg["pin"], cfg)
    return SensorSource("dht22", sensor, {**cfg, "demo": demo})


def main():
    parser = argparse.ArgumentParser(description="DHT22 Station Web")
    parser.add_argument("--demo", action="store_true", help="Use simulated sensor data")
    parser.add_argument("--port", type=int, default=None, help="Web server port")
    parser.add_argument("--host", default=None, help="Bind address")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Config file path")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    # Setup logging
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s  %(levelname)-7s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )

    logger.info("DHT22 Station Web v%s starting", __version__)

    config = load_config(args.config)
    host = args.host or config["web"]["host"]
    port = args.port or config["web"]["port"]

    source = build_source(config["dht22"], demo=args.demo)
    source.start()

    app = create_app(source)
    logger.info("Web API at http://%s:%d", host, port)

    try:
        app.run(host=host, port=port, threaded=True, debug=False)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    finally:
        source.close()
        logger.info("Shutdown complete")


if __name__ == "__main__":
    main()
