"""ipcheck — Flask application reporting the caller's IP and its location."""

import atexit
import os
import sys

import maxminddb
from flask import Flask

from services.geoip import GEOIP_DB_PATH, GEOIP_ISP_DB_PATH, GeoLocator

LISTEN_HOST = os.environ.get("LISTEN_HOST", "0.0.0.0")
LISTEN_PORT = int(os.environ.get("LISTEN_PORT", "8088"))


def _open_locator():
    """Open the GeoIP databases or stop the process."""
    try:
        return GeoLocator.open(GEOIP_DB_PATH, GEOIP_ISP_DB_PATH)
    except (OSError, ValueError, maxminddb.InvalidDatabaseError) as e:
        print(f"[geoip] Failed to load database {GEOIP_DB_PATH}: {e}")
        sys.exit(1)


def create_app(locator=None):
    app = Flask(__name__)

    if locator is None:
        locator = _open_locator()
        atexit.register(locator.close)
    app.extensions["geoip"] = locator

    from routes.lookup import bp as lookup_bp

    app.register_blueprint(lookup_bp)

    return app


if __name__ == "__main__":
    app = create_app()
    print(f"[app] IP check service running on http://localhost:{LISTEN_PORT}")
    app.run(host=LISTEN_HOST, port=LISTEN_PORT)
