"""GeoIP service — read-only MaxMind lookups for city and ISP data."""

import os

import maxminddb

GEOIP_DB_PATH = os.environ.get("GEOIP_DB_PATH", "./GeoLite2-City.mmdb")
GEOIP_ISP_DB_PATH = os.environ.get("GEOIP_ISP_DB_PATH", "")
GEOIP_LOCALES = tuple(
    loc.strip() for loc in os.environ.get("GEOIP_LOCALES", "zh-CN,en").split(",") if loc.strip()
)

# Raised by Reader.get() for unparseable addresses, IPv6 against an IPv4-only
# database, or a corrupt search tree
LOOKUP_ERRORS = (ValueError, maxminddb.InvalidDatabaseError)


def localized_name(names, locales=GEOIP_LOCALES):
    """First non-empty name in locale preference order, else ''."""
    names = names or {}
    for locale in locales:
        name = names.get(locale)
        if name:
            return name
    return ""


def empty_city():
    return {
        "country": "",
        "region": "",
        "city": "",
        "latitude": 0.0,
        "longitude": 0.0,
    }


class GeoLocator:
    """City reader plus an optional ISP reader, opened once and shared read-only."""

    def __init__(self, city_reader, isp_reader=None, locales=GEOIP_LOCALES):
        self._city_reader = city_reader
        self._isp_reader = isp_reader
        self._locales = tuple(locales)

    @classmethod
    def open(cls, city_path=GEOIP_DB_PATH, isp_path=GEOIP_ISP_DB_PATH, locales=GEOIP_LOCALES):
        """Open the databases. Errors opening the city database propagate."""
        city_reader = maxminddb.open_database(city_path)
        print(f"[geoip] Loaded database from {city_path}")

        isp_reader = None
        if isp_path:
            try:
                isp_reader = maxminddb.open_database(isp_path)
                print(f"[geoip] Loaded ISP database from {isp_path}")
            except (OSError, ValueError, maxminddb.InvalidDatabaseError) as e:
                print(f"[geoip] ISP database unavailable ({isp_path}): {e}")

        return cls(city_reader, isp_reader, locales)

    @property
    def has_isp(self):
        return self._isp_reader is not None

    def city(self, ip):
        """Country, first subdivision, city and coordinates for an IP."""
        result = empty_city()
        try:
            record = self._city_reader.get(ip)
        except LOOKUP_ERRORS:
            return result
        if not record:
            return result

        result["country"] = localized_name(record.get("country", {}).get("names"), self._locales)

        subdivisions = record.get("subdivisions") or []
        if subdivisions:
            result["region"] = localized_name(subdivisions[0].get("names"), self._locales)

        result["city"] = localized_name(record.get("city", {}).get("names"), self._locales)

        loc = record.get("location", {})
        result["latitude"] = loc.get("latitude") or 0.0
        result["longitude"] = loc.get("longitude") or 0.0
        return result

    def isp(self, ip):
        """ISP name for an IP, '' when unknown for any reason."""
        if self._isp_reader is None:
            return ""
        try:
            record = self._isp_reader.get(ip)
        except LOOKUP_ERRORS:
            return ""
        if not record:
            return ""
        return record.get("isp") or ""

    def close(self):
        self._city_reader.close()
        if self._isp_reader is not None:
            self._isp_reader.close()
