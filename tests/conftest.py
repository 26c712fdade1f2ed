import pytest

from app import create_app
from services.geoip import GeoLocator


class FakeReader:
    """Stands in for maxminddb.Reader: get() by canonical IP string."""

    def __init__(self, records=None):
        self.records = records or {}
        self.closed = False

    def get(self, ip):
        if ip == "boom":
            raise ValueError("not an IP")
        return self.records.get(ip)

    def close(self):
        self.closed = True


CITY_RECORDS = {
    "81.2.69.142": {
        "country": {"names": {"en": "United Kingdom", "zh-CN": "英国"}},
        "subdivisions": [{"names": {"en": "England", "zh-CN": "英格兰"}}],
        "city": {"names": {"en": "London", "zh-CN": "伦敦"}},
        "location": {"latitude": 51.5142, "longitude": -0.0931},
    },
    "2.125.160.216": {
        "country": {"names": {"en": "United Kingdom"}},
        "subdivisions": [{"names": {"en": "West Berkshire"}}],
        "city": {"names": {"en": "Boxford"}},
        "location": {"latitude": 51.75, "longitude": -1.25},
    },
    "89.160.20.112": {
        "country": {"names": {"en": "Sweden"}},
        "location": {"latitude": 0, "longitude": 0},
    },
}

ISP_RECORDS = {
    "81.2.69.142": {"isp": "Andrews & Arnold Ltd"},
}


@pytest.fixture
def city_reader():
    return FakeReader(CITY_RECORDS)


@pytest.fixture
def isp_reader():
    return FakeReader(ISP_RECORDS)


@pytest.fixture
def locator(city_reader):
    return GeoLocator(city_reader, locales=("zh-CN", "en"))


@pytest.fixture
def isp_locator(city_reader, isp_reader):
    return GeoLocator(city_reader, isp_reader, locales=("zh-CN", "en"))


@pytest.fixture
def client(locator):
    return create_app(locator).test_client()


@pytest.fixture
def isp_client(isp_locator):
    return create_app(isp_locator).test_client()
