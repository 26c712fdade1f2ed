"""Location responder — builds the plain-text and JSON payloads for an IP."""

from services.client_ip import validate_ip

JSON_MIMETYPE = "application/json"


def build_response(ip, locator):
    """{"ip": ..., "location": {...}} with unknown optional fields left out.

    country/region/city are always present (empty when unknown); isp is only
    present when known; latitude/longitude only when non-zero.
    """
    location = {"country": "", "region": "", "city": ""}

    if validate_ip(ip) and locator is not None:
        city = locator.city(ip)
        location["country"] = city["country"]
        location["region"] = city["region"]
        location["city"] = city["city"]

        isp = locator.isp(ip)
        if isp:
            location["isp"] = isp
        if city["latitude"]:
            location["latitude"] = city["latitude"]
        if city["longitude"]:
            location["longitude"] = city["longitude"]

    return {"ip": ip, "location": location}


def wants_json(accept, format_param):
    return JSON_MIMETYPE in (accept or "") or format_param == "json"


def plain_body(ip):
    return ip + "\n"
