"""Lookup routes — "what is my IP" in plain text or JSON."""
from flask import Blueprint, Response, current_app, jsonify, request

from services.client_ip import resolve_client_ip
from services.responder import build_response, plain_body, wants_json

bp = Blueprint("lookup", __name__)


def _client_ip():
    return resolve_client_ip(request.headers, request.remote_addr)


def _json_response(ip):
    return jsonify(build_response(ip, current_app.extensions.get("geoip")))


@bp.route("/")
def ip():
    """Bare IP by default, JSON when asked for via Accept or ?format=json."""
    client_ip = _client_ip()
    if wants_json(request.headers.get("Accept"), request.args.get("format")):
        return _json_response(client_ip)
    return Response(plain_body(client_ip), mimetype="text/plain")


@bp.route("/json")
def ip_json():
    """Always JSON."""
    return _json_response(_client_ip())
