"""Client IP resolver — picks the caller's address from proxy headers or the peer."""

import ipaddress


def _whole(value):
    return value


def _first_forwarded(value):
    return value.split(",")[0].strip()


# Checked in order, first valid address wins
PROXY_HEADERS = (
    ("CF-Connecting-IP", _whole),
    ("True-Client-IP", _whole),
    ("X-Real-IP", _whole),
    ("X-Client-IP", _whole),
    ("Fastly-Client-IP", _whole),
    ("X-Forwarded-For", _first_forwarded),
)


def validate_ip(value):
    """Return the canonical form of an IPv4/IPv6 string, or None.

    IPv4-mapped IPv6 comes back as dotted IPv4; zoned addresses are rejected.
    """
    try:
        addr = ipaddress.ip_address(value.strip())
    except ValueError:
        return None
    if addr.version == 6:
        if addr.scope_id is not None:
            return None
        if addr.ipv4_mapped is not None:
            addr = addr.ipv4_mapped
    return str(addr)


def split_host_port(addr):
    """Strip the port from 'host:port' or '[v6]:port'. None when there is no port."""
    if addr.startswith("["):
        end = addr.find("]:")
        if end == -1:
            return None
        return addr[1:end]
    if addr.count(":") != 1:
        return None
    return addr.partition(":")[0]


def resolve_client_ip(headers, remote_addr):
    """Best-guess client IP for a request. Never raises."""
    for name, extract in PROXY_HEADERS:
        value = headers.get(name, "")
        if not value:
            continue
        ip = validate_ip(extract(value))
        if ip:
            return ip

    remote_addr = remote_addr or ""
    host = split_host_port(remote_addr)
    ip = validate_ip(host if host is not None else remote_addr)
    if ip:
        return ip

    return remote_addr
