from __future__ import annotations

import ipaddress
from functools import lru_cache

from fastapi import Request

from copa_litoral.core.config import get_settings

UNKNOWN_CLIENT_KEY = "unknown"


@lru_cache(maxsize=32)
def _parse_networks(
    networks_csv: str,
) -> tuple[ipaddress.IPv4Network | ipaddress.IPv6Network, ...]:
    networks: list[ipaddress.IPv4Network | ipaddress.IPv6Network] = []
    for raw_entry in networks_csv.split(","):
        entry = raw_entry.strip()
        if not entry:
            continue

        try:
            if "/" in entry:
                networks.append(ipaddress.ip_network(entry, strict=False))
            else:
                host = ipaddress.ip_address(entry)
                suffix = 32 if host.version == 4 else 128
                networks.append(ipaddress.ip_network(f"{entry}/{suffix}", strict=False))
        except ValueError:
            continue

    return tuple(networks)


def _parse_ip(value: str | None) -> str | None:
    if value is None:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    try:
        return str(ipaddress.ip_address(candidate))
    except ValueError:
        return None


def is_ip_in_networks(*, client_ip: str | None, networks_csv: str) -> bool:
    if client_ip is None:
        return False

    try:
        parsed_ip = ipaddress.ip_address(client_ip)
    except ValueError:
        return False

    networks = _parse_networks(networks_csv)
    if not networks:
        return False

    return any(parsed_ip in network for network in networks)


def extract_client_ip(
    request: Request,
    *,
    trusted_proxies: str = "",
) -> str | None:
    peer_ip = _parse_ip(request.client.host if request.client is not None else None)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for and is_ip_in_networks(client_ip=peer_ip, networks_csv=trusted_proxies):
        return _parse_ip(forwarded_for.split(",", maxsplit=1)[0])

    return peer_ip


def rate_limit_key(request: Request) -> str:
    client_ip = extract_client_ip(request, trusted_proxies=get_settings().trusted_proxies)
    if client_ip is not None:
        return client_ip
    if request.client is not None and request.client.host:
        # non-IP peers such as the test client's "testclient"
        return request.client.host
    return UNKNOWN_CLIENT_KEY
