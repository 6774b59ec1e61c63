from __future__ import annotations

from types import SimpleNamespace

from copa_litoral.services.client_ip import (
    UNKNOWN_CLIENT_KEY,
    extract_client_ip,
    is_ip_in_networks,
    rate_limit_key,
)


def test_is_ip_in_networks_supports_exact_ip_and_cidr() -> None:
    networks = "127.0.0.1,10.0.0.0/8"
    assert is_ip_in_networks(client_ip="127.0.0.1", networks_csv=networks) is True
    assert is_ip_in_networks(client_ip="10.12.33.1", networks_csv=networks) is True
    assert is_ip_in_networks(client_ip="192.168.1.5", networks_csv=networks) is False
    assert is_ip_in_networks(client_ip="not-an-ip", networks_csv=networks) is False


def test_extract_client_ip_uses_forwarded_header_only_for_trusted_proxy() -> None:
    request = SimpleNamespace(
        headers={"X-Forwarded-For": "10.1.1.8, 127.0.0.1"},
        client=SimpleNamespace(host="127.0.0.1"),
    )
    assert extract_client_ip(request, trusted_proxies="127.0.0.1/32") == "10.1.1.8"


def test_extract_client_ip_ignores_forwarded_header_for_untrusted_proxy() -> None:
    request = SimpleNamespace(
        headers={"X-Forwarded-For": "10.1.1.8, 127.0.0.1"},
        client=SimpleNamespace(host="198.51.100.10"),
    )
    assert extract_client_ip(request, trusted_proxies="127.0.0.1/32") == "198.51.100.10"


def test_extract_client_ip_supports_ipv6_forwarded_header() -> None:
    request = SimpleNamespace(
        headers={"X-Forwarded-For": "2001:db8::10, 127.0.0.1"},
        client=SimpleNamespace(host="::1"),
    )
    assert extract_client_ip(request, trusted_proxies="::1/128") == "2001:db8::10"


def test_rate_limit_key_falls_back_to_peer_name() -> None:
    assert rate_limit_key(SimpleNamespace(headers={}, client=SimpleNamespace(host="203.0.113.9"))) == "203.0.113.9"
    assert rate_limit_key(SimpleNamespace(headers={}, client=SimpleNamespace(host="testclient"))) == "testclient"
    assert rate_limit_key(SimpleNamespace(headers={}, client=None)) == UNKNOWN_CLIENT_KEY
