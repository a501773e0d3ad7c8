from collections.abc import Sequence

from fastapi.testclient import TestClient

from ipquery.clients.base import BaseIPLookupClient
from ipquery.clients.ipquery_client import IpQueryClient
from ipquery.errors import DecodeError, InvalidInputError, NetworkError, UpstreamServiceError
from ipquery.main import app, get_ipquery_client
from ipquery.models.common import IPInfo, ISPInfo, RiskInfo


class _StubClient(BaseIPLookupClient):
    """Test double returning canned results and recording the addresses it was given."""

    def __init__(self) -> None:
        self.calls: list[object] = []

    async def lookup_one(self, address: str) -> IPInfo:
        self.calls.append(address)
        return IPInfo(
            ip=address,
            isp=ISPInfo(asn="AS15169", org="Google LLC", isp="Google LLC"),
            risk=RiskInfo(is_vpn=False, risk_score=0),
        )

    async def lookup_many(self, addresses: Sequence[str]) -> list[IPInfo]:
        self.calls.append(list(addresses))
        if not addresses:
            raise InvalidInputError("Bulk lookup requires at least one IP address.")
        return [IPInfo(ip=address) for address in addresses]

    async def lookup_self(self) -> str:
        self.calls.append(None)
        return "203.0.113.7"


class _ErrorRaisingClient(BaseIPLookupClient):
    """Test double that always raises a configured exception."""

    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    async def lookup_one(self, address: str) -> IPInfo:
        raise self._exc

    async def lookup_many(self, addresses: Sequence[str]) -> list[IPInfo]:
        raise self._exc

    async def lookup_self(self) -> str:
        raise self._exc


def _get(path: str, client: BaseIPLookupClient) -> tuple[int, object]:
    """Wire `client` into the app and call `path`."""
    app.dependency_overrides[get_ipquery_client] = lambda: client
    test_client = TestClient(app)
    try:
        response = test_client.get(path)
        return response.status_code, response.json()
    finally:
        app.dependency_overrides.clear()


def test_health() -> None:
    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_get_ipquery_client_builds_configured_client() -> None:
    assert isinstance(get_ipquery_client(), IpQueryClient)


def test_ip_lookup_returns_ip_info_with_nulls_for_unknown() -> None:
    stub = _StubClient()
    status_code, body = _get("/v1/ip/lookup?ip=8.8.8.8", stub)

    assert status_code == 200
    assert body["ip"] == "8.8.8.8"
    assert body["isp"]["asn"] == "AS15169"
    assert body["location"] is None
    assert body["risk"]["is_vpn"] is False
    assert body["risk"]["is_tor"] is None
    assert stub.calls == ["8.8.8.8"]


def test_ip_lookup_rejects_invalid_ip() -> None:
    stub = _StubClient()
    status_code, body = _get("/v1/ip/lookup?ip=qwerty", stub)

    assert status_code == 400
    assert body["code"] == "invalid_ip"
    assert stub.calls == []


def test_bulk_lookup_returns_list() -> None:
    stub = _StubClient()
    status_code, body = _get("/v1/ip/bulk?ips=8.8.8.8,1.1.1.1", stub)

    assert status_code == 200
    assert [item["ip"] for item in body] == ["8.8.8.8", "1.1.1.1"]
    assert stub.calls == [["8.8.8.8", "1.1.1.1"]]


def test_bulk_lookup_empty_maps_to_400() -> None:
    status_code, body = _get("/v1/ip/bulk?ips=", _StubClient())

    assert status_code == 400
    assert body["detail"]["code"] == "invalid_input"


def test_bulk_lookup_rejects_invalid_entry() -> None:
    status_code, body = _get("/v1/ip/bulk?ips=8.8.8.8,qwerty", _StubClient())

    assert status_code == 400
    assert body["code"] == "invalid_ip"


def test_self_lookup_returns_ip() -> None:
    status_code, body = _get("/v1/ip/self", _StubClient())

    assert status_code == 200
    assert body == {"ip": "203.0.113.7"}


def test_ip_lookup_maps_upstream_service_error_to_502() -> None:
    status_code, body = _get(
        "/v1/ip/lookup?ip=8.8.8.8",
        _ErrorRaisingClient(UpstreamServiceError("Upstream failure", status_code=500, body="")),
    )

    assert status_code == 502
    assert body["detail"]["code"] == "upstream_error"
    assert "Upstream failure" in body["detail"]["message"]


def test_ip_lookup_maps_decode_error_to_502() -> None:
    status_code, body = _get("/v1/ip/lookup?ip=8.8.8.8", _ErrorRaisingClient(DecodeError("bad body", body="{")))

    assert status_code == 502
    assert body["detail"]["code"] == "decode_error"


def test_bulk_lookup_maps_network_error_to_504() -> None:
    status_code, body = _get("/v1/ip/bulk?ips=8.8.8.8,1.1.1.1", _ErrorRaisingClient(NetworkError("timed out")))

    assert status_code == 504
    assert body["detail"]["code"] == "network_error"


def test_self_lookup_maps_network_error_to_504() -> None:
    status_code, body = _get("/v1/ip/self", _ErrorRaisingClient(NetworkError("connection refused")))

    assert status_code == 504
    assert body["detail"]["code"] == "network_error"
