import json
from collections.abc import Sequence
from http import HTTPStatus
from ipaddress import ip_address
from logging import getLogger
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from ipquery.clients.base import BaseIPLookupClient
from ipquery.errors import DecodeError, InvalidInputError, NetworkError, UpstreamServiceError
from ipquery.models.common import IPInfo

logger = getLogger(__name__)

DEFAULT_BASE_URL = "https://api.ipquery.io"

_IP_INFO_LIST_ADAPTER = TypeAdapter(list[IPInfo])


class IpQueryClient(BaseIPLookupClient):
    """Client for the https://ipquery.io IP lookup API.

    Responses are decoded strictly into IPInfo: a field with an unexpected JSON type
    is a DecodeError rather than a coerced value, and fields the provider omits stay
    None. Every call is a single GET with no retries.

    By default each call opens and closes its own httpx.AsyncClient. Pass `http_client`
    to reuse a caller-owned client (connection pooling, proxies, custom transports);
    it is never closed by this class.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._http_client = http_client

    async def lookup_one(self, address: str) -> IPInfo:
        """Look up a single IP address.

        The address is forwarded as-is; the provider decides what to do with malformed input.
        """
        url = f"{self._base_url}/{address}"
        response = await self._request(url, params={"format": "json"})
        return self._decode_ip_info(response.text)

    async def lookup_many(self, addresses: Sequence[str]) -> list[IPInfo]:
        """Look up several IP addresses with a single bulk request.

        Results are returned in the order the provider lists them, which is expected
        to follow the input order but is not checked here. The whole call fails if
        any element cannot be decoded.
        """
        if isinstance(addresses, str):
            raise InvalidInputError("Bulk lookup expects a sequence of IP addresses, not a single string.")

        addresses = list(addresses)
        if not addresses:
            raise InvalidInputError("Bulk lookup requires at least one IP address.")

        url = f"{self._base_url}/{','.join(addresses)}"
        response = await self._request(url, params={"format": "json"})

        # A single address yields a plain object instead of an array.
        if len(addresses) == 1:
            return [self._decode_ip_info(response.text)]

        return self._decode_ip_info_list(response.text)

    async def lookup_self(self) -> str:
        """Return the public IP address ipquery.io sees for this machine."""
        response = await self._request(f"{self._base_url}/")
        return self._parse_own_ip(response.text)

    async def _request(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """Perform the GET request and reject non-2xx responses.

        Transport failures of any kind (DNS, connect, TLS, timeouts) surface as NetworkError
        with the original httpx exception chained. An address that cannot be placed in a
        URL at all (e.g. a stray newline or NUL) surfaces as InvalidInputError.
        """
        logger.debug(f"Requesting ipquery.io url={url} params={params}")
        try:
            if self._http_client is not None:
                response = await self._http_client.get(url, params=params)
            else:
                async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                    response = await client.get(url, params=params)
        except httpx.InvalidURL as exc:
            logger.warning(f"Could not build ipquery.io request url={url!r} error={repr(exc)}")
            raise InvalidInputError(f"Cannot build a request URL for the given address: {exc}") from exc
        except httpx.RequestError as exc:
            logger.warning(f"Request to ipquery.io failed url={url} error={repr(exc)}")
            raise NetworkError(f"Request to ipquery.io failed: {repr(exc)}") from exc

        self._handle_http_errors(response)
        return response

    def _handle_http_errors(self, response: httpx.Response) -> None:
        """Map non-2xx status codes to UpstreamServiceError."""
        status_code = response.status_code

        if HTTPStatus.OK <= status_code < HTTPStatus.MULTIPLE_CHOICES:
            return

        logger.warning(f"ipquery.io returned HTTP {status_code}")

        if status_code == HTTPStatus.TOO_MANY_REQUESTS:
            raise UpstreamServiceError(
                "ipquery.io rate limit or quota exceeded (HTTP 429).",
                status_code=status_code,
                body=response.text,
            )

        raise UpstreamServiceError(
            f"ipquery.io returned HTTP {status_code}: {response.text}",
            status_code=status_code,
            body=response.text,
        )

    @staticmethod
    def _decode_ip_info(body: str) -> IPInfo:
        try:
            return IPInfo.model_validate_json(body, strict=True)
        except ValidationError as exc:
            logger.warning(f"Failed to decode ipquery.io response errors={exc.errors()}")
            raise DecodeError(f"Failed to decode ipquery.io response: {exc}", body=body) from exc

    @staticmethod
    def _decode_ip_info_list(body: str) -> list[IPInfo]:
        try:
            return _IP_INFO_LIST_ADAPTER.validate_json(body, strict=True)
        except ValidationError as exc:
            logger.warning(f"Failed to decode ipquery.io bulk response errors={exc.errors()}")
            raise DecodeError(f"Failed to decode ipquery.io bulk response: {exc}", body=body) from exc

    @staticmethod
    def _parse_own_ip(body: str) -> str:
        """Extract the caller's IP from the self-lookup body.

        ipquery.io answers with the bare address as plain text. A JSON object with an
        `ip` field is accepted as well, so a JSON-formatted answer does not break callers.
        """
        text = body.strip()

        if text.startswith("{"):
            try:
                data = json.loads(text)
            except ValueError as exc:
                raise DecodeError(f"Failed to decode ipquery.io response as JSON: {exc}", body=body) from exc
            value = data.get("ip")
            if not isinstance(value, str):
                raise DecodeError("ipquery.io JSON response has no string `ip` field.", body=body)
            text = value.strip()

        try:
            ip_address(text)
        except ValueError as exc:
            logger.warning(f"ipquery.io self lookup returned a non-IP body={body!r}")
            raise DecodeError(f"ipquery.io did not return an IP address: {body!r}", body=body) from exc

        return text
