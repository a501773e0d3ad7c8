from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Request, status
from pydantic import ValidationError

from ipquery import settings
from ipquery.clients.base import BaseIPLookupClient
from ipquery.clients.ipquery_client import IpQueryClient
from ipquery.errors import DecodeError, InvalidInputError, IpQueryError, NetworkError, UpstreamServiceError
from ipquery.exception_handlers import (
    pydantic_validation_exception_handler,
    unhandled_exception_handler,
)
from ipquery.logger import logger
from ipquery.models.common import IPInfo
from ipquery.models.request_models import BulkLookupRequest, IPLookupRequest
from ipquery.models.response_models import HealthResponse, SelfIPResponse

app = FastAPI(
    title="ipquery",
    version="0.1.0",
    description="HTTP front for the ipquery.io IP lookup client.",
)
logger.info("Started ipquery service")

# Exception type -> (HTTP status, error code). Checked in order, first match wins.
ERROR_RESPONSES: list[tuple[type[IpQueryError], int, str]] = [
    (InvalidInputError, status.HTTP_400_BAD_REQUEST, "invalid_input"),
    (UpstreamServiceError, status.HTTP_502_BAD_GATEWAY, "upstream_error"),
    (DecodeError, status.HTTP_502_BAD_GATEWAY, "decode_error"),
    (NetworkError, status.HTTP_504_GATEWAY_TIMEOUT, "network_error"),
]


def get_ipquery_client() -> BaseIPLookupClient:
    """Dependency to provide a client configured from settings."""
    return IpQueryClient(
        base_url=settings.IPQUERY_BASE_URL,
        timeout_seconds=settings.IPQUERY_TIMEOUT_SECONDS,
    )


def _to_http_exception(request: Request, exc: IpQueryError) -> HTTPException:
    """Translate a client error into the HTTPException returned to the caller."""
    for exc_type, status_code, code in ERROR_RESPONSES:
        if isinstance(exc, exc_type):
            break
    else:
        status_code, code = status.HTTP_502_BAD_GATEWAY, "upstream_error"

    log = logger.warning if status_code < status.HTTP_500_INTERNAL_SERVER_ERROR else logger.error
    log(f"Lookup failed path={request.url.path} method={request.method} code={code} error={exc}")
    return HTTPException(status_code=status_code, detail={"code": code, "message": str(exc)})


app.add_exception_handler(ValidationError, pydantic_validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get(
    "/health",
    tags=["health"],
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="ok")


@app.get(
    "/v1/ip/lookup",
    response_model=IPInfo,
    status_code=status.HTTP_200_OK,
    tags=["ip"],
    summary="Look up a single IP address.",
)
async def ip_lookup(
    request: Request,
    query: Annotated[IPLookupRequest, Depends()],
    client: Annotated[BaseIPLookupClient, Depends(get_ipquery_client)],
) -> IPInfo:
    """Look up a single, validated IP address."""
    logger.info(f"Performing IP lookup path={request.url.path} method={request.method} ip={query.ip}")
    try:
        return await client.lookup_one(query.ip)
    except IpQueryError as exc:
        raise _to_http_exception(request, exc) from exc


@app.get(
    "/v1/ip/bulk",
    response_model=list[IPInfo],
    status_code=status.HTTP_200_OK,
    tags=["ip"],
    summary="Look up several IP addresses in one upstream request.",
)
async def ip_bulk_lookup(
    request: Request,
    query: Annotated[BulkLookupRequest, Depends()],
    client: Annotated[BaseIPLookupClient, Depends(get_ipquery_client)],
) -> list[IPInfo]:
    """Results are returned in the order ipquery.io lists them."""
    logger.info(f"Performing bulk IP lookup path={request.url.path} method={request.method} ips={query.addresses}")
    try:
        return await client.lookup_many(query.addresses)
    except IpQueryError as exc:
        raise _to_http_exception(request, exc) from exc


@app.get(
    "/v1/ip/self",
    response_model=SelfIPResponse,
    status_code=status.HTTP_200_OK,
    tags=["ip"],
    summary="Return the public IP address of this service.",
)
async def ip_self(
    request: Request,
    client: Annotated[BaseIPLookupClient, Depends(get_ipquery_client)],
) -> SelfIPResponse:
    """Return the public IP address ipquery.io sees for this service."""
    logger.info(f"Performing self IP lookup path={request.url.path} method={request.method}")
    try:
        ip = await client.lookup_self()
    except IpQueryError as exc:
        raise _to_http_exception(request, exc) from exc
    return SelfIPResponse(ip=ip)
