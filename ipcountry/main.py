from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Body, Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from ipcountry.clients.base import BaseCountryLookupClient
from ipcountry.clients.maxmind_client import load_country_client
from ipcountry.config import settings
from ipcountry.errors import CountryLookupError, InvalidIpError, IpNotFoundError
from ipcountry.exception_handlers import (
    http_exception_handler,
    request_validation_exception_handler,
    unhandled_exception_handler,
)
from ipcountry.logger import logger
from ipcountry.models.request_models import IPLookupRequest
from ipcountry.models.response_models import (
    COUNTRY_NOT_FOUND,
    INITIALIZATION_FAILED,
    INVALID_CLIENT_IP,
    INVALID_IP_FORMAT,
    IP_REQUIRED,
    LOOKUP_FAILED,
    ClientCountryResponse,
    CountryResponse,
    HealthResponse,
    client_country_response,
    client_not_found_detail,
    error_detail,
    local_network_response,
)
from ipcountry.network import canonicalize_ip, extract_client_ip, is_private_ip


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the geolocation database before serving and close it on shutdown.

    A missing or corrupt database raises GeoDatabaseError here, which aborts
    uvicorn's startup; the service never runs without a database.
    """
    app.state.country_client = load_country_client(settings.geoip_db_path)
    logger.info("Started IP Country Lookup Service")
    try:
        yield
    finally:
        app.state.country_client.close()
        app.state.country_client = None


app = FastAPI(
    title="IP Country Lookup Service",
    version="1.0.0",
    description="Resolves IP addresses to countries using an offline MaxMind database.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


def get_country_client(request: Request) -> BaseCountryLookupClient:
    """Dependency returning the database client opened at startup."""
    client = getattr(request.app.state, "country_client", None)
    if client is None:
        logger.error(f"Lookup requested before the database was loaded path={request.url.path}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail(INITIALIZATION_FAILED),
        )
    return client


@app.get(
    "/",
    tags=["health"],
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Service status",
)
async def root() -> HealthResponse:
    """Basic liveness endpoint."""
    return HealthResponse(status="ok", message="IP Info API is running")


@app.post(
    "/api/ip",
    response_model=CountryResponse,
    status_code=status.HTTP_200_OK,
    tags=["ip"],
    summary="Look up the country for a supplied IP address.",
)
async def lookup_ip_country(
    request: Request,
    country_client: Annotated[BaseCountryLookupClient, Depends(get_country_client)],
    body: Annotated[IPLookupRequest | None, Body()] = None,
) -> CountryResponse:
    """Resolve the IP in the request body.

    Private addresses are looked up like any other; the caller chose the address.
    """
    raw_ip = body.ip if body is not None else None
    if raw_ip is None or raw_ip == "":
        logger.info(f"Missing IP in lookup request path={request.url.path} method={request.method}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_detail(IP_REQUIRED))

    try:
        ip = canonicalize_ip(raw_ip)
    except InvalidIpError as exc:
        logger.info(f"Invalid IP in lookup request path={request.url.path} method={request.method} error={exc}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_detail(INVALID_IP_FORMAT)) from exc

    logger.info(f"Performing explicit IP lookup path={request.url.path} method={request.method} ip={ip}")
    try:
        data = country_client.lookup_country(ip)
    except IpNotFoundError as exc:
        logger.info(f"No country found path={request.url.path} method={request.method} ip={ip}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error_detail(COUNTRY_NOT_FOUND)) from exc
    except CountryLookupError as exc:
        logger.exception(
            f"Error processing IP path={request.url.path} method={request.method} ip={ip} error={exc}"
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail(LOOKUP_FAILED),
        ) from exc

    return CountryResponse(country=data.country_name)


@app.get(
    "/api/ip",
    response_model=ClientCountryResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    tags=["ip"],
    summary="Look up the country of the calling client.",
)
async def lookup_client_country(
    request: Request,
    country_client: Annotated[BaseCountryLookupClient, Depends(get_country_client)],
) -> ClientCountryResponse:
    """Detect the caller's address and resolve it.

    - The first ``X-Forwarded-For`` entry is used when present, otherwise the peer address.
    - Private and loopback addresses are answered with "Local Network" without a lookup.
    """
    peer_address = request.client.host if request.client else None
    candidate = extract_client_ip(
        request.headers.get("x-forwarded-for"),
        peer_address,
        trust_proxy=settings.trust_proxy,
    )
    logger.info(f"Client IP detected: {candidate.strip()} peer={peer_address}")

    try:
        ip = canonicalize_ip(candidate)
    except InvalidIpError as exc:
        logger.info(f"Invalid client IP path={request.url.path} method={request.method} error={exc}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_detail(INVALID_CLIENT_IP)) from exc

    if is_private_ip(ip):
        logger.info(f"Private/local IP detected: {ip}")
        return local_network_response(ip)

    try:
        data = country_client.lookup_country(ip)
    except IpNotFoundError as exc:
        logger.info(f"No country found path={request.url.path} method={request.method} ip={ip}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=client_not_found_detail(ip)) from exc
    except CountryLookupError as exc:
        logger.exception(
            f"Error processing IP path={request.url.path} method={request.method} ip={ip} error={exc}"
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail(LOOKUP_FAILED, detected_ip=ip),
        ) from exc

    return client_country_response(data.country_name, ip)
