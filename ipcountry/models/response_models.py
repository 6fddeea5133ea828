from typing import Any

from pydantic import BaseModel, ConfigDict, Field

LOCAL_NETWORK_COUNTRY = "Local Network"
LOCAL_NETWORK_MESSAGE = "This is a private/local IP address and won't be found in the GeoLite database"
NOT_FOUND_TIP = "If testing locally, try sending a specific IP via the POST /api/ip endpoint instead"

IP_REQUIRED = "IP address is required"
INVALID_IP_FORMAT = "Invalid IP address format"
INVALID_CLIENT_IP = "Invalid client IP address"
INVALID_REQUEST_BODY = "Invalid request body"
COUNTRY_NOT_FOUND = "Country not found"
LOOKUP_FAILED = "Internal server error"
INITIALIZATION_FAILED = "Server initialization failed"
UNHANDLED_ERROR = "Internal Server Error"


class HealthResponse(BaseModel):
    """Response model for the root status endpoint."""

    status: str
    message: str


class CountryResponse(BaseModel):
    """Response model for an explicit IP lookup."""

    country: str


class ClientCountryResponse(BaseModel):
    """Response model for a lookup of the caller's own address."""

    model_config = ConfigDict(populate_by_name=True)

    country: str
    detected_ip: str = Field(alias="detectedIp")
    message: str | None = None


class ErrorResponse(BaseModel):
    """Error body shared by every failing endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    detected_ip: str | None = Field(default=None, alias="detectedIp")
    tip: str | None = None


def error_detail(error: str, detected_ip: str | None = None, tip: str | None = None) -> dict[str, Any]:
    """Build the JSON error body; unset fields are left out."""
    return ErrorResponse(error=error, detected_ip=detected_ip, tip=tip).model_dump(by_alias=True, exclude_none=True)


def local_network_response(detected_ip: str) -> ClientCountryResponse:
    return ClientCountryResponse(
        country=LOCAL_NETWORK_COUNTRY,
        message=LOCAL_NETWORK_MESSAGE,
        detected_ip=detected_ip,
    )


def client_country_response(country: str, detected_ip: str) -> ClientCountryResponse:
    return ClientCountryResponse(country=country, detected_ip=detected_ip)


def client_not_found_detail(detected_ip: str) -> dict[str, Any]:
    return error_detail(COUNTRY_NOT_FOUND, detected_ip=detected_ip, tip=NOT_FOUND_TIP)
