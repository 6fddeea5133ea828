from types import SimpleNamespace
from typing import Any

import geoip2.errors

from ipcountry.clients.base import BaseCountryLookupClient
from ipcountry.errors import IpNotFoundError
from ipcountry.models.common import CountryData


def make_record(names: dict[str, str] | None, iso_code: str | None = None) -> SimpleNamespace:
    """Minimal stand-in for a geoip2 Country/City model."""
    return SimpleNamespace(country=SimpleNamespace(names=names or {}, iso_code=iso_code))


class MockReader:
    """Minimal mock for geoip2.database.Reader backed by a dict of records."""

    def __init__(self, records: dict[str, Any], database_type: str = "GeoLite2-Country") -> None:
        self._records = records
        self._database_type = database_type
        self.closed = False
        self.queried: list[str] = []

    def metadata(self) -> SimpleNamespace:
        return SimpleNamespace(database_type=self._database_type)

    def _get(self, ip: str) -> Any:
        self.queried.append(ip)
        if ip not in self._records:
            raise geoip2.errors.AddressNotFoundError(f"The address {ip} is not in the database.")
        return self._records[ip]

    def country(self, ip: str) -> Any:
        return self._get(ip)

    def city(self, ip: str) -> Any:
        return self._get(ip)

    def close(self) -> None:
        self.closed = True


class FakeCountryClient(BaseCountryLookupClient):
    """Lookup client test double with a fixed ip -> country mapping."""

    def __init__(self, countries: dict[str, str] | None = None, exc: Exception | None = None) -> None:
        self._countries = countries or {}
        self._exc = exc
        self.calls: list[str] = []
        self.closed = False

    def lookup_country(self, ip: str) -> CountryData:
        self.calls.append(ip)
        if self._exc is not None:
            raise self._exc
        if ip not in self._countries:
            raise IpNotFoundError(f"No country found for {ip}")
        return CountryData(ip=ip, country_name=self._countries[ip])

    def close(self) -> None:
        self.closed = True
