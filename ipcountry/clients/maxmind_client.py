from pathlib import Path
from typing import Any

import geoip2.database
import geoip2.errors
from maxminddb import InvalidDatabaseError

from ipcountry.clients.base import BaseCountryLookupClient
from ipcountry.errors import CountryLookupError, GeoDatabaseError, IpNotFoundError
from ipcountry.logger import logger
from ipcountry.models.common import CountryData

ENGLISH_LOCALE = "en"


class MaxMindCountryClient(BaseCountryLookupClient):
    """Country lookups against a local MaxMind DB (GeoLite2/GeoIP2 Country or City).

    The reader is opened once and only ever read from, so a single instance is
    shared by all requests without locking.
    """

    def __init__(self, reader: geoip2.database.Reader) -> None:
        self._reader = reader
        self.database_type = reader.metadata().database_type
        # City databases carry the same country record; query them through the city model.
        if "City" in self.database_type:
            self._query = reader.city
        elif "Country" in self.database_type:
            self._query = reader.country
        else:
            raise GeoDatabaseError(f"Unsupported database type {self.database_type!r}: no country data")

    def lookup_country(self, ip: str) -> CountryData:
        """Resolve ``ip`` to its English country name.

        A missing record and a record without an English country name are both
        reported as IpNotFoundError. Anything else the reader raises is wrapped in
        CountryLookupError.
        """
        try:
            record = self._query(ip)
        except geoip2.errors.AddressNotFoundError as exc:
            raise IpNotFoundError(f"No country found for {ip}") from exc
        except Exception as exc:
            raise CountryLookupError(f"Database query failed for {ip}: {exc!r}") from exc

        return self._normalize_record(ip, record)

    def close(self) -> None:
        self._reader.close()

    @staticmethod
    def _normalize_record(ip: str, record: Any) -> CountryData:
        country = getattr(record, "country", None)
        names = getattr(country, "names", None) or {}
        country_name = names.get(ENGLISH_LOCALE)
        if not country_name:
            raise IpNotFoundError(f"No English country name recorded for {ip}")

        return CountryData(
            ip=ip,
            country_name=country_name,
            iso_code=getattr(country, "iso_code", None),
        )


def load_country_client(db_path: Path) -> MaxMindCountryClient:
    """Open the database at ``db_path``; any failure is a GeoDatabaseError."""
    if not db_path.is_file():
        raise GeoDatabaseError(f"MaxMind database file not found at: {db_path}")

    try:
        reader = geoip2.database.Reader(str(db_path))
    except (OSError, ValueError, InvalidDatabaseError) as exc:
        raise GeoDatabaseError(f"Failed to load MaxMind database {db_path}: {exc!r}") from exc

    try:
        client = MaxMindCountryClient(reader)
    except GeoDatabaseError:
        reader.close()
        raise

    logger.info(f"MaxMind database loaded path={db_path} database_type={client.database_type}")
    return client
