class AppError(Exception):
    """Base application error for the IP country lookup service."""


class GeoDatabaseError(AppError):
    """Raised when the geolocation database cannot be opened or is unusable."""


class CountryLookupError(AppError):
    """Raised when a database query fails for reasons other than a missing record."""


class InvalidIpError(CountryLookupError):
    """Raised when the supplied IP address is syntactically invalid."""


class IpNotFoundError(CountryLookupError):
    """Raised when the database has no country for the IP."""
