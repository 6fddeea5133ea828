from pydantic import BaseModel


class CountryData(BaseModel):
    """Country record resolved for a single IP address.

    This is the internal normalized representation produced by a lookup client
    before it is mapped to an outward-facing response model.
    """

    ip: str
    country_name: str
    iso_code: str | None = None
