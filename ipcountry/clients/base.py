from abc import ABC, abstractmethod

from ipcountry.models.common import CountryData


class BaseCountryLookupClient(ABC):
    """Abstract base for all IP-to-country lookup clients.

    Concrete implementations (e.g. a local MaxMind database) should map their
    native records into CountryData and signal a missing record with
    IpNotFoundError rather than returning an empty result.
    """

    @abstractmethod
    def lookup_country(self, ip: str) -> CountryData:
        """Look up the country for a canonical IP address."""
        raise NotImplementedError

    def close(self) -> None:
        """Release any resources held by the client."""
