from abc import ABC, abstractmethod
from collections.abc import Sequence

from ipquery.models.common import IPInfo


class BaseIPLookupClient(ABC):
    """Abstract base for IP lookup clients.

    Concrete implementations talk to a geolocation provider and decode its
    responses into IPInfo structures without filling in missing values.
    """

    @abstractmethod
    async def lookup_one(self, address: str) -> IPInfo:
        """Look up information for a single IP address."""
        raise NotImplementedError

    @abstractmethod
    async def lookup_many(self, addresses: Sequence[str]) -> list[IPInfo]:
        """Look up information for several IP addresses in one request."""
        raise NotImplementedError

    @abstractmethod
    async def lookup_self(self) -> str:
        """Return the caller's own public IP address."""
        raise NotImplementedError
