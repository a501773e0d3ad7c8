from pydantic import BaseModel, ConfigDict


class ISPInfo(BaseModel):
    """Network operator details for an IP address."""

    model_config = ConfigDict(frozen=True)

    asn: str | None = None
    org: str | None = None
    isp: str | None = None


class LocationInfo(BaseModel):
    """Geographical location of an IP address as reported by ipquery.io."""

    model_config = ConfigDict(frozen=True)

    country: str | None = None
    country_code: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    timezone: str | None = None
    localtime: str | None = None


class RiskInfo(BaseModel):
    """Provider-computed risk flags. Values are passed through verbatim."""

    model_config = ConfigDict(frozen=True)

    is_mobile: bool | None = None
    is_vpn: bool | None = None
    is_tor: bool | None = None
    is_proxy: bool | None = None
    is_datacenter: bool | None = None
    risk_score: int | None = None


class IPInfo(BaseModel):
    """Full lookup result for a single IP address.

    Only `ip` is guaranteed. Every nested section and every field inside it may be
    missing from the provider response, in which case it stays None: a missing
    `risk.is_vpn` means "unknown", not "not a VPN".
    """

    model_config = ConfigDict(frozen=True)

    ip: str
    isp: ISPInfo | None = None
    location: LocationInfo | None = None
    risk: RiskInfo | None = None
