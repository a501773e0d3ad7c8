from ipaddress import ip_address

from pydantic import BaseModel, Field, field_validator


def _validate_ip_literal(value: str) -> str:
    try:
        ip_address(value)
    except ValueError as exc:
        raise ValueError("ip must be a valid IPv4 or IPv6 address") from exc
    return value


class IPLookupRequest(BaseModel):
    """Query parameters for a single IP lookup."""

    ip: str = Field(
        description="IPv4 or IPv6 address to look up.",
        examples=["8.8.8.8", "2001:4860:4860::8888"],
    )

    @field_validator("ip", mode="before")
    @classmethod
    def _validate_ip(cls, value: str) -> str:
        """Strip surrounding whitespace and require a valid IP literal."""
        return _validate_ip_literal(str(value).strip())


class BulkLookupRequest(BaseModel):
    """Query parameters for a bulk lookup.

    `ips` is a comma-separated list. Blank entries are dropped; an empty list is passed
    through so the client can reject it.
    """

    ips: str = Field(
        description="Comma-separated IPv4 or IPv6 addresses to look up in one request.",
        examples=["8.8.8.8,1.1.1.1"],
    )

    @field_validator("ips", mode="before")
    @classmethod
    def _validate_ips(cls, value: str) -> str:
        parts = [part.strip() for part in str(value).split(",")]
        return ",".join(_validate_ip_literal(part) for part in parts if part)

    @property
    def addresses(self) -> list[str]:
        return self.ips.split(",") if self.ips else []
