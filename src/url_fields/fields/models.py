"""
Output models.

Defines the Pydantic model printed by the 'json' output mode.
"""

from pydantic import BaseModel, Field

from .accessors import URLFields


class URLRecord(BaseModel):
    """Every field of one URL."""

    url: str = Field(..., description="Full normalized URL")
    scheme: str = Field(..., description="Scheme (https when none was given)")
    had_explicit_scheme: bool = Field(
        ..., description="False if the default scheme was prefixed"
    )
    authority: str = Field(..., description="userinfo@host:port")
    username: str = Field("", description="User name ('' if absent)")
    password: str | None = Field(None, description="Password")
    domain: str | None = Field(None, description="Full host, if a usable domain")
    subdomain: str | None = Field(None, description="Labels left of the apex")
    apex: str | None = Field(None, description="Registrable root domain")
    name: str | None = Field(None, description="Apex without its public suffix")
    suffix: str | None = Field(None, description="Last label of the domain")
    public_suffix: str | None = Field(None, description="Public suffix of the domain")
    port: str | None = Field(None, description="Declared or default port")
    path: str = Field(..., description="Path")
    query: str | None = Field(None, description="Query string")
    fragment: str | None = Field(None, description="Fragment")
    keys: list[str] = Field(default_factory=list, description="Query keys")
    values: list[str] = Field(default_factory=list, description="Query values")

    @classmethod
    def from_fields(cls, fields: URLFields) -> "URLRecord":
        """Build a record from a URLFields view."""
        return cls(
            url=fields.url(),
            scheme=fields.scheme(),
            had_explicit_scheme=fields.normalized.had_explicit_scheme,
            authority=fields.authority(),
            username=fields.username(),
            password=fields.password(),
            domain=fields.domain(),
            subdomain=fields.subdomain(),
            apex=fields.apex(),
            name=fields.name(),
            suffix=fields.suffix(),
            public_suffix=fields.public_suffix(),
            port=fields.port(),
            path=fields.path(),
            query=fields.query(),
            fragment=fields.fragment(),
            keys=list(fields.keys()),
            values=list(fields.values()),
        )
