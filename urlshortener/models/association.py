"""Pydantic models for URL Shortener Service."""

from pydantic import BaseModel, Field, StrictStr


class URLAssociation(BaseModel):
    """A short id paired with the URL it redirects to."""

    uuid: str = Field(..., description="20-character base32hex short id")
    url: str = Field(..., description="Absolute target URL")


class URLRequest(BaseModel):
    """Body of POST / and PUT /{id}."""

    url: StrictStr = ""
