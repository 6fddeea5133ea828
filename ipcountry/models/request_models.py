from typing import Any

from pydantic import BaseModel, Field


class IPLookupRequest(BaseModel):
    """Request body for an explicit country lookup.

    ``ip`` is left loosely typed so that a missing value and a malformed one can
    be told apart: the handler reports the first as "required" and hands anything
    else to the canonicalizer, which rejects non-string and non-IP values alike.
    """

    ip: Any = Field(
        default=None,
        description="IPv4 or IPv6 address to look up.",
        examples=["8.8.8.8", "2001:4860:4860::8888"],
    )
