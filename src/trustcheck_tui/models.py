"""Response schema and fetch result types.

The remote service answers with a trust report for a host. Only the
fields below are read; anything else in the payload is ignored. Types are
checked strictly: a score sent as "87" is a decode failure, not 87.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

RESULT_INDENT = 1  # spaces per nesting level in result text


class TrustSignal(BaseModel):
    """Per-category sub-scores."""

    model_config = ConfigDict(strict=True)

    domain: int
    ownership: int
    encryption: int
    website: int


class TrustReport(BaseModel):
    """Decoded response body."""

    model_config = ConfigDict(strict=True)

    host: str
    trustscore: int
    trustsignal: TrustSignal

    def to_text(self) -> str:
        """Serialize to indented JSON in schema field order."""
        return self.model_dump_json(indent=RESULT_INDENT)


@dataclass(frozen=True)
class Success:
    """A request that decoded cleanly and returned 200 OK."""

    payload: TrustReport


@dataclass(frozen=True)
class Failure:
    """A request that failed at any stage; message is shown verbatim."""

    message: str


FetchResult = Success | Failure
