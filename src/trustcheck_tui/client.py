"""Request client - one outbound request per query.

Builds the request envelope from the query, sends it, and folds every way
the exchange can go wrong into a Failure carrying a displayable message:

- Construction: the envelope cannot be prepared (bad endpoint, bad header)
- Transport: connection refused, DNS, timeout
- Decode: the body is not JSON or does not match the report schema
- Protocol: the status is not 200 OK

Decoding happens before the status check, so an error status with a
malformed body reports the decode error, and an error status with a
well-formed body reports the status line.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

import requests
from pydantic import ValidationError

from .models import Failure, FetchResult, Success, TrustReport

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://eregos.com/api/early"


@dataclass
class ClientConfig:
    """Static configuration for RequestClient.

    Attributes:
        endpoint: URL the query is POSTed to
        credential: Sent verbatim as the Authorization header when set
        query_field: Name of the JSON body field holding the query
        timeout: Seconds, or None for the transport default
    """

    endpoint: str = DEFAULT_ENDPOINT
    credential: str | None = field(default=None, repr=False)
    query_field: str = "query"
    timeout: float | None = None


@dataclass(frozen=True)
class RequestEnvelope:
    """A fully built outbound request, prior to transmission."""

    method: str
    url: str
    headers: dict[str, str]
    body: bytes

    @classmethod
    def build(cls, query: str, config: ClientConfig) -> RequestEnvelope:
        """Substitute the query into the request body template."""
        headers = {"Content-Type": "application/json"}
        if config.credential:
            headers["Authorization"] = config.credential
        body = json.dumps({config.query_field: query}).encode("utf-8")
        return cls(method="POST", url=config.endpoint, headers=headers, body=body)

    def prepare(self) -> requests.PreparedRequest:
        """Turn the envelope into a sendable request.

        Raises:
            requests.RequestException: If the URL or headers are malformed
        """
        request = requests.Request(self.method, self.url, headers=self.headers, data=self.body)
        return request.prepare()


def status_line(response: requests.Response) -> str:
    """Format the status as "<code> <reason>", e.g. "404 Not Found"."""
    return f"{response.status_code} {response.reason or ''}".strip()


class RequestClient:
    """Issues one request per query and produces exactly one FetchResult.

    fetch() blocks; the runtime driver calls it from a worker thread.

    Usage:
        client = RequestClient(ClientConfig(credential="secret"))
        result = client.fetch("example.com")
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self.config = config or ClientConfig()
        self._session_factory = session_factory

    def fetch(self, query: str) -> FetchResult:
        """Send the request for query and classify the outcome."""
        try:
            prepared = RequestEnvelope.build(query, self.config).prepare()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Could not build request: {e}")
            return Failure(str(e))

        logger.info(f"POST {prepared.url}")
        with self._session_factory() as session:
            try:
                response = session.send(prepared, timeout=self.config.timeout)
            except requests.RequestException as e:
                logger.error(f"Request failed: {e}")
                return Failure(str(e))

            try:
                report = TrustReport.model_validate_json(response.content)
            except ValidationError as e:
                logger.error(f"Could not decode response ({status_line(response)}): {e}")
                return Failure(str(e))

            if response.status_code != requests.codes.ok:
                logger.error(f"Unexpected status: {status_line(response)}")
                return Failure(status_line(response))

        logger.debug(f"Report received for {report.host}")
        return Success(report)
