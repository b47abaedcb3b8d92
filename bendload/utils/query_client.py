"""
Databend HTTP statement client

Posts a SQL statement to the HTTP handler and returns columns, rows and
stats. Follows ``next_uri`` pages until the result is complete.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urljoin

import requests

from bendload.utils.errors import QueryError

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    columns: Optional[List[Any]] = None
    rows: Optional[List[List[Any]]] = None
    stats: Dict[str, Any] = field(default_factory=dict)

    def has_rows(self) -> bool:
        """True when both columns and rows came back and rows is non-empty"""
        return self.columns is not None and self.rows is not None and len(self.rows) > 0


class QueryClient:
    """Executes statements against one statement endpoint"""

    def __init__(
        self,
        url: str,
        session: Optional[requests.Session] = None,
        auth: Optional[Tuple[str, str]] = None,
        timeout: int = 1800,
    ):
        self.url = url
        self.session = session or requests.Session()
        if auth is not None:
            self.session.auth = auth
        self.timeout = timeout

    @classmethod
    def from_profile(cls, profile: str = "local") -> "QueryClient":
        from bendload.config.settings import build_query_endpoint, get_query_config

        session, url = build_query_endpoint(profile)
        return cls(url, session=session, timeout=get_query_config()["timeout"])

    def _decode(self, response: requests.Response, statement: str) -> Dict[str, Any]:
        if response.status_code >= 400:
            raise QueryError(
                f"HTTP {response.status_code} from {response.url}: {response.text[:200]}"
            )
        try:
            payload = response.json()
        except ValueError as e:
            raise QueryError(f"Invalid JSON response for statement {statement[:80]!r}: {e}")

        if not isinstance(payload, dict):
            raise QueryError(
                f"Unexpected {type(payload).__name__} response for statement {statement[:80]!r}"
            )

        error = payload.get("error")
        if error:
            if isinstance(error, dict):
                error = error.get("message", error)
            raise QueryError(str(error))
        return payload

    def execute(self, statement: str) -> QueryResult:
        """
        Execute a statement and collect every result page

        Args:
            statement: SQL text sent as the request body

        Returns:
            QueryResult with columns, rows and stats of the last page

        Raises:
            QueryError: transport failure, HTTP error status, bad JSON,
                or an error reported by the endpoint
        """
        logger.debug(f"Executing: {statement[:100]}...")
        try:
            response = self.session.post(
                self.url,
                data=statement.encode("utf-8"),
                headers={"Content-Type": "text/plain; charset=utf-8"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise QueryError(f"Cannot reach query endpoint {self.url}: {e}") from e

        payload = self._decode(response, statement)
        columns = payload.get("columns", payload.get("schema"))
        rows = payload.get("data")
        stats = payload.get("stats") or {}

        next_uri = payload.get("next_uri")
        while next_uri:
            try:
                response = self.session.get(urljoin(self.url, next_uri), timeout=self.timeout)
            except requests.RequestException as e:
                raise QueryError(f"Cannot fetch result page {next_uri}: {e}") from e
            page = self._decode(response, statement)
            if page.get("data"):
                rows = (rows or []) + page["data"]
            if columns is None:
                columns = page.get("columns", page.get("schema"))
            stats = page.get("stats") or stats
            next_uri = page.get("next_uri")

        return QueryResult(columns=columns, rows=rows, stats=stats)

    async def execute_async(self, statement: str) -> QueryResult:
        return await asyncio.to_thread(self.execute, statement)

    def close(self):
        self.session.close()
