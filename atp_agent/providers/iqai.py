"""
IQ AI Agent Tokenization Platform provider

Single point of contact with the platform's HTTP API:
- Transaction feed and trading metrics
- Agent listings, info, stats and logs
- Wallet holdings and USD prices

Every call returns a FetchResult; network conditions never raise.
"""

import logging
import time
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from ..config import settings
from ..services.query import build_query
from ..types import FetchResult
from .base import AgentMarketProvider

logger = logging.getLogger(__name__)


class IQAIProvider(AgentMarketProvider):
    """HTTP client for app.iqai.com endpoints."""

    name = "iqai"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.timeout_s = timeout_s or settings.request_timeout_seconds
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout_s,
                headers={"Accept": "application/json"},
            )
            self._owns_client = True
        return self._client

    async def close(self):
        """Close the HTTP client if this provider created it."""
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "IQAIProvider":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def ready(self) -> bool:
        return bool(self.base_url)

    async def health_check(self) -> Dict[str, Any]:
        if not await self.ready():
            return {"status": "unavailable", "reason": "No base URL configured"}

        started = time.monotonic()
        result = await self.fetch("/api/prices", params={"type": "eth"})
        if not result.ok:
            return {"status": "error", "reason": result.describe_failure("prices")}
        return {"status": "healthy", "latency_ms": int((time.monotonic() - started) * 1000)}

    # =========================================================================
    # Remote fetch
    # =========================================================================

    async def fetch(
        self,
        path: str,
        *,
        method: str = "GET",
        params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> FetchResult:
        """
        Issue one request and classify the outcome.

        Args:
            path: Endpoint path, e.g. "/api/transactions"
            method: HTTP method
            params: Optional query parameters; None/"" values are dropped
            body: JSON body for POST requests
            headers: Extra request headers
            timeout: Per-request timeout override in seconds

        Returns:
            FetchResult tagged ok, http_error or transport_error
        """
        url = f"{self.base_url}{path}{build_query(params or {})}"
        client = await self._get_client()

        try:
            response = await client.request(
                method,
                url,
                json=body,
                headers=headers,
                timeout=timeout or self.timeout_s,
            )
        except httpx.HTTPError as e:
            message = str(e) or e.__class__.__name__
            logger.warning(f"IQ AI request failed: {method} {url}: {message}")
            return FetchResult.transport_error(message)

        if not response.is_success:
            logger.warning(
                f"IQ AI returned {response.status_code} {response.reason_phrase} for {method} {url}"
            )
            return FetchResult.http_error(response.status_code, response.reason_phrase)

        return FetchResult.success(self._parse_document(response), response.status_code)

    @staticmethod
    def _parse_document(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            # Non-JSON bodies are handed back as text
            return response.text

    # =========================================================================
    # Transactions & metrics
    # =========================================================================

    async def get_transactions(
        self,
        page: int = 1,
        ticker: Optional[str] = None,
        agent_token_contract: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> FetchResult:
        params = {
            "page": page,
            "ticker": ticker,
            "agentTokenContract": agent_token_contract,
            "userId": user_id,
        }
        return await self.fetch("/api/transactions", params=params)

    async def get_metrics(self, view: str = "overall") -> FetchResult:
        return await self.fetch("/api/metrics", params={"view": view})

    # =========================================================================
    # Market data
    # =========================================================================

    async def get_agents(
        self,
        sort: Optional[str] = None,
        order: Optional[str] = None,
        status: Optional[str] = None,
        chain_id: Optional[Union[int, str]] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> FetchResult:
        params = {
            "sort": sort,
            "order": order,
            "status": status,
            "chainId": chain_id,
            "page": page,
            "limit": limit,
        }
        return await self.fetch("/api/agents", params=params)

    async def get_top_agents(self, sort: Optional[str] = None, limit: Optional[int] = None) -> FetchResult:
        return await self.fetch("/api/agents/top", params={"sort": sort, "limit": limit})

    async def get_agent_info(self, address: Optional[str] = None, ticker: Optional[str] = None) -> FetchResult:
        return await self.fetch("/api/agents/info", params={"address": address, "ticker": ticker})

    async def get_agent_stats(
        self,
        address: Optional[str] = None,
        ticker: Optional[str] = None,
        extended_stats: bool = False,
    ) -> FetchResult:
        params = {
            "address": address,
            "ticker": ticker,
            "extendedStats": "true" if extended_stats else None,
        }
        return await self.fetch("/api/agents/stats", params=params)

    async def get_holdings(self, address: str, chain_id: Optional[Union[int, str]] = None) -> FetchResult:
        params = {
            "address": address,
            "chainId": chain_id if chain_id is not None else settings.default_chain_id,
        }
        return await self.fetch("/api/holdings", params=params)

    async def get_logs(
        self,
        agent_token_contract: str,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> FetchResult:
        params = {
            "agentTokenContract": agent_token_contract,
            "page": page,
            "limit": limit,
        }
        return await self.fetch("/api/logs", params=params)

    async def get_prices(self, price_type: Optional[str] = None) -> FetchResult:
        return await self.fetch("/api/prices", params={"type": price_type})
