"""Collect the paginated transaction feed into one ordered list."""

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

from ..config import settings
from ..providers.base import AgentMarketProvider
from ..types import CollectionResult, FetchResult, TransactionFilters

logger = logging.getLogger(__name__)


def extract_transactions(document: Any) -> List[Dict[str, Any]]:
    """Transactions carried by a feed document, or [] when it has none."""
    if not isinstance(document, dict):
        return []
    transactions = document.get("transactions")
    if not isinstance(transactions, list):
        return []
    return list(transactions)


async def collect_transactions(
    provider: AgentMarketProvider,
    filters: Optional[TransactionFilters] = None,
    depth: int = 3,
    *,
    page_timeout: Optional[float] = None,
    deadline: Optional[float] = None,
) -> CollectionResult:
    """
    Fetch pages 1..depth one after another and merge their transactions.

    Best effort: a page that fails, times out or carries no ``transactions``
    list contributes nothing and collection moves on. Once ``deadline``
    seconds have elapsed no further pages are requested and the partial
    result is returned with ``timed_out`` set.
    """
    filters = filters or TransactionFilters()
    if page_timeout is None:
        page_timeout = settings.page_timeout_seconds
    if deadline is None:
        deadline = settings.collection_deadline_seconds

    result = CollectionResult()
    started = time.monotonic()

    for page in range(1, max(depth, 0) + 1):
        remaining = deadline - (time.monotonic() - started)
        if remaining <= 0:
            result.timed_out = True
            logger.info(f"Collection deadline reached before page {page}; returning partial result")
            break

        result.pages_requested += 1
        page_result = await _fetch_page(provider, filters, page, min(page_timeout, remaining))

        if not page_result.ok:
            result.pages_failed += 1
            logger.debug(f"Skipping transaction page {page}: {page_result.describe_failure('page')}")
            continue

        result.pages_succeeded += 1
        result.transactions.extend(extract_transactions(page_result.document))

    return result


async def _fetch_page(
    provider: AgentMarketProvider,
    filters: TransactionFilters,
    page: int,
    timeout: float,
) -> FetchResult:
    try:
        return await asyncio.wait_for(
            provider.get_transactions(
                page=page,
                ticker=filters.ticker,
                agent_token_contract=filters.agent_token_contract,
                user_id=filters.user_id,
            ),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        return FetchResult.transport_error(f"page {page} timed out after {timeout:.1f}s")
