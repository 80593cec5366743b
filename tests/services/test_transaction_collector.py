"""
Tests for the paginated transaction collector.
"""

import asyncio

import pytest

from atp_agent.services.collector import collect_transactions, extract_transactions
from atp_agent.services.metrics import compute_transaction_metrics
from atp_agent.types import FetchResult, TransactionFilters


class _StubFeed:
    """Transaction feed stand-in recording the order of page requests."""

    def __init__(self, pages=None, delays=None):
        self.pages = pages or {}
        self.delays = delays or {}
        self.events = []
        self.kwargs = []

    async def get_transactions(self, page=1, ticker=None, agent_token_contract=None, user_id=None):
        self.events.append(("start", page))
        self.kwargs.append({"ticker": ticker, "agent_token_contract": agent_token_contract, "user_id": user_id})
        await asyncio.sleep(self.delays.get(page, 0))
        self.events.append(("end", page))
        return self.pages.get(page, FetchResult.success({"transactions": []}))


def _page(*transactions):
    return FetchResult.success({"transactions": list(transactions)})


def _buy(usd="10", **extra):
    return {"isBuy": True, "usdAmount": usd, **extra}


def _sell(usd="10", **extra):
    return {"isBuy": False, "usdAmount": usd, **extra}


@pytest.mark.asyncio
async def test_failed_page_is_skipped_and_rest_merged():
    feed = _StubFeed({
        1: _page(*([_buy()] * 5 + [_sell()] * 5)),
        2: FetchResult.http_error(500, "Internal Server Error"),
        3: _page(_buy("5"), _buy("5")),
    })

    result = await collect_transactions(feed, TransactionFilters(), depth=3)
    metrics = compute_transaction_metrics(result.transactions)

    assert result.pages_requested == 3
    assert result.pages_succeeded == 2
    assert result.pages_failed == 1
    assert not result.timed_out
    assert metrics.total_transactions == 12
    assert metrics.buy_transactions == 7
    assert metrics.sell_transactions == 5
    assert metrics.total_usd_amount == 110
    assert metrics.average_usd_amount == pytest.approx(9.17, abs=0.01)


@pytest.mark.asyncio
async def test_pages_are_requested_sequentially_in_order():
    feed = _StubFeed(delays={1: 0.02, 2: 0.0, 3: 0.01})
    await collect_transactions(feed, depth=3)

    assert feed.events == [
        ("start", 1), ("end", 1),
        ("start", 2), ("end", 2),
        ("start", 3), ("end", 3),
    ]


@pytest.mark.asyncio
async def test_feed_order_is_preserved_across_pages():
    feed = _StubFeed({
        1: _page(_buy(id="a"), _sell(id="b")),
        2: _page(_sell(id="c")),
    })
    result = await collect_transactions(feed, depth=2)
    assert [tx["id"] for tx in result.transactions] == ["a", "b", "c"]


@pytest.mark.asyncio
@pytest.mark.parametrize("depth", [0, -2])
async def test_non_positive_depth_issues_no_fetches(depth):
    feed = _StubFeed()
    result = await collect_transactions(feed, depth=depth)
    assert feed.events == []
    assert result.transactions == []
    assert result.pages_requested == 0


@pytest.mark.asyncio
async def test_at_most_depth_fetches():
    feed = _StubFeed()
    result = await collect_transactions(feed, depth=5)
    assert [page for kind, page in feed.events if kind == "start"] == [1, 2, 3, 4, 5]
    assert result.pages_requested == 5


@pytest.mark.asyncio
async def test_unusable_documents_contribute_nothing():
    feed = _StubFeed({
        1: FetchResult.success("<html>maintenance</html>"),
        2: FetchResult.success({"transactions": "none"}),
        3: FetchResult.success({"data": [_buy()]}),
        4: FetchResult.transport_error("connection reset"),
    })
    result = await collect_transactions(feed, depth=4)
    assert result.transactions == []
    assert result.pages_succeeded == 3
    assert result.pages_failed == 1


@pytest.mark.asyncio
async def test_filters_are_forwarded():
    feed = _StubFeed()
    filters = TransactionFilters(ticker="SOPHIA", userId="u-7")
    await collect_transactions(feed, filters, depth=1)
    assert feed.kwargs == [{"ticker": "SOPHIA", "agent_token_contract": None, "user_id": "u-7"}]


@pytest.mark.asyncio
async def test_slow_page_times_out_and_is_skipped():
    feed = _StubFeed(
        {1: _page(_buy()), 2: _page(_buy()), 3: _page(_sell())},
        delays={2: 1.0},
    )
    result = await collect_transactions(feed, depth=3, page_timeout=0.05, deadline=5)

    assert result.pages_failed == 1
    assert result.pages_succeeded == 2
    assert len(result.transactions) == 2
    assert not result.timed_out


@pytest.mark.asyncio
async def test_deadline_stops_further_pages():
    feed = _StubFeed(
        {page: _page(_buy(id=page)) for page in range(1, 11)},
        delays={page: 0.1 for page in range(1, 11)},
    )
    result = await collect_transactions(feed, depth=10, page_timeout=1.0, deadline=0.15)

    assert result.timed_out
    assert result.pages_requested <= 3
    assert ("start", 10) not in feed.events
    assert [tx["id"] for tx in result.transactions] == [1]


@pytest.mark.asyncio
async def test_zero_deadline_requests_no_pages():
    feed = _StubFeed({1: _page(_buy())})
    result = await collect_transactions(feed, depth=3, deadline=0)

    assert result.timed_out
    assert result.pages_requested == 0
    assert feed.events == []
    assert result.transactions == []


@pytest.mark.asyncio
async def test_zero_page_timeout_is_not_replaced_by_default():
    feed = _StubFeed({1: _page(_buy())}, delays={1: 0.05})
    result = await collect_transactions(feed, depth=1, page_timeout=0, deadline=5)

    assert result.pages_failed == 1
    assert result.transactions == []


def test_extract_transactions():
    assert extract_transactions({"transactions": [1, 2]}) == [1, 2]
    assert extract_transactions({"transactions": None}) == []
    assert extract_transactions(["not", "a", "dict"]) == []
    assert extract_transactions("text") == []
