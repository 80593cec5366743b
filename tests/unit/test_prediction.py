import pytest

from atp_agent.services.metrics import compute_transaction_metrics
from atp_agent.services.prediction import UNSPECIFIED_AGENT, classify_sentiment, predict_next_actions
from atp_agent.types import TransactionFilters


def _txs(buys: int, sells: int, usd: str = "10") -> list:
    return [{"isBuy": True, "usdAmount": usd}] * buys + [{"isBuy": False, "usdAmount": usd}] * sells


def test_frequency_ratio_and_volume():
    metrics = compute_transaction_metrics(_txs(6, 3))
    analysis = predict_next_actions(metrics, TransactionFilters(ticker="SOPHIA"), pages_fetched=3)

    assert analysis.trading_frequency == 3.0
    assert analysis.buy_vs_sell_ratio == 2.0
    assert analysis.total_volume == 90.0
    assert analysis.most_active_agent == "SOPHIA"
    assert analysis.analysis_depth == 3


def test_most_active_agent_defaults_to_unspecified():
    analysis = predict_next_actions(compute_transaction_metrics(_txs(1, 1)), None, pages_fetched=1)
    assert analysis.most_active_agent == UNSPECIFIED_AGENT


def test_most_active_agent_is_not_inferred_from_data():
    transactions = [{"isBuy": True, "usdAmount": "1", "agentTicker": "OTHER"}] * 4
    analysis = predict_next_actions(
        compute_transaction_metrics(transactions), TransactionFilters(), pages_fetched=1
    )
    assert analysis.most_active_agent == "unspecified"


def test_zero_transactions_are_well_defined():
    analysis = predict_next_actions(compute_transaction_metrics([]), TransactionFilters(), pages_fetched=0)

    assert analysis.trading_frequency == 0.0
    assert analysis.buy_vs_sell_ratio == 0.0
    assert analysis.total_volume == 0.0
    assert analysis.market_sentiment == "neutral"
    assert analysis.predicted_action == "hold"
    assert analysis.confidence == 0.0


def test_zero_sells_uses_sentinel_ratio():
    analysis = predict_next_actions(compute_transaction_metrics(_txs(4, 0)), pages_fetched=2)
    assert analysis.buy_vs_sell_ratio == 0.0
    assert analysis.trading_frequency == 2.0


def test_recent_window_drives_predicted_action():
    # Most recent ten are sells even though buys dominate overall
    transactions = _txs(0, 10) + _txs(30, 0)
    analysis = predict_next_actions(compute_transaction_metrics(transactions), pages_fetched=4)

    assert analysis.market_sentiment == "bullish"
    assert analysis.recent_buy_ratio == 0.0
    assert analysis.predicted_action == "sell"
    assert analysis.confidence == 1.0


def test_balanced_recent_window_holds():
    analysis = predict_next_actions(compute_transaction_metrics(_txs(5, 5)), pages_fetched=1)
    assert analysis.predicted_action == "hold"
    assert analysis.confidence == 0.0


@pytest.mark.parametrize(
    "ratio, expected",
    [(0.0, "bearish"), (0.4, "bearish"), (0.5, "neutral"), (0.6, "bullish"), (1.0, "bullish")],
)
def test_classify_sentiment(ratio, expected):
    assert classify_sentiment(ratio) == expected


def test_payload_nests_metrics():
    payload = predict_next_actions(compute_transaction_metrics(_txs(2, 1)), pages_fetched=1).to_payload()
    assert payload["mostActiveAgent"] == "unspecified"
    assert payload["metrics"]["totalTransactions"] == 3
    assert payload["buyVsSellRatio"] == 2.0
