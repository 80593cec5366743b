"""Heuristic next-action forecast built on top of transaction metrics.

Descriptive statistics only: the forecast extrapolates the buy share of the
recent window, it is not a trained model.
"""

from typing import Optional

from ..types import NextActionAnalysis, TransactionFilters, TransactionMetrics
from .metrics import is_buy, safe_ratio

UNSPECIFIED_AGENT = "unspecified"

BULLISH_THRESHOLD = 0.6
BEARISH_THRESHOLD = 0.4


def classify_sentiment(buy_ratio: float, has_activity: bool = True) -> str:
    if not has_activity:
        return "neutral"
    if buy_ratio >= BULLISH_THRESHOLD:
        return "bullish"
    if buy_ratio <= BEARISH_THRESHOLD:
        return "bearish"
    return "neutral"


def predict_next_actions(
    metrics: TransactionMetrics,
    filters: Optional[TransactionFilters] = None,
    pages_fetched: int = 0,
    analysis_depth: Optional[int] = None,
) -> NextActionAnalysis:
    """
    Combine metrics with simple heuristics into a next-action forecast.

    ``mostActiveAgent`` echoes the ticker filter (or "unspecified"); it is
    not inferred from the transactions.
    """
    filters = filters or TransactionFilters()
    recent = metrics.recent_activity
    recent_buys = sum(1 for tx in recent if is_buy(tx))
    recent_buy_ratio = safe_ratio(recent_buys, len(recent))

    action = {"bullish": "buy", "bearish": "sell"}.get(
        classify_sentiment(recent_buy_ratio, bool(recent)), "hold"
    )
    confidence = round(abs(recent_buy_ratio - 0.5) * 2, 2) if recent else 0.0

    return NextActionAnalysis(
        most_active_agent=filters.ticker or UNSPECIFIED_AGENT,
        analysis_depth=analysis_depth if analysis_depth is not None else pages_fetched,
        pages_fetched=pages_fetched,
        trading_frequency=safe_ratio(metrics.total_transactions, pages_fetched),
        buy_vs_sell_ratio=safe_ratio(metrics.buy_transactions, metrics.sell_transactions),
        total_volume=metrics.total_usd_amount,
        market_sentiment=classify_sentiment(metrics.buy_ratio, metrics.total_transactions > 0),
        recent_buy_ratio=recent_buy_ratio,
        predicted_action=action,
        confidence=confidence,
        metrics=metrics,
    )
