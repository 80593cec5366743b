"""Derive trading statistics from a collected transaction list."""

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Optional, Sequence

from ..config import settings
from ..types import TransactionMetrics


def parse_usd_amount(value: Any) -> Decimal:
    """usdAmount as a Decimal; missing, malformed or non-finite values count as 0."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not amount.is_finite() or not math.isfinite(float(amount)):
        return Decimal("0")
    return amount


def is_buy(transaction: Dict[str, Any]) -> bool:
    return isinstance(transaction, dict) and transaction.get("isBuy") is True


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is zero."""
    if not denominator:
        return 0.0
    return float(numerator) / float(denominator)


def total_usd(transactions: Iterable[Dict[str, Any]]) -> Decimal:
    """
    Sum of usdAmount across records.

    The total always stays within float range: a record whose amount would
    push it past that is left out of the sum, like a malformed amount.
    """
    total = Decimal("0")
    for tx in transactions:
        if not isinstance(tx, dict):
            continue
        candidate = total + parse_usd_amount(tx.get("usdAmount"))
        if math.isfinite(float(candidate)):
            total = candidate
    return total


def compute_transaction_metrics(
    transactions: Sequence[Dict[str, Any]],
    recent_limit: Optional[int] = None,
) -> TransactionMetrics:
    """
    Summarise a transaction list.

    Records are partitioned by ``isBuy``: anything not exactly True counts
    as a sell, so buys + sells always equals the total. The recent activity
    slice keeps feed order (most recent first); nothing is re-sorted.
    """
    limit = recent_limit if recent_limit is not None else settings.recent_activity_limit
    total = len(transactions)
    buys = sum(1 for tx in transactions if is_buy(tx))
    sells = total - buys
    usd = total_usd(transactions)

    return TransactionMetrics(
        total_transactions=total,
        buy_transactions=buys,
        sell_transactions=sells,
        buy_ratio=safe_ratio(buys, total),
        sell_ratio=safe_ratio(sells, total),
        total_usd_amount=float(usd),
        average_usd_amount=float(usd / total) if total else 0.0,
        recent_activity=list(transactions[:limit]),
    )
