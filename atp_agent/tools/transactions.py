"""
Transaction analysis tools for the IQ AI trading platform.

- get_most_traded_agent: most traded agent over the last 7 days
- get_transaction_history: one page of the transaction feed
- get_transaction_metrics: platform-wide trading metrics
- get_advanced_analytics: multi-page history + metrics + most traded
- predict_next_actions: full collection -> metrics -> prediction pipeline
"""

import logging
from typing import Any, Dict, Optional

from ..providers.iqai import IQAIProvider
from ..services.collector import collect_transactions
from ..services.metrics import compute_transaction_metrics
from ..services.prediction import predict_next_actions as build_prediction
from ..types import (
    AdvancedAnalyticsRequest,
    EmptyRequest,
    PredictNextActionsRequest,
    TransactionHistoryRequest,
)
from .common import ToolOutput, parse_request, passthrough, provider_scope, tool_boundary

logger = logging.getLogger(__name__)


@tool_boundary
async def get_most_traded_agent(provider: Optional[IQAIProvider] = None, **params: Any) -> ToolOutput:
    """Most traded agent over the last 7 days, as returned by the platform."""
    parse_request(EmptyRequest, params)
    async with provider_scope(provider) as iq:
        result = await iq.get_metrics("mostTraded7d")
    return passthrough(result, "data")


@tool_boundary
async def get_transaction_history(provider: Optional[IQAIProvider] = None, **params: Any) -> ToolOutput:
    """One page of transaction history, filtered by ticker, contract or user."""
    request = parse_request(TransactionHistoryRequest, params)
    async with provider_scope(provider) as iq:
        result = await iq.get_transactions(
            page=request.page,
            ticker=request.ticker,
            agent_token_contract=request.agent_token_contract,
            user_id=request.user_id,
        )
    return passthrough(result, "data")


@tool_boundary
async def get_transaction_metrics(provider: Optional[IQAIProvider] = None, **params: Any) -> ToolOutput:
    parse_request(EmptyRequest, params)
    async with provider_scope(provider) as iq:
        result = await iq.get_metrics("overall")
    return passthrough(result, "data")


@tool_boundary
async def get_advanced_analytics(provider: Optional[IQAIProvider] = None, **params: Any) -> ToolOutput:
    """
    Transaction analysis over several pages combined with platform metrics.

    Remote failures of the metrics endpoints do not fail the call; they are
    listed under ``errors`` and the corresponding section is null.
    """
    request = parse_request(AdvancedAnalyticsRequest, params)
    errors = []

    async with provider_scope(provider) as iq:
        collection = await collect_transactions(iq, request, depth=request.pages)
        overall = await iq.get_metrics("overall")
        most_traded = await iq.get_metrics("mostTraded7d")

    sections: Dict[str, Any] = {}
    for key, result in (("platformMetrics", overall), ("mostTraded7d", most_traded)):
        if result.ok:
            sections[key] = result.document
        else:
            sections[key] = None
            errors.append(result.describe_failure(key))

    metrics = compute_transaction_metrics(collection.transactions)
    logger.info(
        f"Advanced analytics over {collection.pages_requested} pages: "
        f"{metrics.total_transactions} transactions, {len(errors)} metric errors"
    )

    return {
        "filters": request.query_params(),
        "transactionAnalysis": metrics.to_payload(),
        "collection": collection.to_payload(),
        **sections,
        "errors": errors,
    }


@tool_boundary
async def predict_next_actions(provider: Optional[IQAIProvider] = None, **params: Any) -> ToolOutput:
    """
    Forecast the next trading action from recent transaction patterns.

    Always returns an analysis; with no transactions collected every ratio
    and average is 0 and the predicted action is "hold".
    """
    request = parse_request(PredictNextActionsRequest, params)

    async with provider_scope(provider) as iq:
        collection = await collect_transactions(iq, request, depth=request.analysis_depth)

    metrics = compute_transaction_metrics(collection.transactions)
    analysis = build_prediction(
        metrics,
        request,
        pages_fetched=collection.pages_requested,
        analysis_depth=request.analysis_depth,
    )

    payload = analysis.to_payload()
    payload["collection"] = collection.to_payload()
    return payload
