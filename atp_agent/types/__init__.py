from .analysis import CollectionResult, NextActionAnalysis, TransactionMetrics
from .fetch import FetchResult
from .requests import (
    AdvancedAnalyticsRequest,
    AgentLookupRequest,
    AgentsRequest,
    AgentStatsRequest,
    EmptyRequest,
    HoldingsRequest,
    LogsRequest,
    PredictNextActionsRequest,
    PricesRequest,
    TopAgentsRequest,
    ToolRequest,
    TransactionFilters,
    TransactionHistoryRequest,
)

__all__ = [
    "CollectionResult",
    "NextActionAnalysis",
    "TransactionMetrics",
    "FetchResult",
    "AdvancedAnalyticsRequest",
    "AgentLookupRequest",
    "AgentsRequest",
    "AgentStatsRequest",
    "EmptyRequest",
    "HoldingsRequest",
    "LogsRequest",
    "PredictNextActionsRequest",
    "PricesRequest",
    "TopAgentsRequest",
    "ToolRequest",
    "TransactionFilters",
    "TransactionHistoryRequest",
]
