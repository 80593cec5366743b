from .market import (
    get_agent_info,
    get_agent_stats,
    get_agents,
    get_holdings,
    get_logs,
    get_prices,
    get_top_agents,
)
from .transactions import (
    get_advanced_analytics,
    get_most_traded_agent,
    get_transaction_history,
    get_transaction_metrics,
    predict_next_actions,
)

__all__ = [
    "get_agent_info",
    "get_agent_stats",
    "get_agents",
    "get_holdings",
    "get_logs",
    "get_prices",
    "get_top_agents",
    "get_advanced_analytics",
    "get_most_traded_agent",
    "get_transaction_history",
    "get_transaction_metrics",
    "predict_next_actions",
]
