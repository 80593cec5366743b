"""
Tool Registry and Executor for agent-driven tool calling.

The language-model agent framework registers these definitions and calls back
through ToolExecutor; every call resolves to a JSON-serializable value or a
human-readable error string.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Coroutine, Dict, List, Optional, Type

import structlog
from pydantic import BaseModel, ConfigDict, Field

from ..providers.iqai import IQAIProvider
from ..tools import market, transactions
from ..tools.common import ToolOutput
from ..types import (
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
    TransactionHistoryRequest,
)


class ToolDefinition(BaseModel):
    """Definition of a tool that can be called by the agent"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str
    parameters: Type[ToolRequest] = Field(default=EmptyRequest, exclude=True)

    def input_schema(self) -> Dict[str, Any]:
        schema = self.parameters.model_json_schema(by_alias=True)
        schema.pop("title", None)
        schema.pop("description", None)
        schema.setdefault("properties", {})
        return schema

    def to_schema(self) -> Dict[str, Any]:
        """Name, description and JSON schema of the parameters."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema(),
        }


@dataclass
class RegisteredTool:
    """A tool registered in the registry with its definition and handler."""
    definition: ToolDefinition
    handler: Callable[..., Coroutine[Any, Any, ToolOutput]]


class ToolRegistry:
    """
    Registry of available tools.

    Each tool has a definition (name, description, parameter model) and a handler.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._tools: Dict[str, RegisteredTool] = {}
        self.logger = logger or logging.getLogger(__name__)
        self._register_default_tools()

    def register(
        self,
        name: str,
        definition: ToolDefinition,
        handler: Callable[..., Coroutine[Any, Any, ToolOutput]],
    ) -> None:
        """Register a tool with its definition and handler."""
        self._tools[name] = RegisteredTool(definition=definition, handler=handler)

    def get_definitions(self) -> List[ToolDefinition]:
        return [tool.definition for tool in self._tools.values()]

    def get_tool(self, name: str) -> Optional[RegisteredTool]:
        return self._tools.get(name)

    def has_tool(self, name: str) -> bool:
        return name in self._tools

    def names(self) -> List[str]:
        return list(self._tools)

    def _register_default_tools(self) -> None:
        """Register the transaction analysis and market data tools."""

        # Transaction analysis
        self._add(
            "get_most_traded_agent",
            "Get the most traded agent on the IQ AI trading platform over the last 7 days.",
            EmptyRequest,
            transactions.get_most_traded_agent,
        )
        self._add(
            "get_transaction_history",
            (
                "Get one page of transaction history, optionally filtered by agent ticker, "
                "agent token contract or user id."
            ),
            TransactionHistoryRequest,
            transactions.get_transaction_history,
        )
        self._add(
            "get_transaction_metrics",
            "Get overall trading metrics for the IQ AI trading platform.",
            EmptyRequest,
            transactions.get_transaction_metrics,
        )
        self._add(
            "get_advanced_analytics",
            (
                "Analyse several pages of transactions (buy/sell split, volume, average trade size) "
                "together with platform metrics and the most traded agent. "
                "Use this for market sentiment and investment-decision questions."
            ),
            AdvancedAnalyticsRequest,
            transactions.get_advanced_analytics,
        )
        self._add(
            "predict_next_actions",
            (
                "Predict likely next trading actions from recent transaction patterns: "
                "trading frequency, buy vs sell ratio, total volume and a heuristic buy/sell/hold call."
            ),
            PredictNextActionsRequest,
            transactions.predict_next_actions,
        )

        # Market data
        self._add(
            "get_agents",
            "List agents with optional sort, order, status, chainId, page and limit.",
            AgentsRequest,
            market.get_agents,
        )
        self._add(
            "get_top_agents",
            "Get top agents by market cap, holders or inferences.",
            TopAgentsRequest,
            market.get_top_agents,
        )
        self._add(
            "get_agent_info",
            "Get agent info by contract address or ticker (exactly one).",
            AgentLookupRequest,
            market.get_agent_info,
        )
        self._add(
            "get_agent_stats",
            "Get agent stats by address or ticker; extendedStats is only allowed with address.",
            AgentStatsRequest,
            market.get_agent_stats,
        )
        self._add(
            "get_holdings",
            "Get agent token holdings for a wallet address.",
            HoldingsRequest,
            market.get_holdings,
        )
        self._add(
            "get_logs",
            "Get logs for an agent by its token contract.",
            LogsRequest,
            market.get_logs,
        )
        self._add(
            "get_prices",
            "Get USD prices from the IQ gateway (eth, frax or all).",
            PricesRequest,
            market.get_prices,
        )

    def _add(
        self,
        name: str,
        description: str,
        parameters: Type[ToolRequest],
        handler: Callable[..., Coroutine[Any, Any, ToolOutput]],
    ) -> None:
        self.register(
            name,
            ToolDefinition(name=name, description=description, parameters=parameters),
            handler,
        )


class ToolExecutor:
    """
    Executes tool calls requested by the agent.

    Calls share one provider so a conversation turn reuses a single HTTP client.
    """

    def __init__(
        self,
        registry: Optional[ToolRegistry] = None,
        provider: Optional[IQAIProvider] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.registry = registry or ToolRegistry()
        self.provider = provider
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolOutput:
        """Execute a single tool call; never raises."""
        tool = self.registry.get_tool(name)
        if not tool:
            return f"Unknown tool: {name}"

        structlog.contextvars.bind_contextvars(tool=name)
        try:
            self.logger.info(f"Executing tool {name}")
            return await tool.handler(provider=self.provider, **(arguments or {}))
        except Exception as e:
            # e.g. an argument named "provider"
            self.logger.exception(f"Tool execution error for {name}: {e}")
            return f"Error running {name}: {e}"
        finally:
            structlog.contextvars.unbind_contextvars("tool")

    async def execute_many(self, calls: List[Dict[str, Any]]) -> List[ToolOutput]:
        """Execute several {"name", "arguments"} calls concurrently."""
        if not calls:
            return []
        return list(
            await asyncio.gather(
                *(self.execute(call.get("name", ""), call.get("arguments")) for call in calls)
            )
        )
