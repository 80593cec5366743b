"""Market data tools: thin pass-throughs over IQ AI platform endpoints."""

from typing import Any, Optional

from ..providers.iqai import IQAIProvider
from ..types import (
    AgentLookupRequest,
    AgentsRequest,
    AgentStatsRequest,
    HoldingsRequest,
    LogsRequest,
    PricesRequest,
    TopAgentsRequest,
)
from .common import ToolOutput, parse_request, passthrough, provider_scope, tool_boundary


@tool_boundary
async def get_agents(provider: Optional[IQAIProvider] = None, **params: Any) -> ToolOutput:
    request = parse_request(AgentsRequest, params)
    async with provider_scope(provider) as iq:
        result = await iq.get_agents(
            sort=request.sort,
            order=request.order,
            status=request.status,
            chain_id=request.chain_id,
            page=request.page,
            limit=request.limit,
        )
    return passthrough(result, "agents", request.pretty)


@tool_boundary
async def get_top_agents(provider: Optional[IQAIProvider] = None, **params: Any) -> ToolOutput:
    request = parse_request(TopAgentsRequest, params)
    async with provider_scope(provider) as iq:
        result = await iq.get_top_agents(sort=request.sort, limit=request.limit)
    return passthrough(result, "top agents", request.pretty)


@tool_boundary
async def get_agent_info(provider: Optional[IQAIProvider] = None, **params: Any) -> ToolOutput:
    """Agent info by contract address or ticker (exactly one of them)."""
    request = parse_request(AgentLookupRequest, params)
    async with provider_scope(provider) as iq:
        result = await iq.get_agent_info(address=request.address, ticker=request.ticker)
    return passthrough(result, "agent info", request.pretty)


@tool_boundary
async def get_agent_stats(provider: Optional[IQAIProvider] = None, **params: Any) -> ToolOutput:
    """Agent stats by address or ticker; extendedStats requires an address."""
    request = parse_request(AgentStatsRequest, params)
    async with provider_scope(provider) as iq:
        result = await iq.get_agent_stats(
            address=request.address,
            ticker=request.ticker,
            extended_stats=request.extended_stats,
        )
    return passthrough(result, "agent stats", request.pretty)


@tool_boundary
async def get_holdings(provider: Optional[IQAIProvider] = None, **params: Any) -> ToolOutput:
    """Agent token holdings of a wallet."""
    request = parse_request(HoldingsRequest, params)
    async with provider_scope(provider) as iq:
        result = await iq.get_holdings(address=request.address, chain_id=request.chain_id)
    return passthrough(result, "holdings", request.pretty)


@tool_boundary
async def get_logs(provider: Optional[IQAIProvider] = None, **params: Any) -> ToolOutput:
    request = parse_request(LogsRequest, params)
    async with provider_scope(provider) as iq:
        result = await iq.get_logs(
            agent_token_contract=request.agent_token_contract,
            page=request.page,
            limit=request.limit,
        )
    return passthrough(result, "logs", request.pretty)


@tool_boundary
async def get_prices(provider: Optional[IQAIProvider] = None, **params: Any) -> ToolOutput:
    request = parse_request(PricesRequest, params)
    async with provider_scope(provider) as iq:
        result = await iq.get_prices(price_type=request.type)
    return passthrough(result, "prices", request.pretty)
