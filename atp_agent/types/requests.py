"""Typed parameter models for every callable tool.

Tools receive flat, loosely typed keyword arguments from the agent framework.
Each tool validates them into one of these models before anything touches the
network, so the pipeline only ever sees concrete types and documented defaults.
"""

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..config import settings


class ToolRequest(BaseModel):
    """Base for tool parameter models: camelCase aliases, unknown keys rejected."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


# =============================================================================
# Transaction analytics
# =============================================================================


class TransactionFilters(ToolRequest):
    """Optional filters shared by every transaction feed query."""

    ticker: Optional[str] = Field(default=None, description="Agent token ticker, e.g. SOPHIA")
    agent_token_contract: Optional[str] = Field(
        default=None,
        alias="agentTokenContract",
        description="Agent token contract address",
    )
    user_id: Optional[str] = Field(default=None, alias="userId", description="Trader user id")

    def query_params(self) -> Dict[str, Optional[str]]:
        """Filters keyed by their remote query parameter names."""
        return {
            "ticker": self.ticker,
            "agentTokenContract": self.agent_token_contract,
            "userId": self.user_id,
        }


def _check_depth(value: int) -> int:
    if value > settings.max_analysis_depth:
        raise ValueError(f"must be at most {settings.max_analysis_depth}")
    return value


class TransactionHistoryRequest(TransactionFilters):
    page: int = Field(default=1, ge=1, description="Page of the transaction feed to return")


class AdvancedAnalyticsRequest(TransactionFilters):
    pages: int = Field(
        default_factory=lambda: settings.default_analysis_depth,
        ge=0,
        description="Number of transaction pages to collect",
    )

    check_depth = field_validator("pages")(_check_depth)


class PredictNextActionsRequest(TransactionFilters):
    analysis_depth: int = Field(
        default_factory=lambda: settings.default_analysis_depth,
        alias="analysisDepth",
        ge=0,
        description="Number of transaction pages to analyse",
    )

    check_depth = field_validator("analysis_depth")(_check_depth)


# =============================================================================
# Market proxies
# =============================================================================


class PrettyRequest(ToolRequest):
    pretty: bool = Field(default=False, description="Return indented JSON text instead of a document")


class AgentsRequest(PrettyRequest):
    sort: Optional[Literal["latest", "marketCap", "holders", "inferences"]] = None
    order: Optional[Literal["asc", "desc"]] = None
    status: Optional[Literal["alive", "latent"]] = None
    chain_id: Optional[Union[int, str]] = Field(default=None, alias="chainId")
    page: Optional[int] = Field(default=None, ge=1)
    limit: Optional[int] = Field(default=None, ge=1, le=100)


class TopAgentsRequest(PrettyRequest):
    sort: Optional[Literal["mcap", "holders", "inferences"]] = None
    limit: Optional[int] = Field(default=None, ge=1, le=100)


class AgentLookupRequest(PrettyRequest):
    """Agent lookup by contract address or ticker, never both."""

    address: Optional[str] = None
    ticker: Optional[str] = None

    @model_validator(mode="after")
    def _address_xor_ticker(self) -> "AgentLookupRequest":
        if bool(self.address) == bool(self.ticker):
            raise ValueError("Provide either address or ticker, not both")
        return self


class AgentStatsRequest(AgentLookupRequest):
    extended_stats: bool = Field(default=False, alias="extendedStats")

    @model_validator(mode="after")
    def _extended_requires_address(self) -> "AgentStatsRequest":
        if self.extended_stats and not self.address:
            raise ValueError("extendedStats is only allowed with address")
        return self


class HoldingsRequest(PrettyRequest):
    address: str
    chain_id: Optional[Union[int, str]] = Field(default=None, alias="chainId")


class LogsRequest(PrettyRequest):
    agent_token_contract: str = Field(alias="agentTokenContract")
    page: Optional[int] = Field(default=None, ge=1)
    limit: Optional[int] = Field(default=None, ge=1, le=100)


class PricesRequest(PrettyRequest):
    type: Optional[Literal["eth", "frax", "all"]] = None


class EmptyRequest(ToolRequest):
    pass
