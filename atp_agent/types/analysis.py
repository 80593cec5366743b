from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field


Sentiment = Literal["bullish", "bearish", "neutral"]
PredictedAction = Literal["buy", "sell", "hold"]


@dataclass
class CollectionResult:
    """Transactions merged across pages, with page bookkeeping."""

    transactions: List[Dict[str, Any]] = field(default_factory=list)
    pages_requested: int = 0
    pages_succeeded: int = 0
    pages_failed: int = 0
    timed_out: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return {
            "pagesRequested": self.pages_requested,
            "pagesSucceeded": self.pages_succeeded,
            "pagesFailed": self.pages_failed,
            "timedOut": self.timed_out,
            "transactionsCollected": len(self.transactions),
        }


class AnalysisModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class TransactionMetrics(AnalysisModel):
    total_transactions: int = Field(0, alias="totalTransactions")
    buy_transactions: int = Field(0, alias="buyTransactions")
    sell_transactions: int = Field(0, alias="sellTransactions")
    buy_ratio: float = Field(0.0, alias="buyRatio")
    sell_ratio: float = Field(0.0, alias="sellRatio")
    total_usd_amount: float = Field(0.0, alias="totalUsdAmount")
    average_usd_amount: float = Field(0.0, alias="averageUsdAmount")
    recent_activity: List[Any] = Field(default_factory=list, alias="recentActivity")


class NextActionAnalysis(AnalysisModel):
    most_active_agent: str = Field(..., alias="mostActiveAgent")
    analysis_depth: int = Field(..., alias="analysisDepth")
    pages_fetched: int = Field(..., alias="pagesFetched")
    trading_frequency: float = Field(0.0, alias="tradingFrequency")
    buy_vs_sell_ratio: float = Field(0.0, alias="buyVsSellRatio")
    total_volume: float = Field(0.0, alias="totalVolume")

    # Heuristic forecast
    market_sentiment: Sentiment = Field("neutral", alias="marketSentiment")
    recent_buy_ratio: float = Field(0.0, alias="recentBuyRatio")
    predicted_action: PredictedAction = Field("hold", alias="predictedAction")
    confidence: float = 0.0

    metrics: TransactionMetrics
