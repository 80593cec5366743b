from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..types import FetchResult


class Provider(ABC):
    """Base provider interface"""

    name: str
    timeout_s: float = 10

    @abstractmethod
    async def ready(self) -> bool:
        """Check if provider is ready to serve requests"""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Return provider health status"""
        pass


class AgentMarketProvider(Provider):
    """Provider for agent-token transaction feeds and platform metrics"""

    @abstractmethod
    async def get_transactions(
        self,
        page: int = 1,
        ticker: Optional[str] = None,
        agent_token_contract: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> FetchResult:
        """Get one page of the transaction feed"""
        pass

    @abstractmethod
    async def get_metrics(self, view: str = "overall") -> FetchResult:
        """Get aggregate platform metrics for a view (overall, mostTraded7d)"""
        pass
