from .base import AgentMarketProvider, Provider
from .iqai import IQAIProvider

__all__ = ["AgentMarketProvider", "Provider", "IQAIProvider"]
