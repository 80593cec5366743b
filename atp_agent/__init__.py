"""Transaction analytics and market data tools for the IQ AI agent trading platform."""

__version__ = "0.1.0"
