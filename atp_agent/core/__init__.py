from .tools import RegisteredTool, ToolDefinition, ToolExecutor, ToolRegistry

__all__ = ["RegisteredTool", "ToolDefinition", "ToolExecutor", "ToolRegistry"]
