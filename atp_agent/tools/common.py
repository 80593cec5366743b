import json
import logging
from contextlib import asynccontextmanager
from functools import wraps
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from ..providers.iqai import IQAIProvider
from ..types import FetchResult, ToolRequest

ToolOutput = Union[Dict[str, Any], List[Any], str, int, float, bool, None]

RequestT = TypeVar("RequestT", bound=ToolRequest)

logger = logging.getLogger(__name__)


class InvalidToolParameters(ValueError):
    """Raised when tool arguments fail boundary validation."""


@asynccontextmanager
async def provider_scope(provider: Optional[IQAIProvider] = None) -> AsyncIterator[IQAIProvider]:
    """Use the caller's provider, or a short-lived one closed on exit."""
    if provider is not None:
        yield provider
        return
    async with IQAIProvider() as owned:
        yield owned


def parse_request(model: Type[RequestT], params: Dict[str, Any]) -> RequestT:
    try:
        return model.model_validate(params)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'request'}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidToolParameters(f"Invalid parameters: {details}") from e


def format_json(value: Any, pretty: bool = False) -> ToolOutput:
    if pretty:
        return json.dumps(value, indent=2, default=str)
    return value


def passthrough(result: FetchResult, what: str, pretty: bool = False) -> ToolOutput:
    """The fetched document, or the failure string when the fetch failed."""
    if not result.ok:
        return result.describe_failure(what)
    return format_json(result.document, pretty)


def tool_boundary(fn: Callable[..., Awaitable[ToolOutput]]) -> Callable[..., Awaitable[ToolOutput]]:
    """Make a tool always answer: bad parameters and unexpected failures become strings."""

    @wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> ToolOutput:
        try:
            return await fn(*args, **kwargs)
        except InvalidToolParameters as e:
            return str(e)
        except Exception as e:
            logger.exception(f"Tool {fn.__name__} failed")
            return f"Error running {fn.__name__}: {e}"

    return wrapper
