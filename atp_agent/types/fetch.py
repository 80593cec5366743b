from dataclasses import dataclass
from typing import Any, Literal, Optional


FetchStatus = Literal["ok", "http_error", "transport_error"]


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a single request against the IQ AI platform.

    Exactly one of these holds:
    - ``ok``: 2xx response; ``document`` is the parsed JSON body, or the raw
      text when the body is not JSON.
    - ``http_error``: non-2xx response; ``status_code`` and ``message``
      (the reason phrase) are kept for the caller.
    - ``transport_error``: the request never produced a response;
      ``message`` holds the underlying failure.
    """

    status: FetchStatus
    document: Any = None
    status_code: Optional[int] = None
    message: str = ""

    @classmethod
    def success(cls, document: Any, status_code: int = 200) -> "FetchResult":
        return cls(status="ok", document=document, status_code=status_code)

    @classmethod
    def http_error(cls, status_code: int, reason: str = "") -> "FetchResult":
        return cls(status="http_error", status_code=status_code, message=reason)

    @classmethod
    def transport_error(cls, message: str) -> "FetchResult":
        return cls(status="transport_error", message=message)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def describe_failure(self, what: str = "data") -> str:
        """Human-readable failure string used at the tool boundary."""
        if self.status == "http_error":
            return f"Failed to fetch {what}: {self.status_code} {self.message}".rstrip()
        if self.status == "transport_error":
            return f"Error fetching {what}: {self.message or 'Unknown error'}"
        return ""
