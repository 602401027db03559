"""
Dashboard service: loads requests for a page and derives what the views show.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from loguru import logger

from jsd_dashboard.sd.data_source import ServiceDeskSource
from jsd_dashboard.sd.errors import FetchError
from jsd_dashboard.sd.models import ServiceDeskRequest

LOAD_ERROR_MESSAGE = "Failed to load service desk requests from API"

OPEN_STATUSES = frozenset({"open", "new", "in progress"})
RESOLVED_STATUSES = frozenset({"resolved", "closed"})
PENDING_MARKER = "waiting"


@dataclass(frozen=True)
class RequestListing:
    requests: List[ServiceDeskRequest] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class DashboardStats:
    total: int
    open: int
    pending: int
    resolved: int

    def share(self, part: int) -> float:
        return (part / self.total * 100.0) if self.total > 0 else 0.0


def load_requests(source: ServiceDeskSource, token: str) -> RequestListing:
    """
    Fetch the listing for one page render. A failed fetch becomes an empty
    listing with `error` set, so the page can still render.
    """
    try:
        return RequestListing(requests=source.list_requests(token))
    except FetchError as e:
        logger.error("Get service desk requests error: {} (status={})", e, e.status_code)
        return RequestListing(requests=[], error=LOAD_ERROR_MESSAGE)


def _norm(status: Optional[str]) -> str:
    return str(status or "").strip().lower()


def compute_stats(requests: Sequence[ServiceDeskRequest]) -> DashboardStats:
    statuses = [_norm(r.status) for r in requests]
    return DashboardStats(
        total=len(statuses),
        open=sum(1 for s in statuses if s in OPEN_STATUSES),
        pending=sum(1 for s in statuses if PENDING_MARKER in s),
        resolved=sum(1 for s in statuses if s in RESOLVED_STATUSES),
    )


def recent_requests(requests: Sequence[ServiceDeskRequest], limit: int = 3) -> List[ServiceDeskRequest]:
    return list(requests[: max(0, int(limit))])


def find_request(requests: Sequence[ServiceDeskRequest], issue_key: str) -> Optional[ServiceDeskRequest]:
    for r in requests:
        if r.issue_key == issue_key:
            return r
    return None


def request_name(request: ServiceDeskRequest) -> str:
    summary = request.get_field("summary")
    if summary is not None and summary.value.display():
        return summary.value.display()
    for f in request.field_values:
        if f.label.lower() == "résumé" and f.value.display():
            return f.value.display()
    return request.issue_key or "Untitled Request"


def initials(display_name: Optional[str]) -> str:
    if not display_name:
        return "??"
    letters = "".join(part[0] for part in display_name.split(" ") if part)
    return letters.upper()[:2] or "??"


def format_epoch(epoch_millis: Optional[int]) -> Optional[str]:
    if epoch_millis is None:
        return None
    try:
        dt = datetime.fromtimestamp(int(epoch_millis) / 1000, tz=timezone.utc)
        return dt.astimezone().strftime("%b %d, %Y %H:%M")
    except (OverflowError, OSError, ValueError):
        return None


def format_epoch_date(epoch_millis: Optional[int]) -> Optional[str]:
    if epoch_millis is None:
        return None
    try:
        dt = datetime.fromtimestamp(int(epoch_millis) / 1000, tz=timezone.utc)
        return dt.astimezone().strftime("%Y-%m-%d")
    except (OverflowError, OSError, ValueError):
        return None
