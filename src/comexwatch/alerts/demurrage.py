"""Demurrage exposure of containers waiting at the port."""

from datetime import date, timedelta
from typing import Iterable, List, Optional

from pydantic import BaseModel

from ..domain.records import DEMURRAGE_RISK_STATUSES, Container, ImportProcess
from ..utils.logging import get_logger
from ..utils.time import days_between, parse_calendar_date, resolve_today
from .alert_models import AlertRules

logger = get_logger(__name__)


class DemurrageExposure(BaseModel):
    import_id: str
    import_number: str
    container_id: str
    container_number: str
    arrival_date: date
    demurrage_start: date
    days_remaining: int
    is_active: bool
    in_alert_window: bool
    is_critical: bool


def demurrage_start_date(container: Container) -> Optional[date]:
    """
    Date per-diem charges begin: seaport arrival plus free days.

    Returns None when the arrival date or the free-days count is missing, or
    the arrival date cannot be parsed.
    """
    if container.demurrage_free_days is None or not container.seaport_arrival_date:
        return None
    arrival = parse_calendar_date(container.seaport_arrival_date)
    if arrival is None:
        logger.debug(
            f"Unparseable seaport arrival date for container {container.id}: "
            f"{container.seaport_arrival_date!r}"
        )
        return None
    return arrival + timedelta(days=container.demurrage_free_days)


def is_demurrage_eligible(container: Container) -> bool:
    return container.current_status in DEMURRAGE_RISK_STATUSES


def build_demurrage_board(
    imports: Iterable[ImportProcess],
    today: Optional[date] = None,
    rules: Optional[AlertRules] = None,
) -> List[DemurrageExposure]:
    """
    List every container at the port that can be evaluated for demurrage.

    Unlike the alert feed, the board keeps containers outside the alert window
    and flags them instead. Rows are sorted by days remaining, most urgent first.
    """
    today = resolve_today(today)
    rules = rules or AlertRules()

    rows: List[DemurrageExposure] = []
    for imp in imports:
        for container in imp.containers:
            if not is_demurrage_eligible(container):
                continue
            start = demurrage_start_date(container)
            if start is None:
                continue
            days_remaining = days_between(today, start)
            rows.append(
                DemurrageExposure(
                    import_id=imp.id,
                    import_number=imp.import_number,
                    container_id=container.id,
                    container_number=container.container_number,
                    arrival_date=start - timedelta(days=container.demurrage_free_days),
                    demurrage_start=start,
                    days_remaining=days_remaining,
                    is_active=start < today,
                    in_alert_window=days_remaining <= rules.demurrage_window_days,
                    is_critical=days_remaining <= rules.demurrage_high_days,
                )
            )

    return sorted(rows, key=lambda row: row.days_remaining)
