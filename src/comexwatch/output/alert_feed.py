"""Alert feed summaries and renderers for the CLI."""

import json
from datetime import date
from typing import Dict, List, Optional

from ..alerts.alert_models import AlertItem, AlertPriority, AlertType
from ..alerts.demurrage import DemurrageExposure

# Icon and color tag per alert type, for whatever renders the feed.
ALERT_META: Dict[AlertType, Dict[str, str]] = {
    AlertType.DEMURRAGE: {"icon": "alert-triangle", "color": "amber"},
    AlertType.PAYMENT_DUE_SOON: {"icon": "dollar-sign", "color": "orange"},
    AlertType.PAYMENT_OVERDUE: {"icon": "dollar-sign", "color": "red"},
    AlertType.INVOICE_APPROVAL: {"icon": "file-warning", "color": "purple"},
    AlertType.INVOICE_OVERDUE: {"icon": "file-warning", "color": "red"},
    AlertType.TASK_OVERDUE: {"icon": "list-checks", "color": "red"},
}

ALL_CLEAR_MESSAGE = "All clear! No critical alerts at the moment."


def filter_by_priority(alerts: List[AlertItem], priority: Optional[str]) -> List[AlertItem]:
    if not priority:
        return alerts
    wanted = AlertPriority(priority.upper())
    return [a for a in alerts if a.priority == wanted]


def _cell(text: str) -> str:
    """Escape a value for a Markdown table cell."""
    return text.replace("|", "\\|")


def _alert_to_dict(alert: AlertItem) -> Dict:
    """Convert an AlertItem to a plain dict with its presentation metadata."""
    payload = alert.model_dump(mode="json")
    payload["meta"] = dict(ALERT_META[alert.type])
    return payload


def generate_feed(alerts: List[AlertItem], today: date) -> Dict:
    """
    Build the feed data structure.

    Args:
        alerts: Alerts already ordered by due date
        today: Reference date the alerts were derived for

    Returns:
        Dict with counts and the alert list
    """
    by_priority = {p.value: 0 for p in AlertPriority}
    by_type = {t.value: 0 for t in AlertType}
    for alert in alerts:
        by_priority[alert.priority.value] += 1
        by_type[alert.type.value] += 1

    return {
        "today": today.isoformat(),
        "all_clear": not alerts,
        "counts": {
            "total": len(alerts),
            "by_priority": by_priority,
            "by_type": by_type,
        },
        "alerts": [_alert_to_dict(a) for a in alerts],
    }


def render_markdown(feed: Dict) -> str:
    """Render feed data as markdown."""
    lines = []

    lines.append(f"# Comex Early Warning System — {feed['today']}")
    lines.append("")

    if feed["all_clear"]:
        lines.append(f"**{ALL_CLEAR_MESSAGE}**")
        lines.append("")
        return "\n".join(lines)

    counts = feed["counts"]
    by_priority = counts["by_priority"]
    lines.append("## Summary")
    lines.append("")
    lines.append(f"- **Total:** {counts['total']}")
    lines.append(
        f"- **High:** {by_priority['HIGH']} | "
        f"**Medium:** {by_priority['MEDIUM']} | "
        f"**Low:** {by_priority['LOW']}"
    )
    lines.append("")

    lines.append("## Alerts")
    lines.append("")
    lines.append("| Priority | Alert Details | Due Date | Reference |")
    lines.append("| --- | --- | --- | --- |")
    for alert in feed["alerts"]:
        reference = alert["reference"]
        lines.append(
            f"| {alert['priority']} | {_cell(alert['message'])} | {alert['due_date'] or '-'} | "
            f"[{_cell(reference['text'])}]({reference['link']}) |"
        )
    lines.append("")

    return "\n".join(lines)


def render_json(feed: Dict) -> str:
    """Render feed data as JSON."""
    return json.dumps(feed, indent=2)


def render_demurrage_markdown(rows: List[DemurrageExposure], today: date) -> str:
    lines = [f"# Demurrage Control — {today.isoformat()}", ""]
    if not rows:
        lines.append("No containers currently at risk of demurrage.")
        lines.append("")
        return "\n".join(lines)

    lines.append("| Import | Container | Arrival | Free Time Ends | Days Remaining | |")
    lines.append("| --- | --- | --- | --- | --- | --- |")
    for row in rows:
        if row.is_active:
            flag = "ACTIVE"
        elif row.is_critical:
            flag = "CRITICAL"
        elif row.in_alert_window:
            flag = "WATCH"
        else:
            flag = ""
        lines.append(
            f"| {_cell(row.import_number)} | {_cell(row.container_number)} | {row.arrival_date.isoformat()} | "
            f"{row.demurrage_start.isoformat()} | {row.days_remaining} | {flag} |"
        )
    lines.append("")
    return "\n".join(lines)


def render_demurrage_json(rows: List[DemurrageExposure], today: date) -> str:
    return json.dumps(
        {
            "today": today.isoformat(),
            "containers": [row.model_dump(mode="json") for row in rows],
        },
        indent=2,
    )
