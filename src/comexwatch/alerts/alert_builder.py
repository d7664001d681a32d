from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from ..domain.records import (
    SETTLED_PAYMENT_STATUSES,
    ImportProcess,
    Invoice,
    InvoiceStatus,
    Task,
    TaskStatus,
    User,
)
from ..utils.logging import get_logger
from ..utils.time import days_between, parse_calendar_date, resolve_today
from .alert_models import AlertItem, AlertPriority, AlertReference, AlertRules, AlertType
from .demurrage import demurrage_start_date, is_demurrage_eligible

logger = get_logger(__name__)

UNASSIGNED_LABEL = "Unassigned"


def _import_reference(imp: ImportProcess) -> AlertReference:
    return AlertReference(link=f"/imports/{imp.id}", text=imp.import_number)


def _invoice_reference(invoice: Invoice) -> AlertReference:
    return AlertReference(
        link=f"/payments?invoiceId={invoice.id}",
        text=f"Invoice #{invoice.invoice_number}",
    )


def build_demurrage_alerts(
    imports: Iterable[ImportProcess], today: date, rules: AlertRules
) -> List[AlertItem]:
    """
    Containers at the port whose free time ends within the alert window.

    Priority is HIGH once demurrage is running or starts within
    ``rules.demurrage_high_days``; otherwise MEDIUM.
    """
    alerts = []
    for imp in imports:
        for container in imp.containers:
            start = demurrage_start_date(container)
            if start is None:
                continue
            days_until = days_between(today, start)
            if not is_demurrage_eligible(container) or days_until > rules.demurrage_window_days:
                continue

            is_active = start < today
            if is_active or days_until <= rules.demurrage_high_days:
                priority = AlertPriority.HIGH
            else:
                priority = AlertPriority.MEDIUM

            if is_active:
                message = (
                    f"Demurrage active for container {container.container_number} "
                    f"({imp.import_number})!"
                )
            else:
                message = (
                    f"Demurrage starts in {days_until} day(s) for "
                    f"{container.container_number} ({imp.import_number})"
                )

            alerts.append(
                AlertItem(
                    type=AlertType.DEMURRAGE,
                    priority=priority,
                    message=message,
                    due_date=start,
                    reference=_import_reference(imp),
                    key=f"{imp.id}-{container.id}-demurrage",
                )
            )
    return alerts


def build_payment_alerts(
    imports: Iterable[ImportProcess], today: date, rules: AlertRules
) -> List[AlertItem]:
    """Unsettled cost items that are overdue or due within the payment window."""
    alerts = []
    for imp in imports:
        for cost in imp.costs:
            if not cost.due_date or cost.status in SETTLED_PAYMENT_STATUSES:
                continue
            due = parse_calendar_date(cost.due_date)
            if due is None:
                logger.debug(f"Unparseable due date on cost {cost.id} ({imp.import_number}): {cost.due_date!r}")
                continue

            if due < today:
                alerts.append(
                    AlertItem(
                        type=AlertType.PAYMENT_OVERDUE,
                        priority=AlertPriority.HIGH,
                        message=(
                            f"Payment for '{cost.description}' ({imp.import_number}) is "
                            f"{days_between(due, today)} day(s) overdue"
                        ),
                        due_date=due,
                        reference=_import_reference(imp),
                        key=f"{imp.id}-{cost.id}-payment-overdue",
                    )
                )
            elif days_between(today, due) <= rules.payment_due_soon_days:
                alerts.append(
                    AlertItem(
                        type=AlertType.PAYMENT_DUE_SOON,
                        priority=AlertPriority.MEDIUM,
                        message=(
                            f"Payment for '{cost.description}' ({imp.import_number}) due in "
                            f"{days_between(today, due)} day(s)"
                        ),
                        due_date=due,
                        reference=_import_reference(imp),
                        key=f"{imp.id}-{cost.id}-payment-due-soon",
                    )
                )
    return alerts


def build_invoice_alerts(invoices: Iterable[Invoice], today: date) -> List[AlertItem]:
    """Invoices waiting for approval, and approved invoices past their due date."""
    alerts = []
    for invoice in invoices:
        if invoice.status not in (InvoiceStatus.PENDING_APPROVAL, InvoiceStatus.APPROVED):
            continue
        due = parse_calendar_date(invoice.due_date)
        if due is None:
            logger.debug(f"Unparseable due date on invoice {invoice.id}: {invoice.due_date!r}")

        # Approval does not depend on the due date; an undated request sorts last
        if invoice.status == InvoiceStatus.PENDING_APPROVAL:
            alerts.append(
                AlertItem(
                    type=AlertType.INVOICE_APPROVAL,
                    priority=AlertPriority.HIGH,
                    message=(
                        f"Invoice #{invoice.invoice_number} from {invoice.supplier_name} "
                        f"requires approval"
                    ),
                    due_date=due,
                    reference=_invoice_reference(invoice),
                    key=f"{invoice.id}-invoice-approval",
                )
            )
        elif due is not None and due < today:
            alerts.append(
                AlertItem(
                    type=AlertType.INVOICE_OVERDUE,
                    priority=AlertPriority.HIGH,
                    message=(
                        f"Approved invoice #{invoice.invoice_number} from "
                        f"{invoice.supplier_name} is overdue for payment!"
                    ),
                    due_date=due,
                    reference=_invoice_reference(invoice),
                    key=f"{invoice.id}-invoice-overdue",
                )
            )
    return alerts


def build_task_alerts(
    tasks: Iterable[Task], users: Iterable[User], today: date
) -> List[AlertItem]:
    """Open tasks past their due date, carrying the task's own priority."""
    names: Dict[str, str] = {user.id: user.name for user in users}
    alerts = []
    for task in tasks:
        if task.status == TaskStatus.COMPLETED or not task.due_date:
            continue
        due = parse_calendar_date(task.due_date)
        if due is None:
            logger.debug(f"Unparseable due date on task {task.id}: {task.due_date!r}")
            continue
        if due >= today:
            continue

        assignee = names.get(task.assigned_to_id or "") or UNASSIGNED_LABEL
        alerts.append(
            AlertItem(
                type=AlertType.TASK_OVERDUE,
                priority=AlertPriority(task.priority.value.upper()),
                message=f"Task for {assignee} is overdue: {task.description}",
                due_date=due,
                reference=AlertReference(link=f"/workflow?taskId={task.id}", text="View Task"),
                key=f"{task.id}-task-overdue",
            )
        )
    return alerts


def _sort_key(alert: AlertItem) -> Tuple[bool, date]:
    return (alert.due_date is None, alert.due_date or date.min)


def derive_alerts(
    imports: Iterable[ImportProcess],
    invoices: Iterable[Invoice],
    tasks: Iterable[Task],
    users: Iterable[User],
    today: Optional[date] = None,
    rules: Optional[AlertRules] = None,
) -> List[AlertItem]:
    """
    Build the unified alert feed from the current record snapshots.

    Nothing is persisted and no input is modified; calling again with the same
    snapshots and ``today`` gives the same list.

    Args:
        imports: Import processes with their containers and cost items
        invoices: Supplier invoices
        tasks: Workflow tasks
        users: User directory, used only to name task assignees
        today: Reference date; a datetime is reduced to its date. Defaults
            to the current UTC date.
        rules: Day windows. Defaults to ``AlertRules()``.

    Returns:
        Alerts ordered by due date, earliest first, with undated alerts
        last. Equal dates keep the order demurrage, payment, invoice, task.
    """
    today = resolve_today(today)
    rules = rules or AlertRules()
    imports = list(imports)

    alerts: List[AlertItem] = []
    alerts.extend(build_demurrage_alerts(imports, today, rules))
    alerts.extend(build_payment_alerts(imports, today, rules))
    alerts.extend(build_invoice_alerts(invoices, today))
    alerts.extend(build_task_alerts(tasks, users, today))

    logger.debug(f"Derived {len(alerts)} alerts for {today.isoformat()}")
    return sorted(alerts, key=_sort_key)
