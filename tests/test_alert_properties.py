"""Ordering, determinism and exclusion properties of the alert feed."""

from datetime import date, timedelta

import pytest

from comexwatch.alerts.alert_builder import derive_alerts
from comexwatch.alerts.alert_models import AlertPriority, AlertType
from comexwatch.domain.records import (
    Container,
    ContainerStatus,
    CostItem,
    ImportProcess,
    Invoice,
    InvoiceStatus,
    PaymentStatus,
    Task,
    TaskPriority,
    TaskStatus,
)

PRIORITY_RANK = {AlertPriority.LOW: 0, AlertPriority.MEDIUM: 1, AlertPriority.HIGH: 2}


def _derive(snapshot, today):
    return derive_alerts(
        snapshot.imports, snapshot.invoices, snapshot.tasks, snapshot.users, today=today
    )


def test_feed_is_ordered_by_due_date(snapshot, today):
    alerts = _derive(snapshot, today)

    due_dates = [a.due_date for a in alerts]
    assert due_dates == sorted(due_dates)


def test_equal_due_dates_keep_category_precedence(today):
    """Demurrage, then payment, then invoice, then task when due dates tie."""
    shared = today - timedelta(days=1)
    imp = ImportProcess(
        id="IMP-1",
        import_number="IMP-2024-001",
        containers=[
            Container(
                id="C1",
                container_number="MSCU1234567",
                current_status=ContainerStatus.AT_PORT,
                seaport_arrival_date=(shared - timedelta(days=3)).isoformat(),
                demurrage_free_days=3,
            )
        ],
        costs=[
            CostItem(id="K1", description="Port fees", due_date=shared.isoformat(), status=PaymentStatus.APPROVED)
        ],
    )
    invoice = Invoice(
        id="INV-1",
        invoice_number="1",
        supplier_name="Acme",
        due_date=shared.isoformat(),
        status=InvoiceStatus.APPROVED,
    )
    task = Task(
        id="T-1",
        description="Follow up",
        status=TaskStatus.PENDING,
        priority=TaskPriority.LOW,
        due_date=shared.isoformat(),
    )

    alerts = derive_alerts([imp], [invoice], [task], [], today=today)

    assert [a.type for a in alerts] == [
        AlertType.DEMURRAGE,
        AlertType.PAYMENT_OVERDUE,
        AlertType.INVOICE_OVERDUE,
        AlertType.TASK_OVERDUE,
    ]


def test_derivation_is_idempotent(snapshot, today):
    first = _derive(snapshot, today)
    second = _derive(snapshot, today)

    assert first == second
    assert [a.key for a in first] == [a.key for a in second]


def test_keys_are_unique(snapshot, today):
    keys = [a.key for a in _derive(snapshot, today)]

    assert len(keys) == len(set(keys))


def test_demurrage_priority_never_drops_as_time_advances():
    arrival = date(2024, 6, 1)
    imp = ImportProcess(
        id="IMP-1",
        import_number="IMP-2024-001",
        containers=[
            Container(
                id="C1",
                container_number="MSCU1234567",
                current_status=ContainerStatus.DISCHARGED,
                seaport_arrival_date=arrival.isoformat(),
                demurrage_free_days=14,
            )
        ],
    )

    ranks = []
    for offset in range(0, 30):
        alerts = derive_alerts([imp], [], [], [], today=arrival + timedelta(days=offset))
        if alerts:
            ranks.append(PRIORITY_RANK[alerts[0].priority])

    assert ranks, "container should enter the alert window"
    assert ranks == sorted(ranks)
    assert ranks[-1] == PRIORITY_RANK[AlertPriority.HIGH]


@pytest.mark.parametrize("status", [PaymentStatus.PAID, PaymentStatus.CANCELLED])
@pytest.mark.parametrize("offset", [-60, -1, 0, 3, 90])
def test_settled_costs_never_alert(today, status, offset):
    imp = ImportProcess(
        id="IMP-1",
        import_number="IMP-2024-001",
        costs=[
            CostItem(
                id="K1",
                description="Ocean freight",
                due_date=(today + timedelta(days=offset)).isoformat(),
                status=status,
            )
        ],
    )

    assert derive_alerts([imp], [], [], [], today=today) == []


@pytest.mark.parametrize(
    "status",
    [
        ContainerStatus.AT_PORT,
        ContainerStatus.CUSTOMS_CLEARED,
        ContainerStatus.AWAITING_DISCHARGE,
        ContainerStatus.DISCHARGING,
        ContainerStatus.DISCHARGED,
        ContainerStatus.AWAITING_PICKUP,
    ],
)
def test_container_without_free_days_never_alerts(today, status):
    imp = ImportProcess(
        id="IMP-1",
        import_number="IMP-2024-001",
        containers=[
            Container(
                id="C1",
                container_number="MSCU1234567",
                current_status=status,
                seaport_arrival_date=(today - timedelta(days=40)).isoformat(),
            )
        ],
    )

    assert derive_alerts([imp], [], [], [], today=today) == []
