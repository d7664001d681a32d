"""Repository for reading and writing record snapshots."""

from typing import Dict

from sqlalchemy.orm import Session

from comexwatch.database.schema import (
    ContainerRow,
    CostRow,
    ImportRow,
    InvoiceRow,
    TaskRow,
    UserRow,
)
from comexwatch.domain.records import (
    Container,
    CostItem,
    ImportProcess,
    Invoice,
    Snapshot,
    Task,
    User,
)
from comexwatch.utils.logging import get_logger

logger = get_logger(__name__)


def _import_to_row(imp: ImportProcess) -> ImportRow:
    row = ImportRow(import_id=imp.id, import_number=imp.import_number)
    row.containers = [
        ContainerRow(
            container_id=c.id,
            position=i,
            container_number=c.container_number,
            current_status=c.current_status.value,
            seaport_arrival_date=c.seaport_arrival_date,
            demurrage_free_days=c.demurrage_free_days,
        )
        for i, c in enumerate(imp.containers)
    ]
    row.costs = [
        CostRow(
            cost_id=cost.id,
            position=i,
            category=cost.category,
            description=cost.description,
            value=cost.value,
            currency=cost.currency,
            due_date=cost.due_date,
            status=cost.status.value,
        )
        for i, cost in enumerate(imp.costs)
    ]
    return row


def _row_to_import(row: ImportRow) -> ImportProcess:
    return ImportProcess(
        id=row.import_id,
        import_number=row.import_number,
        containers=[
            Container(
                id=c.container_id,
                container_number=c.container_number,
                current_status=c.current_status,
                seaport_arrival_date=c.seaport_arrival_date,
                demurrage_free_days=c.demurrage_free_days,
            )
            for c in row.containers
        ],
        costs=[
            CostItem(
                id=c.cost_id,
                category=c.category,
                description=c.description,
                value=c.value,
                currency=c.currency,
                due_date=c.due_date,
                status=c.status,
            )
            for c in row.costs
        ],
    )


def save_snapshot(session: Session, snapshot: Snapshot) -> Dict[str, int]:
    """
    Upsert every record of a snapshot by id.

    An import is replaced as a whole, so containers and costs that are no
    longer listed on it are removed.

    Args:
        session: SQLAlchemy session
        snapshot: Records to store

    Returns:
        Dict with counts per collection
    """
    for imp in snapshot.imports:
        existing = session.get(ImportRow, imp.id)
        if existing:
            session.delete(existing)
            session.flush()
            logger.debug(f"Replacing import: {imp.id}")
        session.add(_import_to_row(imp))

    for invoice in snapshot.invoices:
        session.merge(
            InvoiceRow(
                invoice_id=invoice.id,
                invoice_number=invoice.invoice_number,
                supplier_name=invoice.supplier_name,
                due_date=invoice.due_date,
                status=invoice.status.value,
            )
        )

    for task in snapshot.tasks:
        session.merge(
            TaskRow(
                task_id=task.id,
                description=task.description,
                status=task.status.value,
                priority=task.priority.value,
                due_date=task.due_date,
                assigned_to_id=task.assigned_to_id,
            )
        )

    for user in snapshot.users:
        session.merge(UserRow(user_id=user.id, name=user.name))

    session.flush()
    counts = {
        "imports": len(snapshot.imports),
        "invoices": len(snapshot.invoices),
        "tasks": len(snapshot.tasks),
        "users": len(snapshot.users),
    }
    logger.info(f"Stored snapshot: {counts}")
    return counts


def load_snapshot(session: Session) -> Snapshot:
    """Read every stored record into a Snapshot, ordered by id."""
    imports = [
        _row_to_import(row)
        for row in session.query(ImportRow).order_by(ImportRow.import_id).all()
    ]
    invoices = [
        Invoice(
            id=row.invoice_id,
            invoice_number=row.invoice_number,
            supplier_name=row.supplier_name,
            due_date=row.due_date,
            status=row.status,
        )
        for row in session.query(InvoiceRow).order_by(InvoiceRow.invoice_id).all()
    ]
    tasks = [
        Task(
            id=row.task_id,
            description=row.description,
            status=row.status,
            priority=row.priority,
            due_date=row.due_date,
            assigned_to_id=row.assigned_to_id,
        )
        for row in session.query(TaskRow).order_by(TaskRow.task_id).all()
    ]
    users = [
        User(id=row.user_id, name=row.name)
        for row in session.query(UserRow).order_by(UserRow.user_id).all()
    ]
    return Snapshot(imports=imports, invoices=invoices, tasks=tasks, users=users)
