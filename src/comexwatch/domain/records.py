"""Operational records consumed by the alert engine.

These models mirror the records kept by the import-management store. Python
attributes are snake_case; the camelCase keys used by the store
(``importNumber``, ``seaportArrivalDate``, ...) are accepted on input.

Date fields stay as the raw stored strings. Parsing happens where a date is
evaluated, so one malformed value only disables the rule that needs it.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContainerStatus(str, Enum):
    """Yard and seaport states of a container as one closed set."""

    ON_VESSEL = "On Vessel"
    AT_PORT = "At Port"
    CUSTOMS_CLEARED = "Cleared Customs"
    IN_TRANSIT_TO_FACTORY = "In Transit to Factory"
    DELIVERED_TO_FACTORY = "Delivered to Factory"
    SENT_TO_DEPOT = "Sent to Depot"
    AWAITING_DISCHARGE = "Awaiting Discharge"
    DISCHARGING = "Discharging"
    DISCHARGED = "Discharged"
    AWAITING_PICKUP = "Awaiting Inland Pickup"
    PICKED_UP = "Picked Up by Inland Carrier"


# Containers still at the port and waiting to move on; only these accrue demurrage.
DEMURRAGE_RISK_STATUSES = frozenset(
    {
        ContainerStatus.AT_PORT,
        ContainerStatus.CUSTOMS_CLEARED,
        ContainerStatus.AWAITING_DISCHARGE,
        ContainerStatus.DISCHARGING,
        ContainerStatus.DISCHARGED,
        ContainerStatus.AWAITING_PICKUP,
    }
)


class PaymentStatus(str, Enum):
    PENDING_APPROVAL = "Pending Approval"
    APPROVED = "Approved"
    PROCESSED = "Processed"
    RECONCILED = "Reconciled"
    PAID = "Paid"
    DISPUTED = "Disputed"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"


SETTLED_PAYMENT_STATUSES = frozenset({PaymentStatus.PAID, PaymentStatus.CANCELLED})


class InvoiceStatus(str, Enum):
    DRAFT = "Draft"
    PENDING_APPROVAL = "Pending Approval"
    APPROVED = "Approved"
    PARTIALLY_PAID = "Partially Paid"
    PAID = "Paid"
    CANCELLED = "Cancelled"


class TaskStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    BLOCKED = "Blocked"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Container(Record):
    id: str
    container_number: str
    current_status: ContainerStatus
    seaport_arrival_date: Optional[str] = None
    demurrage_free_days: Optional[int] = Field(default=None, ge=0)


class CostItem(Record):
    id: str
    category: str = "Other"
    description: str = ""
    value: float = 0.0
    currency: str = "USD"
    due_date: Optional[str] = None
    status: PaymentStatus


class ImportProcess(Record):
    id: str
    import_number: str
    containers: List[Container] = []
    costs: List[CostItem] = []


class Invoice(Record):
    id: str
    invoice_number: str
    supplier_name: str
    due_date: str
    status: InvoiceStatus


class Task(Record):
    id: str
    description: str
    status: TaskStatus
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[str] = None
    assigned_to_id: Optional[str] = None


class User(Record):
    id: str
    name: str


class Snapshot(Record):
    """Point-in-time view of every collection the alert engine reads."""

    imports: List[ImportProcess] = []
    invoices: List[Invoice] = []
    tasks: List[Task] = []
    users: List[User] = []
