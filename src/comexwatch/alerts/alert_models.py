from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AlertType(str, Enum):
    DEMURRAGE = "demurrage"
    PAYMENT_DUE_SOON = "payment_due_soon"
    PAYMENT_OVERDUE = "payment_overdue"
    INVOICE_APPROVAL = "invoice_approval"
    INVOICE_OVERDUE = "invoice_overdue"
    TASK_OVERDUE = "task_overdue"


class AlertPriority(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class AlertReference(BaseModel):
    link: str
    text: str


class AlertItem(BaseModel):
    type: AlertType
    priority: AlertPriority
    message: str
    due_date: Optional[date] = None  # drives urgency and sort position; None sorts last
    reference: AlertReference
    key: str


class AlertRules(BaseModel):
    """Day windows used by the detection rules."""
    demurrage_window_days: int = Field(default=10, ge=0)
    demurrage_high_days: int = Field(default=3, ge=0)
    payment_due_soon_days: int = Field(default=7, ge=0)
