"""SQLite tables mirroring the import-management store."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class ImportRow(Base):
    __tablename__ = "imports"

    import_id = Column(String, primary_key=True)
    import_number = Column(String, nullable=False)

    containers = relationship(
        "ContainerRow",
        back_populates="import_process",
        cascade="all, delete-orphan",
        order_by="ContainerRow.position",
    )
    costs = relationship(
        "CostRow",
        back_populates="import_process",
        cascade="all, delete-orphan",
        order_by="CostRow.position",
    )


class ContainerRow(Base):
    __tablename__ = "containers"

    import_id = Column(String, ForeignKey("imports.import_id"), primary_key=True)
    container_id = Column(String, primary_key=True)  # unique within its import
    position = Column(Integer, nullable=False, default=0)
    container_number = Column(String, nullable=False)
    current_status = Column(String, nullable=False)
    seaport_arrival_date = Column(String)  # YYYY-MM-DD
    demurrage_free_days = Column(Integer)

    import_process = relationship("ImportRow", back_populates="containers")


class CostRow(Base):
    __tablename__ = "costs"

    import_id = Column(String, ForeignKey("imports.import_id"), primary_key=True)
    cost_id = Column(String, primary_key=True)  # unique within its import
    position = Column(Integer, nullable=False, default=0)
    category = Column(String, nullable=False, default="Other")
    description = Column(Text, nullable=False, default="")
    value = Column(Float, nullable=False, default=0.0)
    currency = Column(String, nullable=False, default="USD")
    due_date = Column(String)  # YYYY-MM-DD
    status = Column(String, nullable=False)

    import_process = relationship("ImportRow", back_populates="costs")


class InvoiceRow(Base):
    __tablename__ = "invoices"

    invoice_id = Column(String, primary_key=True)
    invoice_number = Column(String, nullable=False)
    supplier_name = Column(String, nullable=False)
    due_date = Column(String, nullable=False)
    status = Column(String, nullable=False)


class TaskRow(Base):
    __tablename__ = "tasks"

    task_id = Column(String, primary_key=True)
    description = Column(Text, nullable=False)
    status = Column(String, nullable=False)
    priority = Column(String, nullable=False, default="Medium")
    due_date = Column(String)
    assigned_to_id = Column(String)


class UserRow(Base):
    __tablename__ = "users"

    user_id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
