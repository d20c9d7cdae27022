"""
Database models and SQLAlchemy setup for the Job Cost Ledger.

Only the tables the rollup reads are modelled. All monetary values are
stored as integer cents to avoid float drift.
"""
import uuid
from datetime import datetime
from sqlalchemy import (
    create_engine, Column, Integer, String, Float, Boolean,
    DateTime, Date, Text, ForeignKey
)
from sqlalchemy.orm import declarative_base, sessionmaker, relationship

from jobcost.config import get_config

DATABASE_URL = get_config().database_url
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def new_id() -> str:
    return str(uuid.uuid4())


class Company(Base):
    """Paying entity; projects and time logs roll up to a company."""
    __tablename__ = "companies"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    projects = relationship("Project", back_populates="company")


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    code = Column(String(50), index=True, nullable=True)
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=True, index=True)
    status = Column(String(30), default="active")
    created_at = Column(DateTime, default=datetime.utcnow)

    company = relationship("Company", back_populates="projects")
    budget = relationship("ProjectBudget", back_populates="project", uselist=False,
                          cascade="all, delete-orphan")


class Trade(Base):
    __tablename__ = "trades"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    key = Column(String(20), nullable=True)  # e.g. ELEC, PLUM
    created_at = Column(DateTime, default=datetime.utcnow)

    cost_codes = relationship("CostCodeEntity", back_populates="trade")


class Worker(Base):
    """Field worker; hourly_rate_cents is the *current* rate."""
    __tablename__ = "workers"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    trade_id = Column(String(36), ForeignKey("trades.id"), nullable=True)
    hourly_rate_cents = Column(Integer, nullable=False, default=0)
    active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class CostCodeEntity(Base):
    __tablename__ = "cost_codes"

    id = Column(String(36), primary_key=True, default=new_id)
    code = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(200), nullable=False)
    category = Column(String(30), nullable=False, default="other")
    trade_id = Column(String(36), ForeignKey("trades.id"), nullable=True, index=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    trade = relationship("Trade", back_populates="cost_codes")


# =============================================================================
# Budget (one header per project, many lines)
# =============================================================================

class ProjectBudget(Base):
    __tablename__ = "project_budgets"

    id = Column(String(36), primary_key=True, default=new_id)
    project_id = Column(String(36), ForeignKey("projects.id"), unique=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    project = relationship("Project", back_populates="budget")
    lines = relationship("ProjectBudgetLine", back_populates="budget", cascade="all, delete-orphan")


class ProjectBudgetLine(Base):
    __tablename__ = "project_budget_lines"

    id = Column(String(36), primary_key=True, default=new_id)
    project_budget_id = Column(String(36), ForeignKey("project_budgets.id"), nullable=False, index=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    cost_code_id = Column(String(36), ForeignKey("cost_codes.id"), nullable=True)
    category = Column(String(30), nullable=False, default="other")
    description = Column(Text, nullable=True)
    budget_amount_cents = Column(Integer, nullable=False, default=0)
    budget_hours = Column(Float, nullable=True)

    budget = relationship("ProjectBudget", back_populates="lines")


# =============================================================================
# Actual cost sources
# =============================================================================

class TimeLog(Base):
    """
    Hours worked. labor_cost_cents is the cost snapshot written at entry
    time; the rollup recomputes from the worker's current rate by default.
    """
    __tablename__ = "time_logs"

    id = Column(String(36), primary_key=True, default=new_id)
    worker_id = Column(String(36), ForeignKey("workers.id"), nullable=False, index=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=True)  # override
    cost_code_id = Column(String(36), nullable=True)  # not enforced; may dangle
    date = Column(Date, nullable=False, index=True)
    hours_worked = Column(Float, nullable=False, default=0)
    labor_cost_cents = Column(Integer, nullable=True)
    payment_status = Column(String(20), nullable=True, default="unpaid")
    notes = Column(Text, nullable=True)

    worker = relationship("Worker")
    project = relationship("Project")


class Cost(Base):
    """Non-labor costs entered directly (subs, materials, misc)."""
    __tablename__ = "costs"

    id = Column(String(36), primary_key=True, default=new_id)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=True)
    cost_code_id = Column(String(36), nullable=True)
    category = Column(String(30), nullable=True)
    description = Column(Text, nullable=True)
    amount_cents = Column(Integer, nullable=False, default=0)
    date_incurred = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=True, default="unpaid")


class SubInvoice(Base):
    __tablename__ = "sub_invoices"

    id = Column(String(36), primary_key=True, default=new_id)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    subcontractor_name = Column(String(200), nullable=True)
    cost_code_id = Column(String(36), nullable=True)
    invoice_number = Column(String(50), nullable=True)
    invoice_date = Column(Date, nullable=False, index=True)
    total_cents = Column(Integer, nullable=False, default=0)
    payment_status = Column(String(20), nullable=True, default="unpaid")


class MaterialReceipt(Base):
    """Receipts linked to a cost row are already counted through costs."""
    __tablename__ = "material_receipts"

    id = Column(String(36), primary_key=True, default=new_id)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    vendor = Column(String(200), nullable=True)
    cost_code_id = Column(String(36), nullable=True)
    receipt_date = Column(Date, nullable=False, index=True)
    total_cents = Column(Integer, nullable=False, default=0)
    linked_cost_id = Column(String(36), ForeignKey("costs.id"), nullable=True)


class ScheduledShiftEntity(Base):
    __tablename__ = "scheduled_shifts"

    id = Column(String(36), primary_key=True, default=new_id)
    worker_id = Column(String(36), ForeignKey("workers.id"), nullable=False, index=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    scheduled_date = Column(Date, nullable=False, index=True)
    scheduled_hours = Column(Float, nullable=False, default=8)
    status = Column(String(20), nullable=True, default="planned")

    worker = relationship("Worker")
    project = relationship("Project")


def init_db():
    """Initialize the database and create all tables."""
    Base.metadata.create_all(bind=engine)


def get_db():
    """Database session dependency for FastAPI."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
