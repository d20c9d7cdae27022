"""
Shared fixtures: in-memory SQLite database and a seeded remodeling project.
"""
import os

os.environ.setdefault("JOBCOST_DATABASE_URL", "sqlite://")

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobcost.models import (
    Base, Company, Project, Trade, Worker, CostCodeEntity,
    ProjectBudget, ProjectBudgetLine, TimeLog, Cost, SubInvoice,
    MaterialReceipt, ScheduledShiftEntity,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def engine():
    """Fresh in-memory database shared across connections of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded(db):
    """
    One company, two projects, two workers and a kitchen remodel budget.

    Kitchen remodel actuals (March 2024):
      ELEC-L labor  Ana  8h @ $50 paid, 4h @ $50 unpaid     = $600
      ELEC-M cost   $250 materials (costs table)
      PLUM-S sub    $1,000 invoice
      receipt       $300 materials, no cost code (unassigned)
      linked receipt $999 excluded (already in costs)
      labor         Ben  2h @ $30, dangling cost code (unassigned labor) = $60
    """
    company = Company(id="co-1", name="Acme Remodeling")
    other_company = Company(id="co-2", name="Beta Builders")
    kitchen = Project(id="proj-1", name="Kitchen Remodel", code="K-001", company_id="co-1")
    bath = Project(id="proj-2", name="Bath Remodel", code="B-001", company_id="co-2")

    elec = Trade(id="trade-elec", name="Electrical", key="ELEC")
    plum = Trade(id="trade-plum", name="Plumbing", key="PLUM")

    ana = Worker(id="w-ana", name="Ana", trade_id="trade-elec", hourly_rate_cents=5000)
    ben = Worker(id="w-ben", name="Ben", hourly_rate_cents=3000)

    codes = [
        CostCodeEntity(id="cc-elec-l", code="ELEC-L", name="Labor – Electrical",
                       category="labor", trade_id="trade-elec"),
        CostCodeEntity(id="cc-elec-m", code="ELEC-M", name="Materials – Electrical",
                       category="materials", trade_id="trade-elec"),
        CostCodeEntity(id="cc-plum-s", code="PLUM-S", name="Subcontract – Plumbing",
                       category="subs", trade_id="trade-plum"),
    ]

    budget = ProjectBudget(id="budget-1", project_id="proj-1")
    lines = [
        ProjectBudgetLine(id="bl-1", project_budget_id="budget-1", project_id="proj-1",
                          cost_code_id="cc-elec-l", category="labor",
                          description="Electrician labor", budget_amount_cents=50000,
                          budget_hours=10),
        ProjectBudgetLine(id="bl-2", project_budget_id="budget-1", project_id="proj-1",
                          cost_code_id="cc-plum-s", category="subs",
                          description="Plumbing sub", budget_amount_cents=120000),
        ProjectBudgetLine(id="bl-3", project_budget_id="budget-1", project_id="proj-1",
                          cost_code_id=None, category="other",
                          description="Contingency", budget_amount_cents=20000),
    ]

    time_logs = [
        TimeLog(id="tl-1", worker_id="w-ana", project_id="proj-1", cost_code_id="cc-elec-l",
                date=date(2024, 3, 11), hours_worked=8, labor_cost_cents=32000,
                payment_status="paid"),
        TimeLog(id="tl-2", worker_id="w-ana", project_id="proj-1", cost_code_id="cc-elec-l",
                date=date(2024, 3, 12), hours_worked=4, labor_cost_cents=16000,
                payment_status="unpaid"),
        TimeLog(id="tl-3", worker_id="w-ben", project_id="proj-1", cost_code_id="cc-gone",
                date=date(2024, 3, 13), hours_worked=2, labor_cost_cents=None,
                payment_status=None),
        TimeLog(id="tl-4", worker_id="w-ben", project_id="proj-2", cost_code_id=None,
                date=date(2024, 3, 13), hours_worked=5, payment_status="unpaid"),
    ]

    cost = Cost(id="cost-1", project_id="proj-1", company_id="co-1", cost_code_id="cc-elec-m",
                category="materials", amount_cents=25000, date_incurred=date(2024, 3, 12))
    invoice = SubInvoice(id="inv-1", project_id="proj-1", cost_code_id="cc-plum-s",
                         invoice_date=date(2024, 3, 14), total_cents=100000)
    receipts = [
        MaterialReceipt(id="rc-1", project_id="proj-1", receipt_date=date(2024, 3, 12),
                        total_cents=30000),
        MaterialReceipt(id="rc-2", project_id="proj-1", receipt_date=date(2024, 3, 12),
                        total_cents=99900, linked_cost_id="cost-1"),
    ]

    shifts = [
        ScheduledShiftEntity(id="sh-1", worker_id="w-ben", project_id="proj-1",
                             scheduled_date=date(2024, 3, 13), scheduled_hours=4),
        ScheduledShiftEntity(id="sh-2", worker_id="w-ben", project_id="proj-2",
                             scheduled_date=date(2024, 3, 13), scheduled_hours=5),
        ScheduledShiftEntity(id="sh-3", worker_id="w-ana", project_id="proj-1",
                             scheduled_date=date(2024, 3, 14), scheduled_hours=8),
    ]

    db.add_all([company, other_company, kitchen, bath, elec, plum, ana, ben])
    db.flush()
    db.add_all(codes + [budget])
    db.flush()
    db.add_all(lines + time_logs + [cost, invoice])
    db.flush()
    db.add_all(receipts + shifts)
    db.commit()
    return db
