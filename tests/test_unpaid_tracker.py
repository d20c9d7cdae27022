"""
Tests for unpaid labor tracking.
"""
import pytest
from decimal import Decimal

from jobcost.domain.entities import CostRecord, CostSource
from jobcost.domain.exceptions import ValidationError
from jobcost.domain.services import track_unpaid


def log(hours, rate, status, worker_id="W", project_id="P", company_id="C"):
    return CostRecord(
        source=CostSource.LABOR,
        project_id=project_id,
        category="labor",
        hours=Decimal(str(hours)),
        hourly_rate=Decimal(str(rate)),
        payment_status=status,
        worker_id=worker_id,
        company_id=company_id,
    )


class TestTrackUnpaid:
    """Tests for the payment-status split."""

    def test_only_unpaid_subset_grouped(self):
        """Two 4h logs at $25, one paid: unpaid is $100 / 4h, not $200."""
        summary = track_unpaid([log(4, 25, "paid"), log(4, 25, "unpaid")])

        assert summary.total_unpaid_amount == Decimal("100")
        assert summary.total_unpaid_hours == Decimal("4")
        assert summary.by_worker["W"].amount == Decimal("100")
        assert summary.by_worker["W"].amount != Decimal("200")
        assert summary.by_project["P"].hours == Decimal("4")
        assert summary.total_paid_amount == Decimal("100")
        assert summary.total_paid_hours == Decimal("4")

    @pytest.mark.parametrize("status", [None, "", "pending", "Partially Paid", "void"])
    def test_unrecognized_status_is_unpaid(self, status):
        summary = track_unpaid([log(2, 10, status)])
        assert summary.total_unpaid_amount == Decimal("20")
        assert summary.unpaid_count == 1
        assert summary.total_paid_amount == Decimal("0")

    def test_paid_case_insensitive(self):
        summary = track_unpaid([log(2, 10, "Paid")])
        assert summary.unpaid_count == 0

    def test_groupings(self):
        records = [
            log(4, 25, "unpaid", worker_id="W1", project_id="P1", company_id="C1"),
            log(2, 25, "unpaid", worker_id="W2", project_id="P1", company_id="C1"),
            log(3, 30, None, worker_id="W1", project_id="P2", company_id=None),
        ]
        summary = track_unpaid(records)

        assert summary.by_worker["W1"].amount == Decimal("190")
        assert summary.by_worker["W1"].count == 2
        assert summary.by_project["P1"].amount == Decimal("150")
        assert summary.by_company[None].amount == Decimal("90")
        assert summary.workers_count == 2
        assert summary.to_dict()["by_company"]["unassigned"]["amount"] == 90.0

    def test_group_by_subset(self):
        summary = track_unpaid([log(1, 10, None)], group_by=("worker",))
        assert "W" in summary.by_worker
        assert summary.by_project == {}
        assert summary.by_company == {}

    def test_unknown_grouping(self):
        with pytest.raises(ValidationError):
            track_unpaid([], group_by=("crew",))

    def test_empty(self):
        summary = track_unpaid([])
        assert summary.total_unpaid_amount == Decimal("0")
        assert summary.workers_count == 0

    def test_custom_paid_statuses(self):
        summary = track_unpaid([log(1, 10, "settled")], paid_statuses=["paid", "settled"])
        assert summary.unpaid_count == 0
