"""
Rollup Scope - explicit filter object passed to every rollup call.
"""
from dataclasses import dataclass, asdict
from datetime import date
from typing import Optional

from jobcost.domain.exceptions import InvalidScopeError


@dataclass(frozen=True)
class RollupScope:
    """
    Which rows a rollup covers. Unset fields do not filter.

    Attributes:
        project_id: Restrict to one project
        company_id: Restrict to one company (time log override, else project company)
        start_date: Inclusive lower date bound
        end_date: Inclusive upper date bound
        worker_id: Restrict labor rows to one worker
    """

    project_id: Optional[str] = None
    company_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    worker_id: Optional[str] = None

    def __post_init__(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise InvalidScopeError(
                f"start_date {self.start_date} is after end_date {self.end_date}"
            )

    def to_dict(self) -> dict:
        data = asdict(self)
        for key in ("start_date", "end_date"):
            if data[key] is not None:
                data[key] = data[key].isoformat()
        return data
