"""
Weekly Company Report shapes: company -> worker -> project hours.
"""
import datetime
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from .cost_record import ZERO


@dataclass
class JobHours:
    project: str
    hours: Decimal = ZERO


@dataclass
class WorkerWeek:
    name: str
    jobs: List[JobHours] = field(default_factory=list)
    total: Decimal = ZERO

    def add(self, project: str, hours: Decimal) -> None:
        for job in self.jobs:
            if job.project == project:
                job.hours += hours
                break
        else:
            self.jobs.append(JobHours(project=project, hours=hours))
        self.total += hours


@dataclass
class CompanyWeek:
    company: str
    workers: List[WorkerWeek] = field(default_factory=list)
    company_total: Decimal = ZERO

    def worker(self, name: str) -> WorkerWeek:
        for worker in self.workers:
            if worker.name == name:
                return worker
        worker = WorkerWeek(name=name)
        self.workers.append(worker)
        return worker


@dataclass
class WeeklyReport:
    week_start: datetime.date
    week_end: datetime.date
    companies: List[CompanyWeek] = field(default_factory=list)

    @property
    def grand_total(self) -> Decimal:
        return sum((c.company_total for c in self.companies), ZERO)

    @property
    def is_empty(self) -> bool:
        return not self.companies

    def to_dict(self) -> dict:
        return {
            'week_start': self.week_start.isoformat(),
            'week_end': self.week_end.isoformat(),
            'companies': [
                {
                    'company': company.company,
                    'company_total': float(company.company_total),
                    'workers': [
                        {
                            'name': worker.name,
                            'total': float(worker.total),
                            'jobs': [
                                {'project': job.project, 'hours': float(job.hours)}
                                for job in worker.jobs
                            ],
                        }
                        for worker in company.workers
                    ],
                }
                for company in self.companies
            ],
            'grand_total': float(self.grand_total),
        }
