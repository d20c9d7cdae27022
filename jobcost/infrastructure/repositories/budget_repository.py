"""
Budget Repository - project budget headers and lines.
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from jobcost.models import ProjectBudget, ProjectBudgetLine, Project
from .base_repository import BaseRepository, cents_to_decimal


class BudgetRepository(BaseRepository[ProjectBudget]):
    """Repository for project budgets (at most one header per project)."""

    def __init__(self, session: Session):
        super().__init__(session, ProjectBudget)

    def exists(self, **criteria) -> bool:
        query = self.session.query(ProjectBudget)
        for field, value in criteria.items():
            query = query.filter(getattr(ProjectBudget, field) == value)
        return query.first() is not None

    def get_project(self, project_id: str) -> Optional[Project]:
        return self.session.query(Project).filter(Project.id == project_id).first()

    def get_header(self, project_id: str) -> Optional[ProjectBudget]:
        return self.session.query(ProjectBudget).filter(
            ProjectBudget.project_id == project_id
        ).first()

    def line_rows(self, project_id: str) -> List[dict]:
        """
        Budget lines of the project's budget as plain rows.

        Returns:
            Empty list when the project has no budget header
        """
        header = self.get_header(project_id)
        if header is None:
            return []

        lines = self.session.query(ProjectBudgetLine).filter(
            ProjectBudgetLine.project_budget_id == header.id
        ).order_by(ProjectBudgetLine.id).all()

        return [
            {
                'id': line.id,
                'project_id': line.project_id,
                'cost_code_id': line.cost_code_id,
                'category': line.category,
                'description': line.description,
                'budget_amount': cents_to_decimal(line.budget_amount_cents),
                'budget_hours': line.budget_hours,
            }
            for line in lines
        ]
