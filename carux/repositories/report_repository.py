"""
Report Repository - Car UX Review Platform
carux/repositories/report_repository.py

One stored report per review; regenerating replaces it.
"""

from typing import Optional
from uuid import UUID

from carux.models.report import Report
from carux.repositories.base import BaseRepository


class ReportRepository(BaseRepository):
    """Repository for generated reports, keyed by review id."""

    TABLE_NAME = "REPORTS"

    def save(self, report: Report) -> Report:
        with self.transaction() as table:
            previous = table.get(report.review_id)
            if previous is not None:
                # Keep the report id stable across regenerations
                report = report.model_copy(update={"id": previous["id"]})
            table[report.review_id] = report.model_dump()
        return report

    def get_by_review(self, review_id: UUID) -> Optional[Report]:
        row = self.get_row(review_id)
        return Report.model_validate(row) if row else None
