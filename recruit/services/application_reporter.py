"""
Tabular report of a position's applications.

One row per application: the chosen application fields followed by the
answer to every attached question, in question order.
"""

import csv
import io
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from recruit.models.position import Position
from recruit.models.position_application import PositionApplication
from recruit.models.position_question import PositionQuestion

APPLICATION_FIELDS: Dict[str, Callable[[PositionApplication], str]] = {
    "full_name": lambda a: a.full_name or "",
    "email": lambda a: a.email or "",
    "phone": lambda a: a.phone or "",
    "submitted_at": lambda a: a.submitted_at.isoformat() if a.submitted_at else "",
}

DEFAULT_FIELDS = ["full_name", "email", "phone", "submitted_at"]


class PositionApplicationReporter:
    """Builds headers, rows and CSV for the applications of a position."""
    
    def __init__(
        self,
        position: Position,
        applications: Iterable[PositionApplication],
        position_questions: Sequence[PositionQuestion],
        fields: Optional[List[str]] = None,
    ):
        fields = list(fields) if fields else list(DEFAULT_FIELDS)
        unknown = [f for f in fields if f not in APPLICATION_FIELDS]
        if unknown:
            raise ValueError(f"Unknown report fields: {', '.join(unknown)}")
        
        self.position = position
        self.applications = list(applications)
        self.position_questions = list(position_questions)
        self.fields = fields
    
    def headers(self) -> List[str]:
        return self.fields + [pq.question.short_name for pq in self.position_questions]
    
    def rows(self) -> List[List[str]]:
        rows = []
        for application in self.applications:
            answers = {a.position_question_id: a for a in application.answers}
            row = [APPLICATION_FIELDS[f](application) for f in self.fields]
            for pq in self.position_questions:
                answer = answers.get(pq.id)
                row.append(answer.display_value if answer else "")
            rows.append(row)
        return rows
    
    def to_csv(self) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(self.headers())
        writer.writerows(self.rows())
        return buffer.getvalue()
    
    @property
    def filename(self) -> str:
        return f"{self.position.slug}-applications.csv"
