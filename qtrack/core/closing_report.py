"""Closing Report — a member's end-of-day completed/incomplete tally.

Invariants:
    - One report per (member, report_date); report_date is the member's local date
    - completed_count >= 0 and incomplete_count >= 0
    - generated_pdf_url is trimmed; blank becomes None
"""

from dataclasses import dataclass, replace
from datetime import date

from qtrack.core.errors import ValidationError
from qtrack.core.field_rules import require, trim_edges
from qtrack.core.identity import require_persisted


@dataclass(frozen=True)
class ClosingReport:
    member_id: int
    report_date: date
    completed_count: int
    incomplete_count: int
    generated_pdf_url: str | None = None

    @property
    def total_count(self) -> int:
        return self.completed_count + self.incomplete_count


def create(report_date: date, completed_count: int, incomplete_count: int, member) -> ClosingReport:
    return create_with_pdf(report_date, completed_count, incomplete_count, None, member)


def create_with_pdf(
    report_date: date,
    completed_count: int,
    incomplete_count: int,
    generated_pdf_url: str | None,
    member,
) -> ClosingReport:
    report_date = require(report_date, "reportDate")
    _valid_counts(completed_count, incomplete_count)
    return ClosingReport(
        report_date=report_date,
        completed_count=completed_count,
        incomplete_count=incomplete_count,
        generated_pdf_url=_normalize_url(generated_pdf_url),
        member_id=require_persisted(member, "member"),
    )


def attach_pdf_url(report: ClosingReport, url: str | None) -> ClosingReport:
    normalized = _normalize_url(url)
    if normalized is None:
        raise ValidationError("generatedPdfUrl is null", field="generatedPdfUrl")
    if normalized == report.generated_pdf_url:
        return report
    return replace(report, generated_pdf_url=normalized)


def remove_pdf_url(report: ClosingReport) -> ClosingReport:
    return replace(report, generated_pdf_url=None)


def total_count(report: ClosingReport) -> int:
    return report.total_count


def _valid_counts(completed: int, incomplete: int) -> None:
    if completed is None or completed < 0:
        raise ValidationError("completedCount must be >= 0", field="completedCount")
    if incomplete is None or incomplete < 0:
        raise ValidationError("incompleteCount must be >= 0", field="incompleteCount")


def _normalize_url(raw: str | None) -> str | None:
    if raw is None:
        return None
    value = trim_edges(raw)
    return value or None
