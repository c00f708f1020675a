"""
Time report service.
Pure aggregation of time entries into user, team and project reports.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Tuple
import uuid

from smartflow.domain.models.time_category import TimeCategory
from smartflow.domain.models.time_entry import TimeEntry
from smartflow.domain.models.value_objects import TWO_PLACES, percentage


UNKNOWN_USER = "Unknown User"
UNKNOWN_PROJECT = "Unknown Project"
UNKNOWN_CATEGORY = "Unknown Category"


@dataclass
class TimeTotals:
    """Summed durations in minutes."""

    total_minutes: int = 0
    billable_minutes: int = 0
    entry_count: int = 0

    def add(self, entry: TimeEntry) -> None:
        self.total_minutes += entry.duration
        if entry.is_billable:
            self.billable_minutes += entry.duration
        self.entry_count += 1

    @property
    def non_billable_minutes(self) -> int:
        return self.total_minutes - self.billable_minutes

    @property
    def utilization_rate(self) -> Decimal:
        return percentage(self.billable_minutes, self.total_minutes)


@dataclass
class BreakdownItem:
    """One group of a breakdown: a project, a user or a category."""

    key: Optional[uuid.UUID]
    label: str
    totals: TimeTotals
    percentage: Decimal
    color: Optional[str] = None


@dataclass
class DailyItem:
    day: date
    totals: TimeTotals


@dataclass
class TimeReport:
    """Report over one user's or one project's entries."""

    start_date: date
    end_date: date
    subject_id: Optional[uuid.UUID]
    subject_name: str
    totals: TimeTotals
    category_breakdown: List[BreakdownItem] = field(default_factory=list)
    daily_breakdown: List[DailyItem] = field(default_factory=list)
    project_breakdown: List[BreakdownItem] = field(default_factory=list)
    user_breakdown: List[BreakdownItem] = field(default_factory=list)


@dataclass
class TeamMemberSummary:
    user_id: uuid.UUID
    user_name: str
    totals: TimeTotals


@dataclass
class TeamReport:
    start_date: date
    end_date: date
    members: List[TeamMemberSummary]
    project_breakdown: List[BreakdownItem]

    @property
    def total_team_minutes(self) -> int:
        return sum(member.totals.total_minutes for member in self.members)

    @property
    def average_utilization(self) -> Decimal:
        """Mean of the members' utilization rates; zero without members."""
        if not self.members:
            return Decimal("0.00")
        rates = sum(member.totals.utilization_rate for member in self.members)
        return (rates / Decimal(len(self.members))).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def _group(
    entries: Iterable[TimeEntry],
    key: Callable[[TimeEntry], Hashable]
) -> "OrderedDict[Hashable, TimeTotals]":
    groups: "OrderedDict[Hashable, TimeTotals]" = OrderedDict()
    for entry in entries:
        groups.setdefault(key(entry), TimeTotals()).add(entry)
    return groups


def _sorted(items: List[BreakdownItem]) -> List[BreakdownItem]:
    return sorted(items, key=lambda item: (-item.totals.total_minutes, item.label))


class TimeReportService:
    """
    Aggregates entries into reports.

    Display names are looked up in the mappings the caller resolves up
    front; missing keys fall back to the "Unknown ..." labels.
    """

    def totals(self, entries: Iterable[TimeEntry]) -> TimeTotals:
        totals = TimeTotals()
        for entry in entries:
            totals.add(entry)
        return totals

    def project_breakdown(
        self,
        entries: List[TimeEntry],
        project_names: Mapping[uuid.UUID, str],
        total_minutes: int
    ) -> List[BreakdownItem]:
        """Group by project. Entries without a project share one "Unknown Project" group."""
        groups = _group(entries, lambda entry: entry.project_id)
        return _sorted([
            BreakdownItem(
                key=project_id,
                label=project_names.get(project_id, UNKNOWN_PROJECT),
                totals=totals,
                percentage=percentage(totals.total_minutes, total_minutes)
            )
            for project_id, totals in groups.items()
        ])

    def user_breakdown(
        self,
        entries: List[TimeEntry],
        user_names: Mapping[uuid.UUID, str],
        total_minutes: int
    ) -> List[BreakdownItem]:
        groups = _group(entries, lambda entry: entry.user_id)
        return _sorted([
            BreakdownItem(
                key=user_id,
                label=user_names.get(user_id, UNKNOWN_USER),
                totals=totals,
                percentage=percentage(totals.total_minutes, total_minutes)
            )
            for user_id, totals in groups.items()
        ])

    def category_breakdown(
        self,
        entries: List[TimeEntry],
        categories: Mapping[uuid.UUID, TimeCategory],
        total_minutes: int
    ) -> List[BreakdownItem]:
        """Group by category, carrying the category colour."""
        groups = _group(entries, lambda entry: entry.time_category_id)
        items = []
        for category_id, totals in groups.items():
            category = categories.get(category_id)
            items.append(BreakdownItem(
                key=category_id,
                label=category.name if category else UNKNOWN_CATEGORY,
                color=category.color if category else None,
                totals=totals,
                percentage=percentage(totals.total_minutes, total_minutes)
            ))
        return _sorted(items)

    def daily_breakdown(self, entries: List[TimeEntry]) -> List[DailyItem]:
        """Group by calendar day of the start time, ascending."""
        groups = _group(entries, lambda entry: entry.work_date)
        return [DailyItem(day=day, totals=totals) for day, totals in sorted(groups.items())]

    def user_report(
        self,
        user_id: uuid.UUID,
        start_date: date,
        end_date: date,
        entries: List[TimeEntry],
        user_name: Optional[str],
        project_names: Mapping[uuid.UUID, str],
        categories: Mapping[uuid.UUID, TimeCategory]
    ) -> TimeReport:
        totals = self.totals(entries)
        return TimeReport(
            start_date=start_date,
            end_date=end_date,
            subject_id=user_id,
            subject_name=user_name or UNKNOWN_USER,
            totals=totals,
            project_breakdown=self.project_breakdown(entries, project_names, totals.total_minutes),
            category_breakdown=self.category_breakdown(entries, categories, totals.total_minutes),
            daily_breakdown=self.daily_breakdown(entries)
        )

    def project_report(
        self,
        project_id: uuid.UUID,
        start_date: date,
        end_date: date,
        entries: List[TimeEntry],
        project_name: Optional[str],
        user_names: Mapping[uuid.UUID, str],
        categories: Mapping[uuid.UUID, TimeCategory]
    ) -> TimeReport:
        """Report over one project's entries, broken down by user."""
        in_range = [
            entry for entry in entries
            if entry.project_id == project_id and start_date <= entry.work_date <= end_date
        ]
        totals = self.totals(in_range)
        return TimeReport(
            start_date=start_date,
            end_date=end_date,
            subject_id=project_id,
            subject_name=project_name or UNKNOWN_PROJECT,
            totals=totals,
            user_breakdown=self.user_breakdown(in_range, user_names, totals.total_minutes),
            category_breakdown=self.category_breakdown(in_range, categories, totals.total_minutes),
            daily_breakdown=self.daily_breakdown(in_range)
        )

    def team_report(
        self,
        start_date: date,
        end_date: date,
        entries_by_user: List[Tuple[uuid.UUID, List[TimeEntry]]],
        user_names: Mapping[uuid.UUID, str],
        project_names: Mapping[uuid.UUID, str]
    ) -> TeamReport:
        """
        Summarize every user that has entries in the range.
        Users without entries are not listed and do not count toward the average.
        """
        members = []
        all_entries: List[TimeEntry] = []
        for user_id, entries in entries_by_user:
            if not entries:
                continue
            members.append(TeamMemberSummary(
                user_id=user_id,
                user_name=user_names.get(user_id, UNKNOWN_USER),
                totals=self.totals(entries)
            ))
            all_entries.extend(entries)

        grand_total = sum(entry.duration for entry in all_entries)
        return TeamReport(
            start_date=start_date,
            end_date=end_date,
            members=members,
            project_breakdown=self.project_breakdown(all_entries, project_names, grand_total)
        )


def index_by_id(items: Iterable) -> Dict[uuid.UUID, object]:
    """Map entities by their ID."""
    return {item.id: item for item in items}
