"""
Unit tests for TimeReportService domain service.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
import uuid

from smartflow.domain.models.time_category import TimeCategory
from smartflow.domain.models.time_entry import TimeEntry
from smartflow.domain.models.value_objects import BillableStatus
from smartflow.domain.services.time_report_service import (
    TimeReportService,
    UNKNOWN_CATEGORY,
    UNKNOWN_PROJECT,
    UNKNOWN_USER,
    index_by_id,
)


class TestTimeReportService:
    """Test cases for TimeReportService."""

    def setup_method(self):
        self.service = TimeReportService()
        self.tenant_id = uuid.uuid4()
        self.user_a = uuid.uuid4()
        self.user_b = uuid.uuid4()
        self.project_x = uuid.uuid4()
        self.project_y = uuid.uuid4()
        self.category = TimeCategory(id=uuid.uuid4(), tenant_id=self.tenant_id, name="Development", color="#00FF00")

    def entry(self, user_id, minutes, day=1, project_id=None, billable=False, category_id=None):
        start = datetime(2024, 1, day, 9, 0, 0)
        return TimeEntry(
            id=uuid.uuid4(),
            tenant_id=self.tenant_id,
            user_id=user_id,
            project_id=project_id,
            time_category_id=category_id or self.category.id,
            start_time=start,
            end_time=start + timedelta(minutes=minutes),
            duration=minutes,
            billable_status=BillableStatus.BILLABLE if billable else BillableStatus.NON_BILLABLE
        )

    def test_totals(self):
        totals = self.service.totals([
            self.entry(self.user_a, 60, billable=True),
            self.entry(self.user_a, 30),
        ])

        assert totals.total_minutes == 90
        assert totals.billable_minutes == 60
        assert totals.non_billable_minutes == 30
        assert totals.entry_count == 2
        assert totals.utilization_rate == Decimal("66.67")

    def test_empty_totals(self):
        totals = self.service.totals([])

        assert totals.total_minutes == 0
        assert totals.utilization_rate == Decimal("0.00")

    def test_user_report_breakdowns(self):
        entries = [
            self.entry(self.user_a, 120, day=2, project_id=self.project_x, billable=True),
            self.entry(self.user_a, 60, day=1, project_id=self.project_y),
            self.entry(self.user_a, 60, day=2),
        ]

        report = self.service.user_report(
            user_id=self.user_a,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 7),
            entries=entries,
            user_name="Ada Lovelace",
            project_names={self.project_x: "Website", self.project_y: "Mobile"},
            categories=index_by_id([self.category])
        )

        assert report.subject_name == "Ada Lovelace"
        assert report.totals.total_minutes == 240

        assert [(item.key, item.label) for item in report.project_breakdown] == [
            (self.project_x, "Website"),
            (self.project_y, "Mobile"),
            (None, UNKNOWN_PROJECT),
        ]
        assert [item.percentage for item in report.project_breakdown] == [
            Decimal("50.00"), Decimal("25.00"), Decimal("25.00")
        ]

        assert len(report.category_breakdown) == 1
        assert report.category_breakdown[0].label == "Development"
        assert report.category_breakdown[0].color == "#00FF00"
        assert report.category_breakdown[0].percentage == Decimal("100.00")

        assert [item.day for item in report.daily_breakdown] == [date(2024, 1, 1), date(2024, 1, 2)]
        assert report.daily_breakdown[1].totals.total_minutes == 180

    def test_entries_without_project_are_grouped_as_unknown(self):
        entries = [
            self.entry(self.user_a, 60, project_id=self.project_x, billable=True),
            self.entry(self.user_a, 120),
            self.entry(self.user_a, 30, project_id=uuid.uuid4()),
        ]

        items = self.service.project_breakdown(entries, {self.project_x: "Website Redesign"}, 210)

        assert [(item.label, item.totals.total_minutes) for item in items] == [
            (UNKNOWN_PROJECT, 120),
            ("Website Redesign", 60),
            (UNKNOWN_PROJECT, 30),
        ]
        assert items[0].key is None
        assert items[0].percentage == Decimal("57.14")
        assert sum(item.totals.total_minutes for item in items) == 210

    def test_unknown_labels(self):
        report = self.service.user_report(
            user_id=self.user_a,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 7),
            entries=[self.entry(self.user_a, 30, category_id=uuid.uuid4())],
            user_name=None,
            project_names={},
            categories={}
        )

        assert report.subject_name == UNKNOWN_USER
        assert report.category_breakdown[0].label == UNKNOWN_CATEGORY

    def test_project_report_filters_project_and_range(self):
        entries = [
            self.entry(self.user_a, 60, day=3, project_id=self.project_x),
            self.entry(self.user_b, 180, day=4, project_id=self.project_x, billable=True),
            self.entry(self.user_b, 999, day=4, project_id=self.project_y),
            self.entry(self.user_a, 999, day=20, project_id=self.project_x),
        ]

        report = self.service.project_report(
            project_id=self.project_x,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 7),
            entries=entries,
            project_name="Website",
            user_names={self.user_a: "Ada Lovelace", self.user_b: "Grace Hopper"},
            categories=index_by_id([self.category])
        )

        assert report.totals.total_minutes == 240
        assert [item.label for item in report.user_breakdown] == ["Grace Hopper", "Ada Lovelace"]
        assert report.user_breakdown[0].percentage == Decimal("75.00")

    def test_team_report(self):
        report = self.service.team_report(
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 7),
            entries_by_user=[
                (self.user_a, [self.entry(self.user_a, 60, project_id=self.project_x, billable=True)]),
                (self.user_b, [
                    self.entry(self.user_b, 60, project_id=self.project_x),
                    self.entry(self.user_b, 60, project_id=self.project_x, billable=True),
                ]),
                (uuid.uuid4(), []),
            ],
            user_names={self.user_a: "Ada Lovelace"},
            project_names={self.project_x: "Website"}
        )

        assert len(report.members) == 2
        assert report.members[0].user_name == "Ada Lovelace"
        assert report.members[1].user_name == UNKNOWN_USER
        assert report.total_team_minutes == 180
        # Mean of 100% and 50%
        assert report.average_utilization == Decimal("75.00")
        assert report.project_breakdown[0].totals.total_minutes == 180

    def test_team_report_without_entries(self):
        report = self.service.team_report(
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 7),
            entries_by_user=[(self.user_a, [])],
            user_names={},
            project_names={}
        )

        assert report.members == []
        assert report.average_utilization == Decimal("0.00")
