import unittest
from datetime import date, datetime, timedelta

from projectflow.domain.milestone import Milestone
from projectflow.domain.project import Project
from projectflow.domain.task import Task
from projectflow.services.completion_strategies import (
    ExcludeUnknown,
    PlannedDateFallback,
    TodayFallback,
    get_strategy,
)
from projectflow.services.variance import off_schedule_tasks, task_schedule_variance


class ScheduleVarianceTestCase(unittest.TestCase):
    """Test cases for per-task schedule variance."""

    def setUp(self):
        self.today = date(2025, 6, 15)

    def days(self, offset):
        return self.today + timedelta(days=offset)

    def test_no_end_date_is_excluded(self):
        task = Task("t1", "Unplanned", start_date=self.today)
        self.assertIsNone(task_schedule_variance(task, self.today))

    def test_pending_overdue(self):
        task = Task("t1", "Late start", "pending", end_date=self.days(-3))
        self.assertEqual(
            task_schedule_variance(task, self.today),
            {"classification": "overdue", "days_difference": 3},
        )

    def test_open_task_not_yet_due(self):
        for end in (self.days(0), self.days(4)):
            task = Task("t1", "Upcoming", "in-progress", end_date=end)
            self.assertEqual(
                task_schedule_variance(task, self.today),
                {"classification": "on-time", "days_difference": 0},
            )

    def test_completed_late(self):
        task = Task(
            "t1",
            "Late",
            "completed",
            end_date=date(2025, 6, 1),
            completed_at=datetime(2025, 6, 3, 16, 45),
        )
        self.assertEqual(
            task_schedule_variance(task, self.today),
            {"classification": "late", "days_difference": 2},
        )

    def test_completed_early_and_on_time(self):
        early = Task("t1", "Early", "completed", end_date=date(2025, 6, 10), completed_at=datetime(2025, 6, 5, 9, 0))
        self.assertEqual(
            task_schedule_variance(early, self.today),
            {"classification": "early", "days_difference": 5},
        )
        on_time = Task("t2", "On time", "completed", end_date=date(2025, 6, 10), completed_at="2025-06-10T23:00:00")
        self.assertEqual(
            task_schedule_variance(on_time, self.today),
            {"classification": "on-time", "days_difference": 0},
        )

    def test_completed_without_timestamp_defaults_to_today(self):
        task = Task("t1", "Unknown finish", "completed", end_date=self.days(-4))
        self.assertEqual(
            task_schedule_variance(task, self.today),
            {"classification": "late", "days_difference": 4},
        )

    def test_completion_strategies(self):
        task = Task("t1", "Unknown finish", "completed", end_date=self.days(-4))
        self.assertEqual(
            task_schedule_variance(task, self.today, PlannedDateFallback()),
            {"classification": "on-time", "days_difference": 0},
        )
        self.assertIsNone(task_schedule_variance(task, self.today, ExcludeUnknown()))

        stamped = Task("t2", "Known finish", "completed", end_date=self.days(-4), completed_at=self.days(-1))
        for strategy in (TodayFallback(), PlannedDateFallback(), ExcludeUnknown()):
            self.assertEqual(
                task_schedule_variance(stamped, self.today, strategy)["days_difference"], 3
            )

    def test_get_strategy(self):
        self.assertIsInstance(get_strategy("today"), TodayFallback)
        self.assertIsInstance(get_strategy("planned"), PlannedDateFallback)
        self.assertEqual(get_strategy("exclude").get_name(), "Exclude Unknown")
        with self.assertRaises(KeyError):
            get_strategy("tomorrow")

    def test_deterministic(self):
        task = Task("t1", "Same", "pending", end_date=self.days(-2))
        self.assertEqual(
            task_schedule_variance(task, self.today),
            task_schedule_variance(task, self.today),
        )


class OffScheduleTasksTestCase(unittest.TestCase):
    """Test cases for the off-schedule task list."""

    def setUp(self):
        self.today = date(2025, 6, 15)

        def d(offset):
            return self.today + timedelta(days=offset)

        self.projects = [
            Project(
                "p1",
                "Alpha",
                milestones=[
                    Milestone(
                        "m1",
                        "Build",
                        tasks=[
                            Task("late-big", "Late big", "completed", end_date=d(-20), completed_at=d(-10)),
                            Task("overdue-small", "Overdue small", "pending", end_date=d(-1)),
                            Task("early", "Early", "completed", end_date=d(-5), completed_at=d(-8)),
                            Task("future", "Future", "pending", end_date=d(3)),
                            Task("undated", "Undated", "pending"),
                        ],
                    )
                ],
            ),
            Project(
                "p2",
                "Beta",
                milestones=[
                    Milestone(
                        "m2",
                        "Test",
                        tasks=[
                            Task("overdue-big", "Overdue big", "in-progress", end_date=d(-6)),
                            Task("late-small", "Late small", "completed", end_date=d(-3), completed_at=d(-2)),
                        ],
                    )
                ],
            ),
        ]

    def test_only_overdue_and_late(self):
        items = off_schedule_tasks(self.projects, self.today)
        ids = {item["task"].id for item in items}
        self.assertEqual(ids, {"late-big", "overdue-small", "overdue-big", "late-small"})

    def test_sort_order(self):
        items = off_schedule_tasks(self.projects, self.today)
        self.assertEqual(
            [item["task"].id for item in items],
            ["overdue-big", "overdue-small", "late-big", "late-small"],
        )
        self.assertEqual(items[0]["project"].id, "p2")
        self.assertEqual(items[0]["milestone"].id, "m2")
        self.assertEqual(items[0]["days_difference"], 6)

    def test_limit(self):
        self.assertEqual(len(off_schedule_tasks(self.projects, self.today, limit=2)), 2)
        self.assertEqual(len(off_schedule_tasks(self.projects, self.today, limit=None)), 4)

    def test_default_limit_is_ten(self):
        tasks = [
            Task(f"t{i}", f"Task {i}", "pending", end_date=self.today - timedelta(days=i + 1))
            for i in range(15)
        ]
        projects = [Project("p", "Many", milestones=[Milestone("m", "M", tasks=tasks)])]
        items = off_schedule_tasks(projects, self.today)
        self.assertEqual(len(items), 10)
        self.assertEqual(items[0]["days_difference"], 15)


if __name__ == "__main__":
    unittest.main()
