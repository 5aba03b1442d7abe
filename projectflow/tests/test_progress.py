import json
import unittest
from datetime import date, datetime, timedelta

from projectflow.domain.milestone import Milestone
from projectflow.domain.project import Project
from projectflow.domain.task import Task
from projectflow.services.effort import task_effort
from projectflow.services.progress import (
    milestone_completion_rate,
    milestone_progress,
    project_progress,
    round_percent,
    task_credit,
)


class TaskEffortTestCase(unittest.TestCase):
    """Test cases for effort estimation."""

    def setUp(self):
        self.today = date(2025, 6, 15)

    def test_date_range_is_inclusive(self):
        task = Task("t1", "Range", start_date=date(2025, 6, 1), end_date=date(2025, 6, 5))
        self.assertEqual(task_effort(task), 5)

    def test_single_day_task(self):
        task = Task("t1", "One day", start_date=self.today, end_date=self.today)
        self.assertEqual(task_effort(task), 1)

    def test_dates_take_priority_over_hours(self):
        task = Task(
            "t1",
            "Both",
            start_date=date(2025, 6, 1),
            end_date=date(2025, 6, 2),
            estimated_hours=80,
        )
        self.assertEqual(task_effort(task), 2)

    def test_hours_convert_to_days(self):
        self.assertEqual(task_effort(Task("t1", "Hours", estimated_hours=4)), 0.5)
        self.assertEqual(task_effort(Task("t2", "Hours", estimated_hours=20)), 2.5)
        self.assertEqual(
            task_effort(Task("t3", "Hours", estimated_hours=20), hours_per_day=10), 2
        )

    def test_partial_dates_fall_back(self):
        only_end = Task("t1", "End only", end_date=date(2025, 6, 5), estimated_hours=16)
        self.assertEqual(task_effort(only_end), 2)
        only_start = Task("t2", "Start only", start_date=date(2025, 6, 5))
        self.assertEqual(task_effort(only_start), 1)

    def test_default_effort(self):
        self.assertEqual(task_effort(Task("t1", "Nothing")), 1)

    def test_inverted_range_is_clamped(self):
        task = Task("t1", "Backwards", start_date=date(2025, 6, 10), end_date=date(2025, 6, 1))
        with self.assertLogs("projectflow.services.effort", level="DEBUG"):
            effort = task_effort(task)
        self.assertEqual(effort, 1)

    def test_effort_always_positive(self):
        tasks = [
            Task("a", "A"),
            Task("b", "B", estimated_hours=1),
            Task("c", "C", start_date=date(2025, 1, 2), end_date=date(2025, 1, 1)),
            Task("d", "D", start_date=date(2025, 1, 1), end_date=date(2025, 3, 1)),
        ]
        for task in tasks:
            self.assertGreater(task_effort(task), 0)

    def test_non_finite_hours_are_not_an_estimate(self):
        data = json.loads('{"id": "t1", "title": "NaN", "status": "completed", "estimatedHours": NaN}')
        nan_task = Task.from_dict(data)
        self.assertIsNone(nan_task.estimated_hours)
        self.assertEqual(task_effort(nan_task), 1)

        inf_task = Task("t2", "Inf", "completed", estimated_hours=float("inf"))
        self.assertIsNone(inf_task.estimated_hours)
        self.assertEqual(task_effort(inf_task), 1)

        milestone = Milestone("m1", "M", tasks=[nan_task, inf_task, Task("t3", "Open")])
        project = Project("p1", "P", milestones=[milestone])
        self.assertEqual(milestone_progress(milestone, self.today), 67)
        self.assertEqual(project_progress(project, self.today), 67)

    def test_non_finite_effort_is_clamped(self):
        task = Task("t1", "Huge", estimated_hours=4)
        task.estimated_hours = float("nan")
        with self.assertLogs("projectflow.services.effort", level="DEBUG"):
            self.assertEqual(task_effort(task), 1)
        task.estimated_hours = float("inf")
        self.assertEqual(task_effort(task), 1)


class MilestoneProgressTestCase(unittest.TestCase):
    """Test cases for milestone progress."""

    def setUp(self):
        self.today = date(2025, 6, 15)

    def test_empty_milestone_uses_status(self):
        expected = {"completed": 100, "in-progress": 50, "pending": 0}
        for status, percent in expected.items():
            milestone = Milestone("m1", "Empty", status=status)
            self.assertEqual(milestone_progress(milestone, self.today), percent)

    def test_all_tasks_completed(self):
        milestone = Milestone(
            "m1",
            "Done",
            status="pending",
            tasks=[
                Task("t1", "Big", "completed", start_date=date(2025, 1, 1), end_date=date(2025, 3, 1)),
                Task("t2", "Small", "completed", estimated_hours=1),
                Task("t3", "Default", "completed"),
            ],
        )
        self.assertEqual(milestone_progress(milestone, self.today), 100)

    def test_effort_weighting(self):
        milestone = Milestone(
            "m1",
            "Weighted",
            tasks=[
                Task("t1", "Done", "completed", estimated_hours=24),
                Task("t2", "Open", "pending", estimated_hours=8),
            ],
        )
        # 3 of 4 days done
        self.assertEqual(milestone_progress(milestone, self.today), 75)

    def test_in_progress_partial_credit(self):
        # 10-day task, today is day 3
        task = Task(
            "t1",
            "Running",
            "in-progress",
            start_date=self.today - timedelta(days=2),
            end_date=self.today + timedelta(days=7),
        )
        effort, credit = task_credit(task, self.today)
        self.assertEqual(effort, 10)
        self.assertAlmostEqual(credit, 3.0)
        self.assertEqual(milestone_progress(Milestone("m1", "M", tasks=[task]), self.today), 30)

    def test_in_progress_window_is_inclusive(self):
        first_day = Task("t1", "Starts today", "in-progress", start_date=self.today, end_date=self.today + timedelta(days=3))
        self.assertAlmostEqual(task_credit(first_day, self.today)[1], 1.0)

        last_day = Task("t2", "Ends today", "in-progress", start_date=self.today - timedelta(days=3), end_date=self.today)
        self.assertAlmostEqual(task_credit(last_day, self.today)[1], 4.0)

    def test_in_progress_outside_window_gets_nothing(self):
        not_started = Task("t1", "Future", "in-progress", start_date=self.today + timedelta(days=1), end_date=self.today + timedelta(days=5))
        finished_window = Task("t2", "Past", "in-progress", start_date=self.today - timedelta(days=5), end_date=self.today - timedelta(days=1))
        undated = Task("t3", "Undated", "in-progress", estimated_hours=8)
        for task in (not_started, finished_window, undated):
            self.assertEqual(task_credit(task, self.today)[1], 0.0)

    def test_datetime_now_is_truncated(self):
        task = Task("t1", "Ends today", "in-progress", start_date=self.today - timedelta(days=1), end_date=self.today)
        late_evening = datetime(2025, 6, 15, 23, 59)
        self.assertAlmostEqual(task_credit(task, late_evening)[1], 2.0)


class ProjectProgressTestCase(unittest.TestCase):
    """Test cases for project-wide progress."""

    def setUp(self):
        self.today = date(2025, 6, 15)

    def test_no_milestones(self):
        self.assertEqual(project_progress(Project("p1", "Empty"), self.today), 0)

    def test_single_completed_task_today(self):
        task = Task("t1", "Today", "completed", start_date=self.today, end_date=self.today)
        milestone = Milestone("m1", "M", tasks=[task])
        project = Project("p1", "P", milestones=[milestone])
        self.assertEqual(task_effort(task), 1)
        self.assertEqual(milestone_progress(milestone, self.today), 100)
        self.assertEqual(project_progress(project, self.today), 100)

    def test_pseudo_task_and_global_effort(self):
        project = Project(
            "p1",
            "Mixed",
            milestones=[
                Milestone("m1", "No tasks", status="in-progress"),
                Milestone(
                    "m2",
                    "Two tasks",
                    tasks=[
                        Task("t1", "Done", "completed", start_date=date(2025, 6, 1), end_date=date(2025, 6, 2)),
                        Task("t2", "Open", "pending", start_date=date(2025, 6, 20), end_date=date(2025, 6, 21)),
                    ],
                ),
            ],
        )
        # (0.5 + 2) / (1 + 2 + 2)
        self.assertEqual(project_progress(project, self.today), 50)

    def test_large_milestones_weigh_more(self):
        project = Project(
            "p1",
            "Uneven",
            milestones=[
                Milestone("m1", "Big", tasks=[Task("t1", "Big", "completed", estimated_hours=72)]),
                Milestone("m2", "Small", tasks=[Task("t2", "Small", "pending")]),
            ],
        )
        # Averaging milestone percentages would give 50
        self.assertEqual(project_progress(project, self.today), 90)

    def test_progress_never_decreases_as_status_advances(self):
        def build(status):
            return Project(
                "p1",
                "Monotonic",
                milestones=[
                    Milestone(
                        "m1",
                        "M",
                        tasks=[
                            Task("t1", "Fixed", "completed", estimated_hours=16),
                            Task(
                                "t2",
                                "Moving",
                                status,
                                start_date=self.today - timedelta(days=4),
                                end_date=self.today + timedelta(days=5),
                            ),
                            Task("t3", "Other", "pending", estimated_hours=8),
                        ],
                    ),
                    Milestone("m2", "Empty", status="in-progress"),
                ],
            )

        values = [project_progress(build(s), self.today) for s in ("pending", "in-progress", "completed")]
        self.assertEqual(values, sorted(values))
        self.assertLess(values[0], values[2])

    def test_rounding_is_half_up(self):
        self.assertEqual(round_percent(1, 8), 13)
        self.assertEqual(round_percent(5, 200), 3)
        self.assertEqual(round_percent(1, 3), 33)
        self.assertEqual(round_percent(0, 0), 0)

    def test_milestone_completion_rate(self):
        projects = [
            Project("p1", "A", milestones=[Milestone("m1", "X", status="completed"), Milestone("m2", "Y")]),
            Project("p2", "B", milestones=[Milestone("m3", "Z", status="completed")]),
        ]
        self.assertEqual(milestone_completion_rate(projects), 67)
        self.assertEqual(milestone_completion_rate([]), 0)


if __name__ == "__main__":
    unittest.main()
