"""
ProjectFlow Visualization Package
=================================

matplotlib charts for the project portfolio.

Available modules:
- gantt: Milestone Gantt chart for a single project
- portfolio_chart: Progress per project, coloured by RAG status
- styles: Display attributes for priorities, sizes, statuses and RAG values
"""

from projectflow.visualization.gantt import create_milestone_gantt, milestone_bars
from projectflow.visualization.portfolio_chart import (
    create_progress_chart,
    generate_progress_chart_data,
)

__all__ = [
    "create_milestone_gantt",
    "milestone_bars",
    "create_progress_chart",
    "generate_progress_chart_data",
]
