"""
ProjectFlow Metrics
===================

Print a progress, schedule and risk report for a portfolio snapshot.
"""

import argparse
import json
import logging
import sys
from datetime import date

from .domain.portfolio import Portfolio
from .domain.project import ProjectError
from .examples.sample_portfolio import create_sample_portfolio
from .report import print_report
from .services.engine import ConfigError, MetricsEngine

logger = logging.getLogger("projectflow")


def _load_json(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def build_parser():
    parser = argparse.ArgumentParser(description="Project portfolio progress and risk metrics")
    parser.add_argument("--state", type=str, help="Store state JSON file to report on")
    parser.add_argument(
        "--example", action="store_true", help="Report on the built-in sample portfolio"
    )
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Report date as YYYY-MM-DD (default: the current date)",
    )
    parser.add_argument("--config", type=str, help="Engine configuration JSON file")
    parser.add_argument("--gantt", type=str, metavar="PROJECT_ID", help="Project to chart")
    parser.add_argument(
        "--output",
        type=str,
        default="projectflow_gantt.png",
        help="Output filename for the Gantt chart",
    )
    parser.add_argument("--chart", type=str, help="Output filename for a progress chart")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    today = args.today or date.today()

    if not args.state and not args.example:
        parser.print_help()
        return 1

    try:
        engine = MetricsEngine.from_dict(_load_json(args.config)) if args.config else MetricsEngine()
        if args.state:
            portfolio = Portfolio.from_dict(_load_json(args.state))
        else:
            portfolio = create_sample_portfolio(today)
    except (OSError, ValueError, ProjectError, ConfigError) as e:
        logger.error("Cannot load input: %s", e)
        return 2

    logger.debug("Loaded %r with %r", portfolio, engine)

    view = engine.build_view(portfolio, today)
    print_report(view, portfolio)

    if args.gantt or args.chart:
        from .visualization.gantt import create_milestone_gantt
        from .visualization.portfolio_chart import create_progress_chart

        if args.gantt:
            project = portfolio.get_project(args.gantt)
            if project is None:
                logger.error("No project with ID %s", args.gantt)
                return 2
            create_milestone_gantt(project, today, filename=args.output, show=False)

        if args.chart:
            create_progress_chart(portfolio.projects, today, filename=args.chart, show=False)

    return 0


if __name__ == "__main__":
    sys.exit(main())
