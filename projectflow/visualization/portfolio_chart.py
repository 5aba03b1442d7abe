import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Patch

from ..services.progress import project_progress
from ..services.risk import project_rag_status
from .styles import RAG_COLORS, color_for


def generate_progress_chart_data(projects, now):
    """
    Progress and RAG status per project, in portfolio order.

    Returns:
        dict: ``names``, ``progress`` (numpy array) and ``rag`` lists
    """
    projects = list(projects)
    return {
        "names": [p.name for p in projects],
        "progress": np.array([project_progress(p, now) for p in projects], dtype=float),
        "rag": [project_rag_status(p, now) for p in projects],
    }


def create_progress_chart(projects, now, filename=None, show=True):
    """
    Horizontal bar chart of project progress coloured by RAG status.

    Args:
        projects: Iterable of Project objects
        now: Current date or datetime
        filename: Optional filename to save the chart
        show: Whether to display the chart (default: True)

    Returns:
        The matplotlib figure, or None for an empty portfolio
    """
    data = generate_progress_chart_data(projects, now)
    if not data["names"]:
        print("No projects to chart.")
        return None

    positions = np.arange(len(data["names"]))
    colors = [color_for(RAG_COLORS, rag) for rag in data["rag"]]

    fig, ax = plt.subplots(figsize=(10, max(3, len(positions) * 0.5 + 2)))

    # Remaining work as a faint track behind each bar
    ax.barh(positions, np.full(len(positions), 100.0), color="lightgray", alpha=0.4)
    ax.barh(positions, data["progress"], color=colors, alpha=0.9)

    for pos, value in zip(positions, data["progress"]):
        ax.text(value + 1, pos, f"{value:.0f}%", va="center", fontsize=8)

    ax.set_yticks(positions)
    ax.set_yticklabels(data["names"])
    ax.invert_yaxis()
    ax.set_xlim(0, 110)
    ax.set_xlabel("Progress (%)")
    ax.set_title(f"Portfolio Progress as of {now:%Y-%m-%d}")

    legend_elements = [
        Patch(facecolor=RAG_COLORS["red"], label="Red"),
        Patch(facecolor=RAG_COLORS["amber"], label="Amber"),
        Patch(facecolor=RAG_COLORS["green"], label="Green"),
    ]
    ax.legend(handles=legend_elements, loc="lower right")

    plt.tight_layout()

    if filename:
        plt.savefig(filename, dpi=300, bbox_inches="tight")
        print(f"Progress chart saved to {filename}")

    if show:
        plt.show()

    return fig
