"""
Static display attributes for enumerated values.

These are presentation lookups only; none of the metrics depend on them.
"""

PRIORITY_CONFIG = {
    "critical": {"label": "Critical", "color": "#ef4444", "order": 0},
    "high": {"label": "High", "color": "#f97316", "order": 1},
    "medium": {"label": "Medium", "color": "#eab308", "order": 2},
    "low": {"label": "Low", "color": "#22c55e", "order": 3},
}

SIZE_CONFIG = {
    "xs": {"label": "XS", "description": "Extra Small"},
    "s": {"label": "S", "description": "Small"},
    "m": {"label": "M", "description": "Medium"},
    "l": {"label": "L", "description": "Large"},
    "xl": {"label": "XL", "description": "Extra Large"},
}

PORTFOLIO_INTAKE_CONFIG = {
    "new": {"label": "New", "color": "#6366f1"},
    "in-review": {"label": "In Review", "color": "#f59e0b"},
    "approved": {"label": "Approved", "color": "#22c55e"},
}

STATUS_COLORS = {
    "pending": "#64748b",
    "in-progress": "#f59e0b",
    "completed": "#22c55e",
}

RAG_COLORS = {
    "red": "#ef4444",
    "amber": "#f59e0b",
    "green": "#22c55e",
}

HEALTH_OPTIONS = {
    "on-track": {"label": "On Track", "color": "#22c55e"},
    "at-risk": {"label": "At Risk", "color": "#f59e0b"},
    "off-track": {"label": "Off Track", "color": "#ef4444"},
    "completed": {"label": "Completed", "color": "#818cf8"},
}

OVERDUE_COLOR = "#ef4444"
DEFAULT_COLOR = "#818cf8"


def label_for(table, key):
    """Display label for ``key`` in a lookup table, falling back to the raw key."""
    entry = table.get(key)
    if entry is None:
        return str(key)
    return entry.get("label", str(key))


def color_for(table, key, default=DEFAULT_COLOR):
    """Display color for ``key``; tables may map straight to a color string."""
    entry = table.get(key)
    if entry is None:
        return default
    if isinstance(entry, str):
        return entry
    return entry.get("color", default)
