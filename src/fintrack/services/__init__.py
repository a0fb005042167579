"""Service module exports."""

from . import (
    admin_tasks,
    auth,
    budgeting,
    categories,
    dashboard,
    export_csv,
    periods,
    reports,
    savings,
    type_stats,
)

__all__ = [
    "admin_tasks",
    "auth",
    "budgeting",
    "categories",
    "dashboard",
    "export_csv",
    "periods",
    "reports",
    "savings",
    "type_stats",
]
