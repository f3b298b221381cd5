"""Content generation package.

Generates:
    - Dashboard statistics
"""

from pursuit.content.dashboard import DashboardStats, get_dashboard_stats

__all__ = [
    "DashboardStats",
    "get_dashboard_stats",
]
