from __future__ import annotations

from flask import current_app

from blogdesk.models.blog import PostView
from blogdesk.models.session import AdminSession
from blogdesk.services import dashboard
from blogdesk.services.dashboard import LoadResult


def chart_points(views: list[PostView], label_format: str | None = None) -> list[dict]:
    """Bar chart points, oldest day first, labelled with a short weekday."""
    fmt = label_format or current_app.config.get("ANALYTICS_LABEL_FORMAT", "%a")
    days = int(current_app.config.get("ANALYTICS_DAYS", 7))
    ordered = sorted(views, key=lambda v: v.date)[-days:] if days > 0 else []
    return [
        {"date": v.date.isoformat(), "label": v.label(fmt), "views": v.views}
        for v in ordered
    ]


def peak(points: list[dict]) -> int:
    return max((p["views"] for p in points), default=0)


def refresh_analytics(admin: AdminSession) -> LoadResult:
    """Re-issue the bounded read, bypassing the cached copy."""
    return dashboard.refetch(admin, dashboard.ANALYTICS)
