from __future__ import annotations

from flask import flash, render_template, request

from blogdesk.decorators import admin_required
from blogdesk.forms import CategoryForm, RefreshForm
from blogdesk.services import analytics as analytics_svc
from blogdesk.services import dashboard as dash
from blogdesk.services.categories import category_summaries
from blogdesk.services.posts import filter_posts

from blogdesk.blueprints.admin import TABS, bp, current_admin


@bp.get("/")
@admin_required
def dashboard():
    """Tabbed admin dashboard"""
    tab = request.args.get("tab", "posts")
    if tab not in TABS:
        tab = "posts"
    search = request.args.get("q", "")

    # Every render reads all four lists fresh
    results = dash.load_dashboard(current_admin(), refresh=True)
    for result in results.values():
        if not result.ok:
            flash(result.error, "error")

    posts = results[dash.POSTS].data
    points = analytics_svc.chart_points(results[dash.ANALYTICS].data)
    return render_template(
        "admin/dashboard.html",
        tab=tab,
        tabs=TABS,
        search=search,
        posts=filter_posts(posts, search),
        total_posts=len(posts),
        categories=category_summaries(results[dash.CATEGORIES].data, posts),
        comments=results[dash.COMMENTS].data,
        points=points,
        peak=analytics_svc.peak(points),
        failed={name for name, result in results.items() if not result.ok},
        category_form=CategoryForm(),
        refresh_form=RefreshForm(),
    )
