from __future__ import annotations

from flask import flash

from blogdesk.decorators import admin_required
from blogdesk.forms.comments import RefreshForm
from blogdesk.services import analytics as analytics_svc

from blogdesk.blueprints.admin import back_to, bp, current_admin


@bp.post("/analytics/refresh")
@admin_required
def analytics_refresh():
    form = RefreshForm()
    if form.validate_on_submit():
        result = analytics_svc.refresh_analytics(current_admin())
        if not result.ok:
            flash(result.error, "error")
    return back_to("analytics")
