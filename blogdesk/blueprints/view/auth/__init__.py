from __future__ import annotations

# Import routes to register them with the auth blueprint
from blogdesk.blueprints.view.auth import login  # noqa: E402,F401
from blogdesk.blueprints.view.auth import logout  # noqa: E402,F401
