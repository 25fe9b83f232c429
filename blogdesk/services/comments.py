from __future__ import annotations

import structlog
from pydantic import ValidationError

from blogdesk.errors import OperationFailed, ValidationFailed
from blogdesk.models.session import AdminSession
from blogdesk.repositories import blog as repo
from blogdesk.schemas.comments import CommentReply
from blogdesk.services import dashboard
from blogdesk.services.dashboard import Outcome
from blogdesk.utils.http_client import RemoteError

log = structlog.get_logger(__name__)


def reply_to_comment(admin: AdminSession, comment_id: int, reply: str | None) -> Outcome:
    if not (reply or "").strip():
        raise ValidationFailed("Please enter a reply")
    try:
        payload = CommentReply(admin_reply=reply)
    except ValidationError as e:
        raise ValidationFailed("Reply must be at most 5000 characters") from e

    with dashboard.operation(admin, "reply_comment", comment_id):
        try:
            updated = repo.set_comment_reply(comment_id, payload.admin_reply, token=admin.access_token)
        except RemoteError as e:
            log.error("comment_reply_failed", comment_id=comment_id, error=e.message, status=e.status_code)
            raise OperationFailed("Failed to post reply") from e
        log.info("comment_replied", comment_id=comment_id)
        refetched = [dashboard.refetch(admin, dashboard.COMMENTS)]
    return Outcome("Reply posted successfully", updated[0] if updated else None, refetched)
