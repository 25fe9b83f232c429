from __future__ import annotations

import logging

import structlog
from flask import g, has_app_context, has_request_context
from flask_login import current_user


def configure_logging(level: int = logging.INFO) -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            add_request_id,
            add_admin_id,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )


def add_request_id(logger, method_name, event_dict):
    # Loader threads copy the id into their own app context
    if has_app_context():
        req_id = g.get("request_id")
        if req_id:
            event_dict.setdefault("request_id", req_id)
    return event_dict


def add_admin_id(logger, method_name, event_dict):
    if has_request_context() and current_user and current_user.is_authenticated:
        event_dict.setdefault("user_id", current_user.get_id())
    return event_dict
