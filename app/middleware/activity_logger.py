# app/middleware/activity_logger.py
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from app.utils.activity_helpers import log_user_activity
from app.core.db import AsyncSessionLocal

logger = logging.getLogger(__name__)

LOGGED_METHODS = ("POST", "PUT", "PATCH", "DELETE")


class ActivityLoggerMiddleware(BaseHTTPMiddleware):
    """
    Records failed modifying requests made by authenticated users.
    Successful mutations write their own, more descriptive activity rows.
    """

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        # get_current_user stores the user on request.state during the call
        user = getattr(request.state, "user", None)
        if user is None or request.method not in LOGGED_METHODS or response.status_code < 400:
            return response

        message = f"{request.method} {request.url.path} failed with {response.status_code}"
        try:
            async with AsyncSessionLocal() as db:
                await log_user_activity(db, user_id=user.id, username=user.username, message=message, commit=True)
        except Exception:
            logger.exception("Failed to log activity for %s", user.username)

        return response
