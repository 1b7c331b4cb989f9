# app/utils/activity_helpers.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.activity_models import UserActivity

logger = logging.getLogger(__name__)


async def log_user_activity(db: AsyncSession, user_id: int = None, username: str = None, message: str = "", commit: bool = False):
    """
    Adds a user activity row to the session. The caller is responsible for the commit.
    """
    activity = UserActivity(
        user_id=user_id,
        username=username or "anonymous",
        message=message
    )
    db.add(activity)
    logger.debug("activity user=%s: %s", username, message)
    if commit:
        await db.commit()
