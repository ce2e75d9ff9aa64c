"""Date-driven deadline status rules.

A deadline's stored ``status`` is only brought in line with the clock when
:func:`recompute_status` (or :func:`refresh_overdue_statuses`) runs, so callers
reading ``status`` between recomputations may see a stale value.
"""
import logging
import math
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from clario.models import DeadlineStatus, TERMINAL_DEADLINE_STATUSES, User, utcnow

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def days_remaining(due_date: datetime, now: Optional[datetime] = None) -> int:
    """Whole days until ``due_date``, rounded up. Zero or negative once due."""
    now = now or utcnow()
    return math.ceil((due_date - now).total_seconds() / SECONDS_PER_DAY)


def is_overdue(deadline, now: Optional[datetime] = None) -> bool:
    """True when the due date has passed and the deadline was not completed."""
    now = now or utcnow()
    return now > deadline.due_date and deadline.status != DeadlineStatus.COMPLETED


def recompute_status(deadline, now: Optional[datetime] = None) -> bool:
    """Mark a non-terminal deadline as overdue when its due date has passed.

    Completed and cancelled deadlines are left alone. Returns whether the
    status changed; running it twice has no further effect.
    """
    if deadline.status in TERMINAL_DEADLINE_STATUSES:
        return False

    if is_overdue(deadline, now) and deadline.status != DeadlineStatus.OVERDUE:
        deadline.status = DeadlineStatus.OVERDUE
        return True
    return False


def refresh_overdue_statuses(db: Session, user: User, now: Optional[datetime] = None) -> int:
    """Recompute status for every open deadline a user owns; returns the number changed."""
    from clario.deadlines.models import Deadline

    now = now or utcnow()
    candidates = db.query(Deadline).filter(
        Deadline.user_id == user.id,
        Deadline.status.notin_([*TERMINAL_DEADLINE_STATUSES, DeadlineStatus.OVERDUE]),
        Deadline.due_date < now
    ).all()

    changed = sum(1 for deadline in candidates if recompute_status(deadline, now))
    if changed:
        db.commit()
        logger.info(f"Marked {changed} deadline(s) overdue for user {user.id}")
    return changed
