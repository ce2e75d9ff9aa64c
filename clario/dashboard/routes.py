from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import asc, desc

from clario.auth.dependencies import get_current_user
from clario.database import get_db
from clario.deadlines.models import Deadline
from clario.deadlines.schemas import DeadlineSummary
from clario.documents.models import Document
from clario.models import User, DeadlineStatus
from clario.responses import success
from clario.services.deadline_service import refresh_overdue_statuses
from clario.services.health_service import HIGH_PRIORITIES, build_health_check

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

RECENT_ITEMS = 5
OPEN_STATUSES = (DeadlineStatus.UPCOMING, DeadlineStatus.IN_PROGRESS)


def compliance_score(completed: int, total: int) -> int:
    """Share of deadlines completed, as a percentage; 100 when nothing is tracked."""
    return round(completed / total * 100) if total > 0 else 100


@router.get("/stats")
def get_dashboard_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    refresh_overdue_statuses(db, current_user)

    deadlines = db.query(Deadline).filter(Deadline.user_id == current_user.id)
    documents = db.query(Document).filter(Document.user_id == current_user.id)

    total_deadlines = deadlines.count()
    completed = deadlines.filter(Deadline.status == DeadlineStatus.COMPLETED).count()

    stats = {
        "documents": documents.count(),
        "deadlines": total_deadlines,
        "upcoming": deadlines.filter(Deadline.status.in_(OPEN_STATUSES)).count(),
        "overdue": deadlines.filter(Deadline.status == DeadlineStatus.OVERDUE).count(),
        "high_priority": deadlines.filter(Deadline.priority.in_(HIGH_PRIORITIES)).count(),
        "compliance": compliance_score(completed, total_deadlines),
    }

    recent_documents = documents.order_by(desc(Document.updated_at)).limit(RECENT_ITEMS).all()
    upcoming_deadlines = deadlines.filter(
        Deadline.status.in_(OPEN_STATUSES)
    ).order_by(asc(Deadline.due_date)).limit(RECENT_ITEMS).all()

    return success({
        "stats": stats,
        "recent_documents": [
            {
                "id": d.id,
                "title": d.title,
                "type": d.type.value,
                "updated_at": d.updated_at.isoformat() if d.updated_at else None
            }
            for d in recent_documents
        ],
        "upcoming_deadlines": [
            DeadlineSummary.model_validate(d).model_dump(mode="json") for d in upcoming_deadlines
        ]
    })

@router.get("/health-check")
def get_health_check(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Risk score and recommendations for the caller's legal posture."""
    refresh_overdue_statuses(db, current_user)
    return success(build_health_check(db, current_user))
