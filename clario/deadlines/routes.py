from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from sqlalchemy import asc, desc
from typing import Literal, Optional
import logging

from clario.database import get_db
from clario.models import User, DeadlineCategory, DeadlinePriority, DeadlineStatus, utcnow
from clario.deadlines.models import Deadline
from clario.deadlines.schemas import DeadlineCreate, DeadlineUpdate, DeadlineResponse
from clario.auth.dependencies import get_current_user
from clario.responses import success
from clario.services.deadline_service import refresh_overdue_statuses
from clario.services.pagination import PageParams, page_params, paginate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/deadlines", tags=["Deadlines"])

SORT_ORDERS = {
    "due_date": (asc(Deadline.due_date),),
    "-due_date": (desc(Deadline.due_date),),
    "-created_at": (desc(Deadline.created_at),),
}

# Fields whose values are nested models stored as JSON
JSON_FIELDS = {"cost", "reminder_settings", "recurring_pattern"}


def get_owned_deadline(db: Session, deadline_id: str, user: User) -> Deadline:
    """Fetch a deadline owned by ``user``; other users' deadlines read as missing."""
    deadline = db.query(Deadline).filter(
        Deadline.id == deadline_id,
        Deadline.user_id == user.id
    ).first()
    if not deadline:
        raise HTTPException(status_code=404, detail="Deadline not found")
    return deadline


def serialize(deadline: Deadline) -> dict:
    return DeadlineResponse.model_validate(deadline).model_dump(mode="json")

# =====================================================
# COLLECTION QUERIES
# =====================================================

@router.get("/")
def list_deadlines(
    status: Optional[DeadlineStatus] = None,
    priority: Optional[DeadlinePriority] = None,
    category: Optional[DeadlineCategory] = None,
    sort: Literal["due_date", "-due_date", "-created_at"] = "due_date",
    paging: PageParams = Depends(page_params),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the caller's deadlines with filtering and pagination."""
    query = db.query(Deadline).filter(Deadline.user_id == current_user.id)

    # Apply filters
    if status:
        query = query.filter(Deadline.status == status)
    if priority:
        query = query.filter(Deadline.priority == priority)
    if category:
        query = query.filter(Deadline.category == category)

    query = query.order_by(*SORT_ORDERS[sort], asc(Deadline.id))
    deadlines, pagination = paginate(query, paging.page, paging.limit)

    return success({
        "deadlines": [serialize(d) for d in deadlines],
        "pagination": pagination
    })

@router.get("/upcoming")
def list_upcoming_deadlines(
    limit: int = Query(5, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Open deadlines (upcoming or in progress), soonest first."""
    deadlines = db.query(Deadline).filter(
        Deadline.user_id == current_user.id,
        Deadline.status.in_([DeadlineStatus.UPCOMING, DeadlineStatus.IN_PROGRESS])
    ).order_by(asc(Deadline.due_date)).limit(limit).all()

    return success({"deadlines": [serialize(d) for d in deadlines]})

@router.get("/overdue")
def list_overdue_deadlines(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Deadlines whose stored status is overdue; see POST /refresh-status."""
    deadlines = db.query(Deadline).filter(
        Deadline.user_id == current_user.id,
        Deadline.status == DeadlineStatus.OVERDUE
    ).order_by(asc(Deadline.due_date)).all()

    return success({"deadlines": [serialize(d) for d in deadlines]})

@router.post("/refresh-status")
def refresh_deadline_statuses(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Bring stored statuses in line with the clock (open deadlines past due become overdue)."""
    updated = refresh_overdue_statuses(db, current_user)
    return success({"updated": updated}, "Deadline statuses refreshed")

# =====================================================
# DEADLINE CRUD OPERATIONS
# =====================================================

@router.get("/{deadline_id}")
def get_deadline(
    deadline_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    deadline = get_owned_deadline(db, deadline_id, current_user)
    return success({"deadline": serialize(deadline)})

@router.post("/", status_code=status.HTTP_201_CREATED)
def create_deadline(
    deadline_data: DeadlineCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    values = deadline_data.model_dump(exclude=JSON_FIELDS)
    for field in JSON_FIELDS:
        nested = getattr(deadline_data, field)
        values[field] = nested.model_dump(mode="json") if nested else None

    deadline = Deadline(user_id=current_user.id, notes=[], **values)

    db.add(deadline)
    db.commit()
    db.refresh(deadline)

    logger.info(f"Deadline {deadline.id} created for user {current_user.id}")
    return success({"deadline": serialize(deadline)}, "Deadline created successfully")

@router.put("/{deadline_id}")
def update_deadline(
    deadline_id: str,
    deadline_update: DeadlineUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    deadline = get_owned_deadline(db, deadline_id, current_user)

    update_data = deadline_update.model_dump(exclude_unset=True)
    note = update_data.pop("notes", None)

    for field, value in update_data.items():
        if field in JSON_FIELDS and value is not None:
            value = getattr(deadline_update, field).model_dump(mode="json")
        setattr(deadline, field, value)

    if note:
        # Assign a new list so the JSON column registers the change
        deadline.notes = [*(deadline.notes or []), {
            "content": note,
            "timestamp": utcnow().isoformat(),
            "author": current_user.full_name
        }]

    if deadline_update.status == DeadlineStatus.COMPLETED and "completion_date" not in update_data:
        deadline.completion_date = deadline.completion_date or utcnow()

    deadline.updated_at = utcnow()
    db.commit()
    db.refresh(deadline)

    return success({"deadline": serialize(deadline)}, "Deadline updated successfully")

@router.delete("/{deadline_id}")
def delete_deadline(
    deadline_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    deadline = get_owned_deadline(db, deadline_id, current_user)

    db.delete(deadline)
    db.commit()

    return success(message="Deadline deleted successfully")
