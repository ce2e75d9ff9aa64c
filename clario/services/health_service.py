from typing import Any, Dict, List

from sqlalchemy.orm import Session

from clario.models import DeadlinePriority, DeadlineStatus, User

BASE_SCORE = 100
OVERDUE_PENALTY = 20
HIGH_PRIORITY_PENALTY = 10
NO_DEADLINES_PENALTY = 30
NO_DOCUMENTS_PENALTY = 20

HIGH_PRIORITIES = (DeadlinePriority.HIGH, DeadlinePriority.CRITICAL)


def calculate_risk_score(
    overdue_count: int,
    high_priority_count: int,
    total_deadlines: int,
    document_count: int
) -> int:
    """Legal health score in [0, 100]; lower means more exposure."""
    score = BASE_SCORE
    score -= overdue_count * OVERDUE_PENALTY
    score -= high_priority_count * HIGH_PRIORITY_PENALTY
    if total_deadlines == 0:
        score -= NO_DEADLINES_PENALTY
    if document_count == 0:
        score -= NO_DOCUMENTS_PENALTY
    return max(0, min(BASE_SCORE, score))


def generate_recommendations(
    overdue_count: int,
    high_priority_count: int,
    total_deadlines: int,
    document_count: int
) -> List[Dict[str, str]]:
    recommendations = []

    if overdue_count > 0:
        recommendations.append({
            "severity": "urgent",
            "title": "Address Overdue Deadlines",
            "description": f"You have {overdue_count} overdue deadline(s) that require immediate attention."
        })

    if high_priority_count > 0:
        recommendations.append({
            "severity": "high",
            "title": "High Priority Deadlines",
            "description": f"You have {high_priority_count} high-priority deadline(s) approaching."
        })

    if total_deadlines == 0:
        recommendations.append({
            "severity": "medium",
            "title": "Start Tracking Deadlines",
            "description": "Begin tracking your legal deadlines to maintain compliance."
        })

    if document_count == 0:
        recommendations.append({
            "severity": "medium",
            "title": "Upload Legal Documents",
            "description": "Upload your legal documents for analysis and management."
        })

    if not recommendations:
        recommendations.append({
            "severity": "success",
            "title": "Excellent Legal Health",
            "description": "Your legal compliance is in good standing!"
        })

    return recommendations


def collect_health_counts(db: Session, user: User) -> Dict[str, int]:
    """Counts feeding the risk score, read from the stored deadline status."""
    from clario.deadlines.models import Deadline
    from clario.documents.models import Document

    base_query = db.query(Deadline).filter(Deadline.user_id == user.id)

    return {
        "overdue_deadlines": base_query.filter(Deadline.status == DeadlineStatus.OVERDUE).count(),
        "high_priority_deadlines": base_query.filter(Deadline.priority.in_(HIGH_PRIORITIES)).count(),
        "total_deadlines": base_query.count(),
        "document_count": db.query(Document).filter(Document.user_id == user.id).count(),
    }


def build_health_check(db: Session, user: User) -> Dict[str, Any]:
    counts = collect_health_counts(db, user)
    args = (
        counts["overdue_deadlines"],
        counts["high_priority_deadlines"],
        counts["total_deadlines"],
        counts["document_count"],
    )
    return {
        "risk_score": calculate_risk_score(*args),
        "recommendations": generate_recommendations(*args),
        "summary": counts,
    }
