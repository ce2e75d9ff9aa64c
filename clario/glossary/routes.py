from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session
from sqlalchemy import or_, asc, desc, case, func
from typing import List, Literal, Optional

from clario.database import get_db, json_array_contains
from clario.glossary.models import LegalTerm
from clario.glossary.schemas import LegalTermResponse, RelatedTerm, CategoryCount
from clario.models import TermCategory, TermComplexity
from clario.responses import success
from clario.services.pagination import MAX_LIMIT, paginate

router = APIRouter(prefix="/glossary", tags=["Glossary"])

GLOSSARY_PAGE_SIZE = 20
SEARCH_RESULT_LIMIT = 10
RANDOM_DEFAULT_COUNT = 5
RANDOM_MAX_COUNT = 50
MAX_SEARCH_TOKENS = 10

COMPLEXITY_RANK = {
    TermComplexity.BASIC: 1,
    TermComplexity.INTERMEDIATE: 2,
    TermComplexity.ADVANCED: 3,
}


def serialize(term: LegalTerm) -> dict:
    return LegalTermResponse.model_validate(term).model_dump(mode="json")


def tokenize(search: str) -> List[str]:
    tokens = []
    for token in search.lower().split():
        if token not in tokens:
            tokens.append(token)
    return tokens[:MAX_SEARCH_TOKENS]


def relevance_score(tokens: List[str]):
    """Per token: exact term 3, term or display term substring 2, definition substring 1."""
    score = None
    for token in tokens:
        token_score = case(
            (LegalTerm.term == token, 3),
            (or_(
                LegalTerm.term.icontains(token, autoescape=True),
                LegalTerm.display_term.icontains(token, autoescape=True)
            ), 2),
            (LegalTerm.definition.icontains(token, autoescape=True), 1),
            else_=0
        )
        score = token_score if score is None else score + token_score
    return score


def token_filter(tokens: List[str]):
    return or_(*[
        or_(
            LegalTerm.term.icontains(token, autoescape=True),
            LegalTerm.display_term.icontains(token, autoescape=True),
            LegalTerm.definition.icontains(token, autoescape=True)
        )
        for token in tokens
    ])


def sort_columns(sort: str):
    if sort == "category":
        return (asc(LegalTerm.category), asc(LegalTerm.display_term))
    if sort == "complexity":
        return (asc(case(COMPLEXITY_RANK, value=LegalTerm.complexity, else_=0)), asc(LegalTerm.display_term))
    return (asc(LegalTerm.display_term),)


@router.get("/")
def list_terms(
    search: Optional[str] = Query(None, max_length=200),
    category: Optional[TermCategory] = None,
    complexity: Optional[TermComplexity] = None,
    sort: Literal["alphabetical", "category", "complexity"] = "alphabetical",
    page: int = Query(1, ge=1),
    limit: int = Query(GLOSSARY_PAGE_SIZE, ge=1, le=MAX_LIMIT),
    db: Session = Depends(get_db)
):
    """List active terms.

    With ``search`` the results are ranked by relevance and ``sort`` is
    ignored; ``ordering`` in the response says which of the two was applied.
    """
    query = db.query(LegalTerm).filter(LegalTerm.is_active.is_(True))

    if category:
        query = query.filter(LegalTerm.category == category)
    if complexity:
        query = query.filter(LegalTerm.complexity == complexity)

    tokens = tokenize(search) if search else []
    if tokens:
        query = query.filter(token_filter(tokens)).order_by(
            desc(relevance_score(tokens)), asc(LegalTerm.display_term)
        )
        ordering = "relevance"
    else:
        query = query.order_by(*sort_columns(sort), asc(LegalTerm.id))
        ordering = sort

    terms, pagination = paginate(query, page, limit)

    return success({
        "terms": [serialize(t) for t in terms],
        "ordering": ordering,
        "pagination": pagination
    })

@router.get("/search/{term}")
def search_terms(term: str, db: Session = Depends(get_db)):
    """Quick lookup by term, display term or synonym."""
    needle = term.strip().lower()
    if not needle:
        raise HTTPException(status_code=400, detail="Search term cannot be empty")

    terms = db.query(LegalTerm).filter(
        LegalTerm.is_active.is_(True),
        or_(
            LegalTerm.term.icontains(needle, autoescape=True),
            LegalTerm.display_term.icontains(needle, autoescape=True),
            json_array_contains(db, LegalTerm.synonyms, needle)
        )
    ).order_by(asc(LegalTerm.display_term)).limit(SEARCH_RESULT_LIMIT).all()

    return success({"terms": [serialize(t) for t in terms]})

@router.get("/categories")
def list_categories(db: Session = Depends(get_db)):
    rows = db.query(LegalTerm.category, func.count(LegalTerm.id)).filter(
        LegalTerm.is_active.is_(True)
    ).group_by(LegalTerm.category).order_by(asc(LegalTerm.category)).all()

    categories = [CategoryCount(category=category, count=count).model_dump(mode="json") for category, count in rows]
    return success({"categories": categories})

def sample_terms(db: Session, count: int) -> dict:
    terms = db.query(LegalTerm).filter(
        LegalTerm.is_active.is_(True)
    ).order_by(func.random()).limit(count).all()

    return success({"terms": [serialize(t) for t in terms]})

@router.get("/random")
def random_terms_default(db: Session = Depends(get_db)):
    return sample_terms(db, RANDOM_DEFAULT_COUNT)

@router.get("/random/{count}")
def random_terms(
    count: int = Path(..., ge=1, le=RANDOM_MAX_COUNT),
    db: Session = Depends(get_db)
):
    return sample_terms(db, count)

@router.get("/{term_id}")
def get_term(term_id: str, db: Session = Depends(get_db)):
    term = db.query(LegalTerm).filter(
        LegalTerm.id == term_id,
        LegalTerm.is_active.is_(True)
    ).first()

    if not term:
        raise HTTPException(status_code=404, detail="Legal term not found")

    related = sorted(term.active_related_terms, key=lambda t: t.display_term)
    return success({
        "term": serialize(term),
        "related_terms": [RelatedTerm.model_validate(t).model_dump(mode="json") for t in related]
    })
