import pytest

from clario.glossary.models import LegalTerm
from clario.models import TermCategory
from clario.services.pagination import paginate


@pytest.fixture
def terms(db):
    for i in range(7):
        db.add(LegalTerm(
            term=f"term-{i}", display_term=f"Term {i}", definition="d", category=TermCategory.GENERAL
        ))
    db.commit()
    return db.query(LegalTerm).order_by(LegalTerm.display_term)


def test_pages_round_up(terms):
    items, pagination = paginate(terms, page=1, limit=3)
    assert [t.display_term for t in items] == ["Term 0", "Term 1", "Term 2"]
    assert pagination == {"current": 1, "pages": 3, "total": 7}


def test_last_partial_page(terms):
    items, pagination = paginate(terms, page=3, limit=3)
    assert [t.display_term for t in items] == ["Term 6"]
    assert pagination["pages"] == 3


def test_page_past_the_end_is_empty_but_keeps_total(terms):
    items, pagination = paginate(terms, page=5, limit=3)
    assert items == []
    assert pagination == {"current": 5, "pages": 3, "total": 7}


def test_empty_collection_has_zero_pages(db):
    items, pagination = paginate(db.query(LegalTerm), page=1, limit=10)
    assert items == []
    assert pagination == {"current": 1, "pages": 0, "total": 0}
