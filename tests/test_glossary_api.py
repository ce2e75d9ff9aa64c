from urllib.parse import quote

import pytest

from clario.glossary.models import LegalTerm
from clario.glossary.seed import LEGAL_TERMS, seed_glossary, main as seed_main
from clario.models import TermCategory


@pytest.fixture
def seeded(db):
    seed_glossary(db)
    return db


def term_by_name(db, term):
    return db.query(LegalTerm).filter(LegalTerm.term == term).one()


def test_seed_links_insertion_order_neighbours(seeded):
    terms = [term_by_name(seeded, data["term"]) for data in LEGAL_TERMS]
    assert {t.id for t in terms[1].related_terms} == {terms[0].id, terms[2].id}
    assert {t.id for t in terms[0].related_terms} == {terms[1].id}
    assert {t.id for t in terms[-1].related_terms} == {terms[-2].id}


def test_seed_replaces_existing_terms(seeded):
    assert seed_glossary(seeded) == len(LEGAL_TERMS)
    assert seeded.query(LegalTerm).count() == len(LEGAL_TERMS)


def test_seed_cli_requires_a_database():
    with pytest.raises(SystemExit):
        seed_main(["--database-url", ""])


def test_term_is_stored_lowercase(db):
    db.add(LegalTerm(
        term="  Estoppel ", display_term="Estoppel", definition="A bar to asserting a claim.",
        category=TermCategory.LITIGATION,
    ))
    db.commit()
    assert db.query(LegalTerm).one().term == "estoppel"


def test_search_matches_term_substring_case_insensitively(client, seeded):
    r = client.get("/api/glossary/?search=INDEMNIF")
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["ordering"] == "relevance"
    assert data["terms"][0]["term"] == "indemnification"


def test_search_ranks_term_matches_above_definition_matches(client, seeded):
    data = client.get("/api/glossary/?search=arbitration").json()["data"]
    names = [t["term"] for t in data["terms"]]
    assert names == ["arbitration"]

    # "breach" hits material-breach's term, "contract" only hits definitions
    data = client.get("/api/glossary/?search=breach contract&sort=complexity").json()["data"]
    assert data["ordering"] == "relevance"
    names = [t["term"] for t in data["terms"]]
    assert names[0] == "material-breach"
    assert "termination-clause" in names[1:]


def test_sort_orders_without_search(client, seeded):
    data = client.get("/api/glossary/?sort=alphabetical&limit=100").json()["data"]
    displays = [t["display_term"] for t in data["terms"]]
    assert data["ordering"] == "alphabetical"
    assert displays == sorted(displays)
    assert data["pagination"]["total"] == len(LEGAL_TERMS)

    data = client.get("/api/glossary/?sort=complexity&limit=100").json()["data"]
    levels = [t["complexity"] for t in data["terms"]]
    assert levels == sorted(levels, key=["basic", "intermediate", "advanced"].index)

    data = client.get("/api/glossary/?sort=category&limit=100").json()["data"]
    pairs = [(t["category"], t["display_term"]) for t in data["terms"]]
    assert pairs == sorted(pairs)


def test_filters_and_invalid_values(client, seeded):
    data = client.get("/api/glossary/?category=liability").json()["data"]
    assert {t["term"] for t in data["terms"]} == {"indemnification", "liability-limitation"}

    data = client.get("/api/glossary/?complexity=basic&category=litigation").json()["data"]
    assert [t["term"] for t in data["terms"]] == ["arbitration"]

    r = client.get("/api/glossary/?complexity=expert")
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "complexity"


def test_inactive_terms_are_hidden_everywhere(client, seeded):
    hidden = term_by_name(seeded, "force-majeure")
    neighbour = term_by_name(seeded, "indemnification")
    hidden_id, neighbour_id = hidden.id, neighbour.id
    hidden.is_active = False
    seeded.commit()

    assert client.get(f"/api/glossary/{hidden_id}").status_code == 404
    assert client.get("/api/glossary/search/majeure").json()["data"]["terms"] == []
    listed = client.get("/api/glossary/?limit=100").json()["data"]["terms"]
    assert "force-majeure" not in {t["term"] for t in listed}

    related = client.get(f"/api/glossary/{neighbour_id}").json()["data"]["related_terms"]
    assert related == []


def test_get_term_with_related_terms(client, seeded):
    term = term_by_name(seeded, "confidentiality-agreement")
    r = client.get(f"/api/glossary/{term.id}")
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["term"]["display_term"] == "Confidentiality Agreement"
    assert "nda" in data["term"]["synonyms"]
    assert [t["display_term"] for t in data["related_terms"]] == ["Force Majeure", "Liability Limitation"]


def test_quick_search_matches_synonyms(client, seeded):
    data = client.get("/api/glossary/search/Hold Harmless").json()["data"]
    assert [t["term"] for t in data["terms"]] == ["indemnification"]

    data = client.get("/api/glossary/search/clause").json()["data"]
    assert 0 < len(data["terms"]) <= 10


def test_quick_search_matches_each_synonym_separately(client, seeded):
    # Text spanning two synonyms is not a synonym
    spanning = quote('harmless", "defend')
    r = client.get(f"/api/glossary/search/{spanning}")
    assert r.status_code == 200
    assert r.json()["data"]["terms"] == []

    seeded.add(LegalTerm(
        term="penalty clause", display_term="Penalty Clause", definition="A fixed sum payable on breach.",
        category=TermCategory.CONTRACT, synonyms=["clause pénale"]
    ))
    seeded.commit()
    data = client.get(f"/api/glossary/search/{quote('pénale')}").json()["data"]
    assert [t["term"] for t in data["terms"]] == ["penalty clause"]


def test_categories_report_counts(client, seeded):
    categories = client.get("/api/glossary/categories").json()["data"]["categories"]
    counts = {c["category"]: c["count"] for c in categories}
    assert counts["contract"] == 6
    assert counts["liability"] == 2
    assert sum(counts.values()) == len(LEGAL_TERMS)


def test_random_terms(client, seeded):
    assert len(client.get("/api/glossary/random").json()["data"]["terms"]) == 5
    assert len(client.get("/api/glossary/random/3").json()["data"]["terms"]) == 3
    assert client.get("/api/glossary/random/51").status_code == 400


def test_glossary_is_public(client, seeded):
    r = client.get("/api/glossary/")
    assert r.status_code == 200
    assert r.json()["data"]["pagination"]["total"] == len(LEGAL_TERMS)
