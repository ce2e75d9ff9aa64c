from clario.services.health_service import calculate_risk_score, generate_recommendations


def test_perfect_score_with_activity_and_nothing_pending():
    assert calculate_risk_score(0, 0, 4, 2) == 100


def test_penalties_are_applied():
    # 3 overdue + 2 high priority with deadlines and documents present
    assert calculate_risk_score(3, 2, 5, 1) == 20
    assert calculate_risk_score(1, 2, 3, 1) == 60


def test_empty_account_is_penalised_for_missing_deadlines_and_documents():
    assert calculate_risk_score(0, 0, 0, 0) == 50


def test_score_is_clamped_to_zero():
    assert calculate_risk_score(10, 10, 20, 0) == 0


def test_score_never_increases_with_more_overdue_or_high_priority():
    previous = 100
    for overdue in range(8):
        score = calculate_risk_score(overdue, overdue, 10, 1)
        assert 0 <= score <= previous
        previous = score


def test_recommendations_are_ordered_by_severity():
    items = generate_recommendations(2, 1, 0, 0)
    assert [i["severity"] for i in items] == ["urgent", "high", "medium", "medium"]
    assert "2 overdue" in items[0]["description"]
    assert items[2]["title"] == "Start Tracking Deadlines"
    assert items[3]["title"] == "Upload Legal Documents"


def test_all_clear_recommendation():
    items = generate_recommendations(0, 0, 3, 1)
    assert items == [{
        "severity": "success",
        "title": "Excellent Legal Health",
        "description": "Your legal compliance is in good standing!",
    }]
