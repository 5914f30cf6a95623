from closewise.utils import credit_tier_for_score


def test_credit_tier_for_score():
    assert credit_tier_for_score(800) == "760"
    assert credit_tier_for_score(745) == "740"
    assert credit_tier_for_score("721") == "720"
    assert credit_tier_for_score(580) == "620"


def test_credit_tier_unparseable():
    assert credit_tier_for_score(None) == "760"
    assert credit_tier_for_score("n/a") == "760"
