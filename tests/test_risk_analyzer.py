import json

import pytest

from config.risk_rules import RiskCategory
from services.data_models import UserPreferences
from services.risk_analyzer import RiskAnalysisEngine


SHARING_AND_ARBITRATION = ("We share your data with third parties and data brokers. "
                           "You agree to binding arbitration of every claim against us.")


def test_clean_text_scores_low(engine):
    result = engine.analyze("Our support team answers questions within one business day. Thanks for reading our notes.")

    assert result.risk_score == 0.0
    assert result.risk_level == "LOW"
    assert result.red_flags == []
    assert result.categories == []
    assert result.clauses_analyzed == 2
    assert result.confidence == 1.0
    assert result.benchmark.percentage == -100


def test_empty_text_yields_empty_analysis(engine):
    result = engine.analyze("")

    assert result.clauses_analyzed == 0
    assert result.risk_score == 0.0
    assert result.risk_level == "LOW"


def test_short_fragments_are_not_clauses(engine):
    result = engine.analyze("Hi there. Read this! Agree now? Sure thing.")

    assert result.clauses_analyzed == 0
    assert result.risk_score == 0.0


def test_permissive_data_sharing_clause(engine):
    result = engine.analyze("We may share your data with third party advertisers.")

    assert [flag.category for flag in result.red_flags] == [RiskCategory.DATA_SHARING_RESALE]
    assert result.red_flags[0].confidence >= 0.6
    assert result.risk_score == pytest.approx(76.5)
    assert result.risk_level == "HIGH"


def test_arbitration_and_class_waiver_with_obligation(engine):
    result = engine.analyze("You must agree to mandatory arbitration and waive right to jury trial "
                            "and waive right to class action.")

    categories = {flag.category for flag in result.red_flags}
    assert categories == {RiskCategory.FORCED_ARBITRATION, RiskCategory.CLASS_ACTION_WAIVER}
    assert result.risk_score == 100.0
    assert result.risk_level == "HIGH"
    assert result.clauses_analyzed == 1


def test_privacy_only_preferences_lower_the_score(engine):
    default_result = engine.analyze(SHARING_AND_ARBITRATION)
    privacy_result = engine.analyze(SHARING_AND_ARBITRATION,
                                    user_preferences={"privacy_weight": 1, "legal_rights_weight": 0, "convenience_weight": 0})

    assert privacy_result.risk_score == pytest.approx(85.0)
    assert privacy_result.risk_score < default_result.risk_score


def test_preferences_object_is_accepted(engine):
    result = engine.analyze(SHARING_AND_ARBITRATION,
                            user_preferences=UserPreferences(privacy_weight=1.0, legal_rights_weight=0.0, convenience_weight=0.0))

    assert result.risk_score == pytest.approx(85.0)


def test_analysis_is_idempotent(engine):
    first  = engine.analyze(SHARING_AND_ARBITRATION, url="https://www.facebook.com/terms")
    second = engine.analyze(SHARING_AND_ARBITRATION, url="https://www.facebook.com/terms")

    assert json.dumps(first.to_dict(), sort_keys=True) == json.dumps(second.to_dict(), sort_keys=True)


def test_repeated_keyword_never_lowers_confidence(engine):
    once  = engine.analyze("Every claim goes to binding arbitration in our home state.")
    twice = engine.analyze("Every claim goes to binding arbitration, and binding arbitration is final.")

    assert twice.red_flags[0].confidence >= once.red_flags[0].confidence


def test_red_flags_are_capped_and_distinct(engine):
    text   = ("We sell your personal information to data brokers. "
              "Mandatory arbitration applies to every user of the service. "
              "A class action waiver applies to every user of the service. "
              "We collect usage data and track your location constantly. "
              "We reserve the right to modify these terms whenever we like. "
              "We can terminate your account at any time for no reason.")
    result = engine.analyze(text)

    assert len(result.red_flags) == 3
    assert len({flag.category for flag in result.red_flags}) == 3
    assert result.clauses_analyzed == 6
    assert 0.0 <= result.risk_score <= 100.0
    assert 0.0 <= result.confidence <= 1.0


def test_metadata_and_benchmark(engine):
    result = engine.analyze(SHARING_AND_ARBITRATION, url="https://www.paypal.com/legal", language="en")

    assert result.metadata == {"url": "https://www.paypal.com/legal",
                               "language": "en",
                               "text_length": len(SHARING_AND_ARBITRATION),
                               "deterministic_analysis": True}
    assert result.benchmark.industry == "FINANCIAL"
    assert result.fallback is False


def test_malformed_url_still_analyzes(engine):
    result = engine.analyze(SHARING_AND_ARBITRATION, url="http://[broken")

    assert result.benchmark.industry == "TECHNOLOGY"


def test_non_english_language_is_recorded(engine):
    result = engine.analyze(SHARING_AND_ARBITRATION, language="fr")

    assert result.metadata["language"] == "fr"
    assert result.risk_score > 0


def test_batch_keeps_input_order(engine):
    results = engine.analyze_batch([{"text": "We may share your data with third party advertisers."},
                                    {"text": "Nothing risky lives inside this friendly sentence.", "url": "https://www.amazon.com"}])

    assert len(results) == 2
    assert results[0].risk_score == pytest.approx(76.5)
    assert results[1].risk_score == 0.0
    assert results[1].benchmark.industry == "E_COMMERCE"


def test_get_categories_lists_catalog(engine):
    categories = engine.get_categories()

    assert len(categories) == 8
    assert categories[0]["key"] == "DATA_SHARING_RESALE"
    assert set(categories[0]) == {"key", "name", "description", "weight", "irreversible"}


def test_fallback_analysis_is_marked():
    fallback = RiskAnalysisEngine.get_fallback_analysis().to_dict()

    assert fallback["fallback"] is True
    assert fallback["risk_level"] == "UNKNOWN"
    assert fallback["risk_score"] == 0
    assert fallback["red_flags"][0]["text"] == "Unable to analyze terms"
    assert fallback["benchmark"] is None
