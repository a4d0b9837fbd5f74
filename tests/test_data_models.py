import pytest

from config.risk_rules import RiskCategory
from config.risk_rules import PreferenceDimension
from services.data_models import RedFlag
from services.data_models import AnalysisResult
from services.data_models import UserPreferences


def test_preferences_default_values():
    preferences = UserPreferences.from_dict()

    assert preferences.privacy_weight == 0.4
    assert preferences.legal_rights_weight == 0.4
    assert preferences.convenience_weight == 0.2
    assert preferences.risk_threshold == 50
    assert preferences.enable_notifications is True


def test_preferences_merge_over_defaults_ignoring_none():
    defaults    = {"privacy_weight": 0.3, "legal_rights_weight": 0.3, "convenience_weight": 0.4}
    preferences = UserPreferences.from_dict({"privacy_weight": 0.9, "legal_rights_weight": None}, defaults)

    assert preferences.privacy_weight == 0.9
    assert preferences.legal_rights_weight == 0.3
    assert preferences.convenience_weight == 0.4


def test_preferences_weights_are_clamped():
    preferences = UserPreferences.from_dict({"privacy_weight": 3, "convenience_weight": -1})

    assert preferences.privacy_weight == 1.0
    assert preferences.convenience_weight == 0.0


def test_preferences_reject_non_numeric_weight():
    with pytest.raises(ValueError, match="privacy_weight"):
        UserPreferences.from_dict({"privacy_weight": "lots"})


def test_weight_for_dimension():
    preferences = UserPreferences(privacy_weight=0.7)

    assert preferences.weight_for(PreferenceDimension.PRIVACY) == 0.7
    assert preferences.weight_for(PreferenceDimension.CONVENIENCE) == 0.2


def test_analysis_result_serialization_rounds_values():
    flag   = RedFlag(text="t", explanation="e", implication="i", irreversible=True, confidence=0.8999999999999999,
                     severity=0.95, category=RiskCategory.FORCED_ARBITRATION, category_name="Forced Arbitration")
    result = AnalysisResult(risk_score=76.49999, risk_level="HIGH", red_flags=[flag], categories=[], confidence=0.82499999)

    payload = result.to_dict()

    assert payload["risk_score"] == 76.5
    assert payload["confidence"] == 0.825
    assert payload["benchmark"] is None
    assert payload["fallback"] is False
    assert payload["red_flags"][0]["confidence"] == 0.9
    assert payload["red_flags"][0]["category"] == "FORCED_ARBITRATION"
