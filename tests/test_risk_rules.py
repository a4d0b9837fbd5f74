import dataclasses

import pytest

from config.risk_rules import Industry
from config.risk_rules import RiskRules
from config.risk_rules import RiskCatalog
from config.risk_rules import RiskCategory
from config.risk_rules import compile_keyword


def test_catalog_has_eight_categories_in_enum_order(catalog):
    keys = [category.key for category in catalog.categories]
    assert keys == list(RiskCategory)
    assert len(keys) == 8


def test_category_weights_sum_to_one(catalog):
    assert catalog.total_weight() == pytest.approx(1.0)


def test_every_category_has_compiled_patterns(catalog):
    compiled = {pattern_set.category: pattern_set for pattern_set in catalog.compiled_patterns}

    for category in RiskCategory:
        pattern_set = compiled[category]
        assert pattern_set.matchers
        assert 0 <= pattern_set.severity <= 1
        assert len(pattern_set.matchers) == len(catalog.get_pattern_set(category).keywords)


def test_four_benchmark_buckets_with_technology_default(catalog):
    assert {bucket.industry for bucket in catalog.benchmarks} == set(Industry)
    assert catalog.default_industry is Industry.TECHNOLOGY
    assert catalog.get_benchmark(Industry.SOCIAL_MEDIA).average_risk_score == 65


def test_compile_keyword_treats_hyphen_and_space_alike():
    regex = compile_keyword("third-party advertisers")

    assert regex.search("sold to third party advertisers")
    assert regex.search("sold to third-party advertisers")
    assert regex.search("sold to THIRD-PARTY ADVERTISERS")
    assert not regex.search("sold to thirdparty advertisers")


def test_compile_keyword_escapes_literal_text():
    regex = compile_keyword("as-is (without) warranty")
    assert regex.search("provided as is (without) warranty")


def test_weight_drift_is_rejected_at_construction():
    categories = list(RiskRules.CATEGORIES)
    categories[0] = dataclasses.replace(categories[0], weight=0.5)

    with pytest.raises(ValueError, match="sum to 1.0"):
        RiskCatalog(categories=tuple(categories))


def test_missing_pattern_set_is_rejected():
    patterns = dict(RiskRules.PATTERNS)
    del patterns[RiskCategory.INDEFINITE_RETENTION]

    with pytest.raises(ValueError, match="No pattern set"):
        RiskCatalog(patterns=patterns)


def test_describe_categories_dump(catalog):
    dump = catalog.describe_categories()

    assert dump[0] == {"key": "DATA_SHARING_RESALE",
                       "name": "Data Sharing & Resale",
                       "description": "Clauses allowing sharing or selling user data to third parties",
                       "weight": 0.18,
                       "irreversible": False}
    assert {entry["key"] for entry in dump if entry["irreversible"]} == {"FORCED_ARBITRATION", "CLASS_ACTION_WAIVER"}


def test_catalog_views_are_read_only(catalog):
    with pytest.raises(TypeError):
        catalog._by_key[RiskCategory.FORCED_ARBITRATION] = None

    with pytest.raises(dataclasses.FrozenInstanceError):
        catalog.categories[0].weight = 1.0


def test_risk_thresholds_are_read_only(catalog):
    assert dict(catalog.risk_thresholds) == {"high": 70, "medium": 40}

    with pytest.raises(TypeError):
        catalog.risk_thresholds["high"] = 10

    with pytest.raises(TypeError):
        RiskRules.RISK_THRESHOLDS["high"] = 10


@pytest.mark.parametrize("thresholds", [{"high": 40, "medium": 70}, {"high": 120, "medium": 40}, {"high": 70}])
def test_inconsistent_risk_thresholds_are_rejected(thresholds):
    with pytest.raises(ValueError, match="Risk thresholds"):
        RiskCatalog(risk_thresholds=thresholds)
