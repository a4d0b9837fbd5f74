# DEPENDENCIES
import sys
from typing import List
from typing import Tuple
from pathlib import Path

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from config.risk_rules import RiskCatalog
from config.risk_rules import RiskCategory
from services.data_models import ClauseMatch
from services.data_models import ClauseAnalysis
from services.data_models import UserPreferences


class RiskScorer:
    """
    Aggregates clause matches into a single 0-100 risk score

    Scoring:
    1. Each match is weighted by its category weight times the user weight of
       the preference dimension the category belongs to
    2. Raw score is the weighted mean of match severities, scaled to 100
    3. Linguistic modifiers found anywhere in the text adjust the raw score
    4. Result is clamped into [0, 100]
    """
    def __init__(self, catalog: RiskCatalog):
        self.catalog = catalog


    def calculate_risk_score(self, clause_analyses: List[ClauseAnalysis], preferences: UserPreferences) -> float:
        """
        Arguments:
        ----------
            clause_analyses { list }            : Every segmented clause, risky or not

            preferences     { UserPreferences } : Weighting of preference dimensions

        Returns:
        --------
                      { float }                 : Score in [0, 100], 0 when nothing matched
        """
        total_weighted_score = 0.0
        total_weight         = 0.0

        for clause in clause_analyses:
            if not clause.is_risky:
                continue

            for match in clause.matches:
                combined_weight       = self.combined_weight(match = match, preferences = preferences)
                total_weighted_score += match.severity * combined_weight
                total_weight         += combined_weight

        if (total_weight == 0):
            return 0.0

        raw_score   = (total_weighted_score / total_weight) * 100
        text        = " ".join(clause.text for clause in clause_analyses)
        final_score = raw_score * self.linguistic_multiplier(text = text)

        return min(100.0, max(0.0, final_score))


    def combined_weight(self, match: ClauseMatch, preferences: UserPreferences) -> float:
        category_weight = self.catalog.get_category(match.category).weight
        user_weight     = self.user_weight(category = match.category, preferences = preferences)

        return category_weight * user_weight


    def user_weight(self, category: RiskCategory, preferences: UserPreferences) -> float:
        """
        User weight of the dimension a category maps to, 1.0 for unmapped categories

        A weight of zero is honoured and removes the category from the score
        """
        dimension = self.catalog.get_category(category).dimension

        if dimension is None:
            return 1.0

        return preferences.weight_for(dimension)


    def detect_modifiers(self, text: str) -> List[Tuple[str, float]]:
        """
        Linguistic modifiers present in the text, as (label, adjustment) pairs
        """
        lower_text = text.lower()

        return [(label, adjustment) for regex, adjustment, label in self.catalog.linguistic_modifiers if regex.search(lower_text)]


    def linguistic_multiplier(self, text: str) -> float:
        """
        Additive adjustments on a base multiplier of 1.0
        """
        return 1.0 + sum(adjustment for _, adjustment in self.detect_modifiers(text = text))


    def get_risk_level(self, score: float) -> str:
        """
        Convert numeric score to risk level using the catalog thresholds
        """
        thresholds = self.catalog.risk_thresholds

        if (score >= thresholds["high"]):
            return "HIGH"

        elif (score >= thresholds["medium"]):
            return "MEDIUM"

        return "LOW"
