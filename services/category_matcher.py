# DEPENDENCIES
import sys
from typing import List
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from config.risk_rules import RiskCatalog
from services.data_models import ClauseMatch
from services.data_models import ClauseAnalysis
from config.risk_rules import CompiledPatternSet
from services.explanation_provider import ExplanationProvider


class CategoryMatcher:
    """
    Multi-label matching of clauses against the category pattern catalog
    """
    BASE_CONFIDENCE     = 0.6
    CONFIDENCE_PER_HIT  = 0.15
    MAX_CONFIDENCE      = 0.95


    def __init__(self, catalog: RiskCatalog, explanation_provider: Optional[ExplanationProvider] = None):
        """
        Arguments:
        ----------
            catalog              { RiskCatalog }         : Immutable category and pattern tables

            explanation_provider { ExplanationProvider } : Source of explanation text for matches
        """
        self.catalog              = catalog
        self.explanation_provider = explanation_provider or ExplanationProvider(catalog = catalog)


    @classmethod
    def confidence_for(cls, hit_count: int) -> float:
        """
        Confidence grows with the number of distinct keywords that fired
        """
        return min(cls.MAX_CONFIDENCE, cls.BASE_CONFIDENCE + cls.CONFIDENCE_PER_HIT * hit_count)


    def analyze_clause(self, clause: str) -> ClauseAnalysis:
        """
        Test one clause against every category, in catalog order

        Arguments:
        ----------
            clause { str }      : Clause text

        Returns:
        --------
            { ClauseAnalysis }  : Clause with zero or more matches
        """
        lower_clause = clause.lower()
        matches      = list()

        for pattern_set in self.catalog.compiled_patterns:
            match = self._match_category(clause       = clause,
                                         lower_clause = lower_clause,
                                         pattern_set  = pattern_set,
                                        )

            if match:
                matches.append(match)

        return ClauseAnalysis(text    = clause,
                              matches = matches,
                             )


    def analyze_clauses(self, clauses: List[str]) -> List[ClauseAnalysis]:
        return [self.analyze_clause(clause) for clause in clauses]


    def _match_category(self, clause: str, lower_clause: str, pattern_set: CompiledPatternSet) -> Optional[ClauseMatch]:
        matched_keywords = [keyword for keyword, regex in pattern_set.matchers if regex.search(lower_clause)]

        if not matched_keywords:
            return None

        category = self.catalog.get_category(pattern_set.category)

        return ClauseMatch(category         = category.key,
                           category_name    = category.name,
                           severity         = pattern_set.severity,
                           confidence       = self.confidence_for(len(matched_keywords)),
                           matched_text     = clause,
                           matched_keywords = matched_keywords,
                           irreversible     = category.irreversible,
                           explanation      = self.explanation_provider.explain(category.key),
                          )
