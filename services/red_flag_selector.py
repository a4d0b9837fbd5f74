# DEPENDENCIES
import sys
from typing import List
from pathlib import Path

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from services.data_models import RedFlag
from services.data_models import ClauseAnalysis
from services.explanation_provider import ExplanationProvider


class RedFlagSelector:
    """
    Picks the highest-ranked matches, at most one per category
    """
    MAX_RED_FLAGS = 3


    def __init__(self, explanation_provider: ExplanationProvider, max_red_flags: int = MAX_RED_FLAGS):
        self.explanation_provider = explanation_provider
        self.max_red_flags        = max_red_flags


    def select_red_flags(self, clause_analyses: List[ClauseAnalysis]) -> List[RedFlag]:
        """
        Rank every match by severity x confidence and keep the first hit of
        each category until the limit is reached

        Arguments:
        ----------
            clause_analyses { list } : Clauses in source order

        Returns:
        --------
                 { list }            : Up to max_red_flags entries with distinct categories
        """
        all_matches     = [match for clause in clause_analyses for match in clause.matches]

        # sorted() is stable: ties keep clause order, then catalog order
        ranked          = sorted(all_matches, key = lambda match: match.rank_score, reverse = True)

        red_flags       = list()
        used_categories = set()

        for match in ranked:
            if (len(red_flags) >= self.max_red_flags):
                break

            if match.category in used_categories:
                continue

            used_categories.add(match.category)

            red_flags.append(RedFlag(text          = match.matched_text,
                                     explanation   = match.explanation,
                                     implication   = self.explanation_provider.implication(match.category),
                                     irreversible  = match.irreversible,
                                     confidence    = match.confidence,
                                     severity      = match.severity,
                                     category      = match.category,
                                     category_name = match.category_name,
                                    )
                            )

        return red_flags
