# DEPENDENCIES
import sys
from typing import List
from pathlib import Path
from collections import defaultdict

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from config.risk_rules import RiskCatalog
from services.data_models import CategoryScore
from services.data_models import ClauseAnalysis


class CategoryAggregator:
    """
    Per-category average severity for display
    """
    def __init__(self, catalog: RiskCatalog):
        self.catalog = catalog


    def calculate_category_scores(self, clause_analyses: List[ClauseAnalysis]) -> List[CategoryScore]:
        """
        Average match severity per category, scaled to 0-100

        Categories without any match are left out rather than shown as zero.
        Output follows catalog order
        """
        severity_totals = defaultdict(float)
        match_counts    = defaultdict(int)

        for clause in clause_analyses:
            for match in clause.matches:
                severity_totals[match.category] += match.severity
                match_counts[match.category]    += 1

        scores          = list()

        for category in self.catalog.categories:
            count = match_counts.get(category.key, 0)

            if (count == 0):
                continue

            scores.append(CategoryScore(key          = category.key,
                                        name         = category.name,
                                        severity     = (severity_totals[category.key] / count) * 100,
                                        clause_count = count,
                                       )
                         )

        return scores
