# DEPENDENCIES
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from config.risk_rules import RiskCatalog
from config.risk_rules import RiskCategory


class ExplanationProvider:
    """
    Plain-English explanation and implication text per category

    Text is a static lookup keyed by category and never derived from the
    matched clause
    """
    DEFAULT_EXPLANATION = "This clause presents a potential risk to your rights or privacy."
    DEFAULT_IMPLICATION = "This clause may negatively impact your rights or privacy."


    def __init__(self, catalog: RiskCatalog):
        self.explanations = {category.key: category.explanation for category in catalog.categories}
        self.implications = {category.key: category.implication for category in catalog.categories}


    def explain(self, category: RiskCategory) -> str:
        return self.explanations.get(category) or self.DEFAULT_EXPLANATION


    def implication(self, category: RiskCategory) -> str:
        return self.implications.get(category) or self.DEFAULT_IMPLICATION
