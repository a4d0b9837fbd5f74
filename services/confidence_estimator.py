# DEPENDENCIES
import sys
import numpy as np
from typing import List
from pathlib import Path

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from services.data_models import ClauseAnalysis


class ConfidenceEstimator:
    """
    Overall confidence of an analysis
    """
    # Nothing flagged counts as full confidence, not "unknown"
    NO_MATCH_CONFIDENCE = 1.0


    @classmethod
    def calculate_confidence(cls, clause_analyses: List[ClauseAnalysis]) -> float:
        """
        Arithmetic mean of every match confidence across the document

        Arguments:
        ----------
            clause_analyses { list } : Analyzed clauses

        Returns:
        --------
                 { float }           : Mean confidence in [0, 1]
        """
        confidences = [match.confidence for clause in clause_analyses if clause.is_risky for match in clause.matches]

        if not confidences:
            return cls.NO_MATCH_CONFIDENCE

        return float(np.mean(confidences))
