# DEPENDENCIES
from .risk_scorer import RiskScorer
from .data_models import RedFlag
from .data_models import ClauseMatch
from .data_models import CategoryScore
from .data_models import AnalysisResult
from .data_models import ClauseAnalysis
from .data_models import UserPreferences
from .data_models import BenchmarkComparison
from .category_matcher import CategoryMatcher
from .red_flag_selector import RedFlagSelector
from .risk_analyzer import RiskAnalysisEngine
from .category_aggregator import CategoryAggregator
from .confidence_estimator import ConfidenceEstimator
from .benchmark_comparator import BenchmarkComparator
from .explanation_provider import ExplanationProvider



__all__ = ['RedFlag',
           'RiskScorer',
           'ClauseMatch',
           'CategoryScore',
           'AnalysisResult',
           'ClauseAnalysis',
           'CategoryMatcher',
           'RedFlagSelector',
           'UserPreferences',
           'CategoryAggregator',
           'RiskAnalysisEngine',
           'BenchmarkComparison',
           'ConfidenceEstimator',
           'BenchmarkComparator',
           'ExplanationProvider',
          ]
