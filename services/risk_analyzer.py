# DEPENDENCIES
import sys
from typing import Any
from typing import Dict
from typing import List
from typing import Union
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from utils.logger import log_info
from utils.logger import log_debug
from utils.logger import log_warning
from services.data_models import RedFlag
from config.risk_rules import RiskCatalog
from utils.logger import RiskEngineLogger
from utils.text_processor import TextProcessor
from services.risk_scorer import RiskScorer
from services.data_models import AnalysisResult
from services.data_models import UserPreferences
from config.risk_rules import get_default_catalog
from services.category_matcher import CategoryMatcher
from services.red_flag_selector import RedFlagSelector
from services.category_aggregator import CategoryAggregator
from services.confidence_estimator import ConfidenceEstimator
from services.benchmark_comparator import BenchmarkComparator
from services.explanation_provider import ExplanationProvider


class RiskAnalysisEngine:
    """
    Deterministic risk analysis of terms of service and privacy policies

    Analysis Pipeline:
    1. Preprocessing
    2. Clause Segmentation
    3. Category Matching
    4. Risk Scoring
    5. Red Flag Selection
    6. Category Aggregation
    7. Benchmark Comparison
    8. Confidence Estimation

    The engine holds no per-call state: every component only reads the
    catalog it was built with, so one instance can serve concurrent callers
    """
    def __init__(self, catalog: Optional[RiskCatalog] = None):
        """
        Initialize the engine with all analysis components

        Arguments:
        ----------
            catalog { RiskCatalog } : Rule tables, the process-wide default when omitted
        """
        self.catalog              = catalog or get_default_catalog()
        self.explanation_provider = ExplanationProvider(catalog = self.catalog)
        self.category_matcher     = CategoryMatcher(catalog              = self.catalog,
                                                    explanation_provider = self.explanation_provider,
                                                   )
        self.risk_scorer          = RiskScorer(catalog = self.catalog)
        self.red_flag_selector    = RedFlagSelector(explanation_provider = self.explanation_provider)
        self.category_aggregator  = CategoryAggregator(catalog = self.catalog)
        self.benchmark_comparator = BenchmarkComparator(catalog = self.catalog)
        self.confidence_estimator = ConfidenceEstimator()

        log_info("RiskAnalysisEngine initialized",
                 categories   = len(self.catalog.categories),
                 total_weight = round(self.catalog.total_weight(), 6),
                )


    @RiskEngineLogger.log_execution_time("analyze")
    def analyze(self, text: str, url: Optional[str] = None, language: str = "en",
                user_preferences: Optional[Union[UserPreferences, Dict[str, Any]]] = None) -> AnalysisResult:
        """
        Full risk analysis of one piece of legal text

        Arguments:
        ----------
            text             { str }  : Raw legal text

            url              { str }  : Source page, used only for benchmarking

            language         { str }  : Declared language, recorded in metadata

            user_preferences { dict } : UserPreferences or a dict of preference values

        Returns:
        --------
            { AnalysisResult } : Score, level, red flags, categories, benchmark and confidence
        """
        text            = text or ""
        preferences     = self._resolve_preferences(user_preferences = user_preferences)

        if language and not language.lower().startswith("en"):
            log_warning("Non-English text analyzed with English patterns", language = language)

        normalized_text = TextProcessor.normalize_text(text)
        clauses         = TextProcessor.extract_clauses(normalized_text)
        clause_analyses = self.category_matcher.analyze_clauses(clauses)

        log_debug("Clauses matched",
                  num_clauses  = len(clause_analyses),
                  risky        = sum(1 for clause in clause_analyses if clause.is_risky),
                 )

        risk_score      = self.risk_scorer.calculate_risk_score(clause_analyses = clause_analyses,
                                                                preferences     = preferences,
                                                               )
        risk_level      = self.risk_scorer.get_risk_level(score = risk_score)
        red_flags       = self.red_flag_selector.select_red_flags(clause_analyses = clause_analyses)
        categories      = self.category_aggregator.calculate_category_scores(clause_analyses = clause_analyses)
        benchmark       = self.benchmark_comparator.compare(url = url, risk_score = risk_score)
        confidence      = self.confidence_estimator.calculate_confidence(clause_analyses = clause_analyses)

        log_info("Risk analysis complete",
                 text_length = len(text),
                 num_clauses = len(clause_analyses),
                 risk_score  = round(risk_score, 2),
                 risk_level  = risk_level,
                 red_flags   = len(red_flags),
                )

        return AnalysisResult(risk_score       = risk_score,
                              risk_level       = risk_level,
                              red_flags        = red_flags,
                              categories       = categories,
                              benchmark        = benchmark,
                              clauses_analyzed = len(clause_analyses),
                              confidence       = confidence,
                              metadata         = {"url"                    : url,
                                                  "language"               : language,
                                                  "text_length"            : len(text),
                                                  "deterministic_analysis" : True,
                                                 },
                             )


    @RiskEngineLogger.log_execution_time("analyze_batch")
    def analyze_batch(self, items: List[Dict[str, Any]], language: str = "en",
                      user_preferences: Optional[Union[UserPreferences, Dict[str, Any]]] = None) -> List[AnalysisResult]:
        """
        Analyze several independent texts in input order

        Arguments:
        ----------
            items            { list } : Dicts with "text" and optional "url"

            language         { str }  : Language applied to every item

            user_preferences { dict } : Preferences applied to every item

        Returns:
        --------
                   { list }           : One AnalysisResult per item
        """
        preferences = self._resolve_preferences(user_preferences = user_preferences)

        log_info("Starting batch analysis", batch_size = len(items))

        return [self.analyze(text             = item.get("text"),
                             url              = item.get("url"),
                             language         = language,
                             user_preferences = preferences,
                            )
                for item in items]


    def get_categories(self) -> List[Dict[str, Any]]:
        """
        Static dump of the category catalog
        """
        return self.catalog.describe_categories()


    @staticmethod
    def get_fallback_analysis() -> AnalysisResult:
        """
        Canned result for callers whose analysis could not run

        Distinguished from a genuine clean result by fallback=True and the
        UNKNOWN risk level
        """
        return AnalysisResult(risk_score       = 0,
                              risk_level       = "UNKNOWN",
                              red_flags        = [RedFlag(text         = "Unable to analyze terms",
                                                          explanation  = "AI service is temporarily unavailable",
                                                          implication  = "Manual review recommended",
                                                          irreversible = False,
                                                          confidence   = 1.0,
                                                         )
                                                 ],
                              categories       = [],
                              benchmark        = None,
                              clauses_analyzed = 0,
                              confidence       = 1.0,
                              metadata         = {},
                              fallback         = True,
                             )


    @staticmethod
    def _resolve_preferences(user_preferences: Optional[Union[UserPreferences, Dict[str, Any]]]) -> UserPreferences:
        if isinstance(user_preferences, UserPreferences):
            return user_preferences

        return UserPreferences.from_dict(data = user_preferences)
