# DEPENDENCIES
import sys
from typing import Any
from typing import Dict
from typing import List
from pathlib import Path
from typing import Optional
from dataclasses import field
from dataclasses import dataclass

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from config.risk_rules import RiskCategory
from config.risk_rules import PreferenceDimension


@dataclass(frozen = True)
class UserPreferences:
    """
    Per-request weighting of the three preference dimensions

    risk_threshold and enable_notifications belong to the caller and are not
    consumed by the scoring engine
    """
    privacy_weight       : float = 0.4
    legal_rights_weight  : float = 0.4
    convenience_weight   : float = 0.2
    risk_threshold       : int   = 50
    enable_notifications : bool  = True


    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]] = None, defaults: Optional[Dict[str, Any]] = None) -> "UserPreferences":
        """
        Merge caller-supplied preferences over defaults

        Arguments:
        ----------
            data     { dict } : Caller preferences, missing or None values fall back to defaults

            defaults { dict } : Default values (class defaults when omitted)

        Returns:
        --------
            { UserPreferences } : Preferences with weights clamped into [0, 1]
        """
        merged = dict(defaults or {})

        for key, value in (data or {}).items():
            if value is not None:
                merged[key] = value

        kwargs = dict()

        for dimension in PreferenceDimension:
            if dimension.value in merged:
                try:
                    weight = float(merged[dimension.value])

                except (TypeError, ValueError):
                    raise ValueError(f"Preference {dimension.value} must be numeric, got {merged[dimension.value]!r}")

                kwargs[dimension.value] = min(1.0, max(0.0, weight))

        if "risk_threshold" in merged:
            kwargs["risk_threshold"] = int(merged["risk_threshold"])

        if "enable_notifications" in merged:
            kwargs["enable_notifications"] = bool(merged["enable_notifications"])

        return cls(**kwargs)


    def weight_for(self, dimension: PreferenceDimension) -> float:
        return getattr(self, dimension.value)


    def to_dict(self) -> Dict[str, Any]:
        return {"privacy_weight"       : self.privacy_weight,
                "legal_rights_weight"  : self.legal_rights_weight,
                "convenience_weight"   : self.convenience_weight,
                "risk_threshold"       : self.risk_threshold,
                "enable_notifications" : self.enable_notifications,
               }


@dataclass
class ClauseMatch:
    """
    A category's patterns firing against one clause
    """
    category         : RiskCategory
    category_name    : str
    severity         : float  # 0.0-1.0, fixed per category
    confidence       : float  # 0.6-0.95
    matched_text     : str
    matched_keywords : List[str]
    irreversible     : bool
    explanation      : str


    @property
    def rank_score(self) -> float:
        return self.severity * self.confidence


    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for serialization
        """
        return {"category"         : self.category.value,
                "category_name"    : self.category_name,
                "severity"         : self.severity,
                "confidence"       : round(self.confidence, 3),
                "matched_text"     : self.matched_text,
                "matched_keywords" : list(self.matched_keywords),
                "irreversible"     : self.irreversible,
                "explanation"      : self.explanation,
               }


@dataclass
class ClauseAnalysis:
    """
    One segmented clause with every category match it produced
    """
    text    : str
    matches : List[ClauseMatch] = field(default_factory = list)


    @property
    def is_risky(self) -> bool:
        return len(self.matches) > 0


    @property
    def highest_risk(self) -> float:
        return max((match.severity for match in self.matches), default = 0.0)


    def to_dict(self) -> Dict[str, Any]:
        return {"text"         : self.text,
                "matches"      : [match.to_dict() for match in self.matches],
                "is_risky"     : self.is_risky,
                "highest_risk" : self.highest_risk,
               }


@dataclass
class RedFlag:
    """
    Top-ranked, category-deduplicated match surfaced to the end user
    """
    text          : str
    explanation   : str
    implication   : str
    irreversible  : bool
    confidence    : float
    severity      : Optional[float]        = None
    category      : Optional[RiskCategory] = None
    category_name : Optional[str]          = None


    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary
        """
        return {"text"          : self.text,
                "explanation"   : self.explanation,
                "implication"   : self.implication,
                "irreversible"  : self.irreversible,
                "confidence"    : round(self.confidence, 3),
                "severity"      : self.severity,
                "category"      : self.category.value if self.category else None,
                "category_name" : self.category_name,
               }


@dataclass
class CategoryScore:
    """
    Average severity of one category across the document, on a 0-100 scale
    """
    key          : RiskCategory
    name         : str
    severity     : float
    clause_count : int


    def to_dict(self) -> Dict[str, Any]:
        return {"key"          : self.key.value,
                "name"         : self.name,
                "severity"     : round(self.severity, 2),
                "clause_count" : self.clause_count,
               }


@dataclass
class BenchmarkComparison:
    """
    Risk score compared against an industry peer group
    """
    category      : str   # bucket display name
    industry      : str
    percentage    : int   # positive means riskier than the bucket average
    average_score : int
    comparison    : str   # "worse" or "better"


    def to_dict(self) -> Dict[str, Any]:
        return {"category"      : self.category,
                "industry"      : self.industry,
                "percentage"    : self.percentage,
                "average_score" : self.average_score,
                "comparison"    : self.comparison,
               }


@dataclass
class AnalysisResult:
    """
    Complete risk assessment for one piece of legal text
    """
    risk_score       : float  # 0-100
    risk_level       : str    # "HIGH", "MEDIUM", "LOW", or "UNKNOWN" for fallback
    red_flags        : List[RedFlag]
    categories       : List[CategoryScore]
    benchmark        : Optional[BenchmarkComparison] = None
    clauses_analyzed : int                           = 0
    confidence       : float                         = 1.0
    metadata         : Dict[str, Any]                = field(default_factory = dict)
    fallback         : bool                          = False


    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for serialization
        """
        return {"risk_score"       : round(self.risk_score, 2),
                "risk_level"       : self.risk_level,
                "red_flags"        : [flag.to_dict() for flag in self.red_flags],
                "categories"       : [category.to_dict() for category in self.categories],
                "benchmark"        : self.benchmark.to_dict() if self.benchmark else None,
                "clauses_analyzed" : self.clauses_analyzed,
                "confidence"       : round(self.confidence, 3),
                "metadata"         : dict(self.metadata),
                "fallback"         : self.fallback,
               }
