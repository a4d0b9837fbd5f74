# DEPENDENCIES
import re
import math
from enum import Enum
from typing import Dict
from typing import List
from typing import Tuple
from typing import Pattern
from typing import Mapping
from typing import Optional
from types import MappingProxyType
from dataclasses import dataclass


class RiskCategory(Enum):
    DATA_SHARING_RESALE     = "DATA_SHARING_RESALE"
    FORCED_ARBITRATION      = "FORCED_ARBITRATION"
    CLASS_ACTION_WAIVER     = "CLASS_ACTION_WAIVER"
    SURVEILLANCE_TRACKING   = "SURVEILLANCE_TRACKING"
    UNILATERAL_MODIFICATION = "UNILATERAL_MODIFICATION"
    ACCOUNT_TERMINATION     = "ACCOUNT_TERMINATION"
    LIABILITY_LIMITATION    = "LIABILITY_LIMITATION"
    INDEFINITE_RETENTION    = "INDEFINITE_RETENTION"


class PreferenceDimension(Enum):
    PRIVACY      = "privacy_weight"
    LEGAL_RIGHTS = "legal_rights_weight"
    CONVENIENCE  = "convenience_weight"


class Industry(Enum):
    SOCIAL_MEDIA = "SOCIAL_MEDIA"
    E_COMMERCE   = "E_COMMERCE"
    FINANCIAL    = "FINANCIAL"
    TECHNOLOGY   = "TECHNOLOGY"


@dataclass(frozen = True)
class CategoryDefinition:
    """
    Static description of one risk category
    """
    key          : RiskCategory
    name         : str
    weight       : float
    description  : str
    irreversible : bool
    dimension    : Optional[PreferenceDimension]  # None weighs 1.0 for every user
    explanation  : str
    implication  : str


@dataclass(frozen = True)
class PatternSet:
    """
    Keyword fragments and baseline severity for a category

    Indicators are documentation only and never take part in matching
    """
    keywords   : Tuple[str, ...]
    severity   : float
    indicators : Tuple[str, ...]


@dataclass(frozen = True)
class BenchmarkBucket:
    industry           : Industry
    name               : str
    average_risk_score : int
    examples           : Tuple[str, ...]
    domain_fragments   : Tuple[str, ...]


@dataclass(frozen = True)
class CompiledPatternSet:
    category : RiskCategory
    severity : float
    matchers : Tuple[Tuple[str, Pattern], ...]


class RiskRules:
    """
    Rule tables for terms-of-service and privacy-policy risk analysis
    """
    CATEGORIES            = (CategoryDefinition(key          = RiskCategory.DATA_SHARING_RESALE,
                                                name         = "Data Sharing & Resale",
                                                weight       = 0.18,
                                                description  = "Clauses allowing sharing or selling user data to third parties",
                                                irreversible = False,
                                                dimension    = PreferenceDimension.PRIVACY,
                                                explanation  = "This clause indicates your personal data may be shared with or sold to third parties, including advertisers, data brokers, or affiliate companies.",
                                                implication  = "Your personal data could be sold to or shared with unknown third parties for profit.",
                                               ),
                             CategoryDefinition(key          = RiskCategory.FORCED_ARBITRATION,
                                                name         = "Forced Arbitration",
                                                weight       = 0.16,
                                                description  = "Mandatory arbitration clauses preventing court access",
                                                irreversible = True,
                                                dimension    = PreferenceDimension.LEGAL_RIGHTS,
                                                explanation  = "You would be required to resolve disputes through private arbitration rather than in court, forfeiting your right to a jury trial.",
                                                implication  = "You permanently give up your right to sue this company in court, even if they seriously harm you.",
                                               ),
                             CategoryDefinition(key          = RiskCategory.CLASS_ACTION_WAIVER,
                                                name         = "Class Action Waiver",
                                                weight       = 0.14,
                                                description  = "Prohibitions on participating in class action lawsuits",
                                                irreversible = True,
                                                dimension    = PreferenceDimension.LEGAL_RIGHTS,
                                                explanation  = "You cannot join class-action lawsuits against the company, limiting your ability to seek justice collectively with other users.",
                                                implication  = "You cannot join other users in class-action lawsuits, limiting your legal recourse.",
                                               ),
                             CategoryDefinition(key          = RiskCategory.SURVEILLANCE_TRACKING,
                                                name         = "Surveillance & Tracking",
                                                weight       = 0.15,
                                                description  = "Extensive monitoring and tracking of user behavior",
                                                irreversible = False,
                                                dimension    = PreferenceDimension.PRIVACY,
                                                explanation  = "The company monitors and tracks your activities, location, or behavior, potentially across multiple devices and platforms.",
                                                implication  = "The company may extensively monitor your activities across devices and platforms.",
                                               ),
                             CategoryDefinition(key          = RiskCategory.UNILATERAL_MODIFICATION,
                                                name         = "Unilateral Policy Modification",
                                                weight       = 0.12,
                                                description  = "Company can change terms without consent",
                                                irreversible = False,
                                                dimension    = PreferenceDimension.CONVENIENCE,
                                                explanation  = "The company can change these terms at any time without notice, and your continued use constitutes automatic acceptance.",
                                                implication  = "The company can change the rules at any time without asking for your permission.",
                                               ),
                             CategoryDefinition(key          = RiskCategory.ACCOUNT_TERMINATION,
                                                name         = "Account Termination Rights",
                                                weight       = 0.08,
                                                description  = "Broad rights to suspend or terminate accounts",
                                                irreversible = False,
                                                dimension    = PreferenceDimension.CONVENIENCE,
                                                explanation  = "The company can suspend or terminate your account at their discretion, potentially without notice or explanation.",
                                                implication  = "Your account could be deleted at any time without warning or explanation.",
                                               ),
                             CategoryDefinition(key          = RiskCategory.LIABILITY_LIMITATION,
                                                name         = "Liability Limitation",
                                                weight       = 0.09,
                                                description  = "Limiting company liability for damages",
                                                irreversible = False,
                                                dimension    = PreferenceDimension.LEGAL_RIGHTS,
                                                explanation  = "The company's liability for damages is limited, potentially leaving you without recourse if their service causes you harm.",
                                                implication  = "The company limits what they have to pay if their mistakes cause you harm.",
                                               ),
                             CategoryDefinition(key          = RiskCategory.INDEFINITE_RETENTION,
                                                name         = "Indefinite Data Retention",
                                                weight       = 0.08,
                                                description  = "Keeping user data indefinitely without deletion options",
                                                irreversible = False,
                                                dimension    = PreferenceDimension.PRIVACY,
                                                explanation  = "Your data may be kept indefinitely even after you delete your account or stop using the service.",
                                                implication  = "Your data may be kept forever, even after you delete your account.",
                                               ),
                            )

    # Hyphens and spaces inside a keyword are interchangeable at match time
    PATTERNS              = {RiskCategory.DATA_SHARING_RESALE     : PatternSet(keywords   = ("share your data with third parties",
                                                                                             "sell your personal information",
                                                                                             "data brokers",
                                                                                             "affiliate sharing",
                                                                                             "partner companies",
                                                                                             "third-party advertisers",
                                                                                             "cross-device tracking",
                                                                                             "data resellers",
                                                                                            ),
                                                                               severity   = 0.85,
                                                                               indicators = ("sell", "resell", "share with third", "data broker", "affiliate"),
                                                                              ),
                             RiskCategory.FORCED_ARBITRATION      : PatternSet(keywords   = ("mandatory arbitration",
                                                                                             "binding arbitration",
                                                                                             "waive right to jury trial",
                                                                                             "arbitrate any dispute",
                                                                                             "no right to sue in court",
                                                                                             "individual arbitration only",
                                                                                            ),
                                                                               severity   = 0.95,
                                                                               indicators = ("arbitration", "waive", "jury trial", "dispute resolution"),
                                                                              ),
                             RiskCategory.CLASS_ACTION_WAIVER     : PatternSet(keywords   = ("waive right to class action",
                                                                                             "no class-action lawsuits",
                                                                                             "individual claims only",
                                                                                             "cannot participate in class action",
                                                                                             "class action waiver",
                                                                                            ),
                                                                               severity   = 0.90,
                                                                               indicators = ("class action", "collective action", "group lawsuit"),
                                                                              ),
                             RiskCategory.SURVEILLANCE_TRACKING   : PatternSet(keywords   = ("track your location",
                                                                                             "monitor your activity",
                                                                                             "collect usage data",
                                                                                             "behavioral tracking",
                                                                                             "cross-site tracking",
                                                                                             "fingerprinting",
                                                                                             "device identifiers",
                                                                                            ),
                                                                               severity   = 0.75,
                                                                               indicators = ("track", "monitor", "collect data", "fingerprint", "identifiers"),
                                                                              ),
                             RiskCategory.UNILATERAL_MODIFICATION : PatternSet(keywords   = ("reserve the right to modify",
                                                                                             "change these terms at any time",
                                                                                             "update without notice",
                                                                                             "modifications effective immediately",
                                                                                             "continued use constitutes acceptance",
                                                                                            ),
                                                                               severity   = 0.70,
                                                                               indicators = ("modify", "change", "update", "without notice", "reserve right"),
                                                                              ),
                             RiskCategory.ACCOUNT_TERMINATION     : PatternSet(keywords   = ("terminate your account at any time",
                                                                                             "suspend without notice",
                                                                                             "refuse service at our discretion",
                                                                                             "disable access immediately",
                                                                                             "cancel for any reason",
                                                                                            ),
                                                                               severity   = 0.65,
                                                                               indicators = ("terminate", "suspend", "disable", "refuse service", "without notice"),
                                                                              ),
                             RiskCategory.LIABILITY_LIMITATION    : PatternSet(keywords   = ("not liable for any damages",
                                                                                             "maximum liability limited to",
                                                                                             "exclude consequential damages",
                                                                                             "as-is without warranty",
                                                                                             "disclaim all warranties",
                                                                                            ),
                                                                               severity   = 0.60,
                                                                               indicators = ("not liable", "limited liability", "exclude damages", "warranty disclaimer"),
                                                                              ),
                             RiskCategory.INDEFINITE_RETENTION    : PatternSet(keywords   = ("retain your data indefinitely",
                                                                                             "no obligation to delete",
                                                                                             "store as long as necessary",
                                                                                             "keep records forever",
                                                                                             "indefinite storage period",
                                                                                            ),
                                                                               severity   = 0.70,
                                                                               indicators = ("retain indefinitely", "no obligation to delete", "store forever", "indefinite period"),
                                                                              ),
                            }

    # First matching bucket wins; TECHNOLOGY is the default and has no fragments
    BENCHMARKS            = (BenchmarkBucket(industry           = Industry.SOCIAL_MEDIA,
                                             name               = "Social Media Platforms",
                                             average_risk_score = 65,
                                             examples           = ("Facebook", "Twitter", "Instagram", "TikTok"),
                                             domain_fragments   = ("facebook", "twitter", "instagram", "tiktok"),
                                            ),
                             BenchmarkBucket(industry           = Industry.E_COMMERCE,
                                             name               = "E-commerce Platforms",
                                             average_risk_score = 45,
                                             examples           = ("Amazon", "eBay", "Shopify", "Etsy"),
                                             domain_fragments   = ("amazon", "ebay", "shop", "buy"),
                                            ),
                             BenchmarkBucket(industry           = Industry.FINANCIAL,
                                             name               = "Financial Services",
                                             average_risk_score = 55,
                                             examples           = ("PayPal", "Banks", "Investment platforms"),
                                             domain_fragments   = ("bank", "finance", "paypal", "invest"),
                                            ),
                             BenchmarkBucket(industry           = Industry.TECHNOLOGY,
                                             name               = "Technology Companies",
                                             average_risk_score = 50,
                                             examples           = ("Google", "Microsoft", "Apple", "Software services"),
                                             domain_fragments   = (),
                                            ),
                            )

    DEFAULT_INDUSTRY      = Industry.TECHNOLOGY

    RISK_THRESHOLDS       = MappingProxyType({"high"   : 70,
                                              "medium" : 40,
                                             })

    # Applied to the lower-cased text of every clause, joined with spaces
    LINGUISTIC_MODIFIERS  = ((r"(?:will|must|shall|required to)", 0.10, "obligation"),
                             (r"unconditional|absolute|irrevocable", 0.15, "absolute"),
                             (r"(?:may|might|could|optional|at your discretion)", -0.10, "permissive"),
                            )

    WEIGHT_SUM_TOLERANCE  = 1e-6


def compile_keyword(keyword: str) -> Pattern:
    """
    Compile a keyword fragment so that hyphens and spaces match each other
    """
    fragments = re.split(r"[-\s]+", keyword.strip())

    return re.compile(r"[-\s]".join(re.escape(fragment) for fragment in fragments), re.IGNORECASE)


class RiskCatalog:
    """
    Read-only view over the category, pattern and benchmark tables

    Built once at startup and shared by reference with every component of the
    engine. Construction fails fast when the tables are inconsistent
    """
    def __init__(self, categories: Tuple[CategoryDefinition, ...] = RiskRules.CATEGORIES, patterns: Mapping[RiskCategory, PatternSet] = None,
                 benchmarks: Tuple[BenchmarkBucket, ...] = RiskRules.BENCHMARKS, default_industry: Industry = RiskRules.DEFAULT_INDUSTRY,
                 risk_thresholds: Mapping[str, float] = RiskRules.RISK_THRESHOLDS):
        """
        Arguments:
        ----------
            categories       { tuple }    : Category definitions in iteration order

            patterns         { dict }     : Pattern set per category

            benchmarks       { tuple }    : Benchmark buckets in classification order

            default_industry { Industry } : Bucket used when no domain fragment matches

            risk_thresholds  { dict }     : Lower score bounds of the HIGH and MEDIUM levels
        """
        patterns               = RiskRules.PATTERNS if patterns is None else patterns

        self._validate(categories = categories, patterns = patterns, benchmarks = benchmarks, default_industry = default_industry,
                       risk_thresholds = risk_thresholds)

        self._categories       = tuple(categories)
        self._by_key           = MappingProxyType({category.key: category for category in self._categories})
        self._patterns         = MappingProxyType(dict(patterns))
        self._compiled         = tuple(CompiledPatternSet(category = category.key,
                                                          severity = patterns[category.key].severity,
                                                          matchers = tuple((keyword, compile_keyword(keyword)) for keyword in patterns[category.key].keywords),
                                                         )
                                       for category in self._categories)
        self._benchmarks       = tuple(benchmarks)
        self._by_industry      = MappingProxyType({bucket.industry: bucket for bucket in self._benchmarks})
        self._default_industry = default_industry
        self._modifiers        = tuple((re.compile(pattern), adjustment, label) for pattern, adjustment, label in RiskRules.LINGUISTIC_MODIFIERS)
        self._thresholds       = MappingProxyType(dict(risk_thresholds))


    @staticmethod
    def _validate(categories, patterns, benchmarks, default_industry, risk_thresholds) -> None:
        if not categories:
            raise ValueError("Risk catalog requires at least one category")

        keys = [category.key for category in categories]

        if (len(set(keys)) != len(keys)):
            raise ValueError("Duplicate category keys in risk catalog")

        for category in categories:
            if not (0 < category.weight <= 1):
                raise ValueError(f"Category weight out of range (0, 1]: {category.key.value}={category.weight}")

            if category.key not in patterns:
                raise ValueError(f"No pattern set defined for category {category.key.value}")

            pattern_set = patterns[category.key]

            if not (0 <= pattern_set.severity <= 1):
                raise ValueError(f"Severity out of range [0, 1]: {category.key.value}={pattern_set.severity}")

            if not pattern_set.keywords:
                raise ValueError(f"Pattern set for {category.key.value} has no keywords")

        total_weight = math.fsum(category.weight for category in categories)

        if (abs(total_weight - 1.0) > RiskRules.WEIGHT_SUM_TOLERANCE):
            raise ValueError(f"Category weights must sum to 1.0, got {total_weight:.6f}")

        industries = {bucket.industry for bucket in benchmarks}

        if default_industry not in industries:
            raise ValueError(f"Default benchmark bucket {default_industry.value} is not defined")

        for bucket in benchmarks:
            if (bucket.average_risk_score <= 0):
                raise ValueError(f"Benchmark average must be positive: {bucket.industry.value}")

        if not ({"high", "medium"} <= set(risk_thresholds)):
            raise ValueError("Risk thresholds require \"high\" and \"medium\" bounds")

        if not (0 <= risk_thresholds["medium"] < risk_thresholds["high"] <= 100):
            raise ValueError(f"Risk thresholds must satisfy 0 <= medium < high <= 100, got {dict(risk_thresholds)}")


    @property
    def categories(self) -> Tuple[CategoryDefinition, ...]:
        return self._categories


    @property
    def compiled_patterns(self) -> Tuple[CompiledPatternSet, ...]:
        return self._compiled


    @property
    def benchmarks(self) -> Tuple[BenchmarkBucket, ...]:
        return self._benchmarks


    @property
    def default_industry(self) -> Industry:
        return self._default_industry


    @property
    def linguistic_modifiers(self) -> Tuple[Tuple[Pattern, float, str], ...]:
        return self._modifiers


    @property
    def risk_thresholds(self) -> Mapping[str, float]:
        return self._thresholds


    def get_category(self, key: RiskCategory) -> CategoryDefinition:
        return self._by_key[key]


    def get_pattern_set(self, key: RiskCategory) -> PatternSet:
        return self._patterns[key]


    def get_benchmark(self, industry: Industry) -> BenchmarkBucket:
        return self._by_industry[industry]


    def total_weight(self) -> float:
        return math.fsum(category.weight for category in self._categories)


    def describe_categories(self) -> List[Dict]:
        """
        Static catalog dump used by the categories endpoint
        """
        return [{"key"          : category.key.value,
                 "name"         : category.name,
                 "description"  : category.description,
                 "weight"       : category.weight,
                 "irreversible" : category.irreversible,
                }
                for category in self._categories]


# Built at import so that a broken rule table fails at startup
_DEFAULT_CATALOG = RiskCatalog()


def get_default_catalog() -> RiskCatalog:
    """
    Process-wide catalog built from RiskRules
    """
    return _DEFAULT_CATALOG
