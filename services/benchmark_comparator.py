"""
Benchmark Comparator
Compares a risk score to the average of the analyzed site's industry
"""

import sys
import math
from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from config.risk_rules import RiskCatalog
from config.risk_rules import BenchmarkBucket
from utils.logger import log_warning
from services.data_models import BenchmarkComparison


class BenchmarkComparator:
    """
    Classify a page's hostname into an industry bucket and compare scores
    """

    def __init__(self, catalog: RiskCatalog):
        self.catalog = catalog

    def extract_hostname(self, url: Optional[str]) -> str:
        """
        Lower-cased hostname of a URL, empty when it cannot be determined

        Strings without a scheme are read as bare hosts ("facebook.com/terms").
        Malformed or non-string URLs are logged and yield an empty hostname
        instead of raising.
        """
        if url is None:
            return ""

        if not isinstance(url, str):
            log_warning("Non-string benchmark URL, using default bucket", url_type = type(url).__name__)
            return ""

        candidate = url.strip()
        if not candidate:
            return ""

        if "://" not in candidate:
            candidate = "//" + candidate

        try:
            hostname = urlsplit(candidate).hostname

        except ValueError as e:
            log_warning("Unparsable benchmark URL, using default bucket", error = str(e))
            return ""

        if not hostname:
            log_warning("Benchmark URL has no hostname, using default bucket", url_length = len(url))
            return ""

        return hostname.lower()

    def classify(self, url: Optional[str]) -> BenchmarkBucket:
        """Bucket whose domain fragments match the hostname, else the default bucket"""
        hostname = self.extract_hostname(url)

        if hostname:
            for bucket in self.catalog.benchmarks:
                if any(fragment in hostname for fragment in bucket.domain_fragments):
                    return bucket

        return self.catalog.get_benchmark(self.catalog.default_industry)

    def compare(self, url: Optional[str], risk_score: float) -> BenchmarkComparison:
        """
        Compare a risk score to the bucket average

        Args:
            url: Analyzed page URL, may be None
            risk_score: Score in [0, 100]

        Returns:
            BenchmarkComparison where a positive percentage means riskier than average
        """
        bucket = self.classify(url)
        average = bucket.average_risk_score
        # Halves round up, so +2.5% reads as +3%
        percentage = math.floor(((risk_score - average) / average) * 100 + 0.5)

        return BenchmarkComparison(
            category=bucket.name,
            industry=bucket.industry.value,
            percentage=int(percentage),
            average_score=average,
            comparison="worse" if percentage > 0 else "better"
        )
