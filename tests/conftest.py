import os
import sys
import tempfile
from pathlib import Path

import pytest

# Keep test log files out of the working tree
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix = "risk_engine_logs_"))

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from config.risk_rules import get_default_catalog
from services.risk_analyzer import RiskAnalysisEngine


@pytest.fixture(scope="session")
def catalog():
    return get_default_catalog()


@pytest.fixture(scope="session")
def engine(catalog):
    return RiskAnalysisEngine(catalog=catalog)
