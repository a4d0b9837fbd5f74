# DEPENDENCIES
from .settings import settings
from .risk_rules import Industry
from .risk_rules import RiskRules
from .risk_rules import RiskCatalog
from .risk_rules import RiskCategory
from .risk_rules import get_default_catalog


__all__ = ['settings',
           'Industry',
           'RiskRules',
           'RiskCatalog',
           'RiskCategory',
           'get_default_catalog',
          ]
