# DEPENDENCIES
from .logger import RiskEngineLogger
from .validators import InputValidator
from .text_processor import TextProcessor


__all__ = ['TextProcessor',
           'InputValidator',
           'RiskEngineLogger',
          ]
