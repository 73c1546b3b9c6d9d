# DEPENDENCIES
from .settings import settings
from .risk_rules import RiskRules
from .model_config import ModelConfig
from .comparison_rules import ComparisonRules


__all__ = ['settings',
           'RiskRules',
           'ModelConfig',
           'ComparisonRules',
          ]
