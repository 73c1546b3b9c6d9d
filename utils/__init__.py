# DEPENDENCIES
from .text_processor import TextProcessor
from .logger import ContractEngineLogger
from .validators import DocumentValidator


__all__ = ['TextProcessor',
           'DocumentValidator',
           'ContractEngineLogger',
          ]
