# DEPENDENCIES
from .errors import OtherFailure
from .errors import QuotaExceeded
from .errors import classify_error
from .llm_manager import LLMManager
from .errors import TransientFailure
from .llm_manager import LLMProvider
from .llm_manager import LLMResponse
from .response_parser import Structured
from .reasoner import ExternalReasoner
from .response_parser import Unstructured
from .errors import ExternalAnalysisError
from .request_scheduler import RequestScheduler
from .response_parser import parse_reasoner_output


__all__ = ['Structured',
           'LLMManager',
           'LLMProvider',
           'LLMResponse',
           'OtherFailure',
           'Unstructured',
           'QuotaExceeded',
           'classify_error',
           'TransientFailure',
           'ExternalReasoner',
           'RequestScheduler',
           'ExternalAnalysisError',
           'parse_reasoner_output',
          ]
