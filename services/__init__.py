# DEPENDENCIES
from .data_models import RiskLevel
from .data_models import ClauseUnit
from .data_models import RulesVerdict
from .data_models import GlossaryEntry
from .data_models import ClauseAnalysis
from .data_models import ComparisonEntry
from .data_models import ExternalVerdict
from .data_models import DocumentAnalysis
from .data_models import ComparisonReport
from .data_models import RiskDistribution
from .fact_extractor import NumericFact
from .fact_extractor import FactExtractor
from .clause_analyzer import ClauseAnalyzer
from .risk_analyzer import RulesRiskAnalyzer
from .glossary_builder import GlossaryBuilder
from .clause_segmenter import ClauseSegmenter
from .document_analyzer import DocumentAnalyzer
from .summary_generator import DocumentSummarizer
from .document_comparator import DocumentComparator


__all__ = ['RiskLevel',
           'ClauseUnit',
           'NumericFact',
           'RulesVerdict',
           'FactExtractor',
           'GlossaryEntry',
           'ClauseAnalysis',
           'ClauseAnalyzer',
           'ComparisonEntry',
           'ExternalVerdict',
           'GlossaryBuilder',
           'ClauseSegmenter',
           'DocumentAnalysis',
           'ComparisonReport',
           'RiskDistribution',
           'DocumentAnalyzer',
           'RulesRiskAnalyzer',
           'DocumentSummarizer',
           'DocumentComparator',
          ]
