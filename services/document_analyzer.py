# DEPENDENCIES
import math
import asyncio
from typing import Any
from typing import List
from typing import Tuple
from typing import Optional

from utils.logger import log_info
from services.data_models import ClauseUnit
from utils.logger import ContractEngineLogger
from services.data_models import ClauseAnalysis
from utils.validators import DocumentValidator
from model_manager.reasoner import ExternalReasoner
from services.data_models import DocumentAnalysis
from services.data_models import ComparisonReport
from services.clause_analyzer import ClauseAnalyzer
from services.risk_analyzer import RulesRiskAnalyzer
from services.clause_segmenter import ClauseSegmenter
from services.glossary_builder import GlossaryBuilder
from services.summary_generator import DocumentSummarizer
from services.document_comparator import DocumentComparator
from model_manager.request_scheduler import RequestScheduler


class DocumentAnalyzer:
    """
    End-to-end analysis pipeline: segment -> analyze clauses -> glossary -> summary

    All external calls of every document analyzed through one instance share the
    same RequestScheduler, so concurrent analyses stay serialized and within quota
    """
    def __init__(self, scheduler: Optional[RequestScheduler] = None, reasoner: Any = None, segmenter: Optional[ClauseSegmenter] = None,
                 rules_analyzer: Optional[RulesRiskAnalyzer] = None, glossary_builder: Optional[GlossaryBuilder] = None,
                 comparator: Optional[DocumentComparator] = None):
        """
        Initialize the analysis pipeline

        Arguments:
        ----------
            scheduler        { RequestScheduler }   : Shared external call queue (created from settings when None)

            reasoner                                : Object exposing async reason(prompt_kind, payload) (ExternalReasoner when None)

            segmenter        { ClauseSegmenter }    : Clause segmenter

            rules_analyzer   { RulesRiskAnalyzer }  : Keyword risk engine

            glossary_builder { GlossaryBuilder }    : Glossary builder

            comparator       { DocumentComparator } : Comparison engine
        """
        self.scheduler        = scheduler or RequestScheduler()
        self.reasoner         = reasoner or ExternalReasoner()
        self.segmenter        = segmenter or ClauseSegmenter()
        self.glossary_builder = glossary_builder or GlossaryBuilder()
        self.comparator       = comparator or DocumentComparator()
        self.clause_analyzer  = ClauseAnalyzer(scheduler      = self.scheduler,
                                               reasoner       = self.reasoner,
                                               rules_analyzer = rules_analyzer,
                                              )
        self.summarizer       = DocumentSummarizer(scheduler = self.scheduler,
                                                   reasoner  = self.reasoner,
                                                  )

        log_info("DocumentAnalyzer initialized")


    @ContractEngineLogger.log_execution_time("document_analysis")
    async def analyze(self, text: str, document_type: Optional[str] = None, page_count: int = 1) -> DocumentAnalysis:
        """
        Analyze one document

        Arguments:
        ----------
            text          { str } : Extracted plain text

            document_type { str } : Document type tag (detected from the text when None)

            page_count    { int } : Number of source pages, used to infer clause pages

        Returns:
        --------
            { DocumentAnalysis }  : Complete analysis (no clauses for empty input)
        """
        document_type = document_type or DocumentValidator.detect_document_type(text)
        units         = self.segmenter.split(text)

        log_info("Starting document analysis",
                 document_type = document_type,
                 clauses       = len(units),
                 page_count    = page_count,
                )

        clauses       = await self.analyze_clauses(units, document_type, page_count)
        glossary      = self.glossary_builder.build(clauses)

        return await self.summarizer.summarize(clauses       = clauses,
                                               document_type = document_type,
                                               glossary      = glossary,
                                              )


    async def analyze_clauses(self, units: List[ClauseUnit], document_type: str, page_count: int = 1) -> List[ClauseAnalysis]:
        """
        Analyze all clauses concurrently; results keep document order
        """
        total = len(units)

        return list(await asyncio.gather(*(self.clause_analyzer.analyze(clause        = unit,
                                                                        page          = self.infer_page(index, total, page_count),
                                                                        document_type = document_type,
                                                                       )
                                           for index, unit in enumerate(units))))


    async def analyze_and_compare(self, text_a: str, text_b: str, document_type_a: Optional[str] = None, document_type_b: Optional[str] = None,
                                  page_count_a: int = 1, page_count_b: int = 1) -> Tuple[DocumentAnalysis, DocumentAnalysis, ComparisonReport]:
        """
        Analyze two documents concurrently, then compare them

        Returns:
        --------
            { tuple } : (analysis of document 1, analysis of document 2, comparison report)
        """
        doc_a, doc_b = await asyncio.gather(self.analyze(text_a, document_type_a, page_count_a),
                                            self.analyze(text_b, document_type_b, page_count_b),
                                           )

        return doc_a, doc_b, self.compare(doc_a, doc_b)


    def compare(self, doc_a: DocumentAnalysis, doc_b: DocumentAnalysis) -> ComparisonReport:
        return self.comparator.compare(doc_a, doc_b)


    @staticmethod
    def infer_page(index: int, total: int, page_count: int = 1) -> int:
        """
        Spread clauses evenly over pages: clause i of n lands on i // ceil(n / pages) + 1
        """
        if (total <= 0) or (page_count <= 1):
            return 1

        clauses_per_page = max(1, math.ceil(total / page_count))

        return (index // clauses_per_page) + 1
