# DEPENDENCIES
from typing import Any
from typing import List
from typing import Tuple
from typing import Optional
from functools import partial

from utils.logger import log_info
from utils.logger import log_error
from utils.logger import log_warning
from config.settings import settings
from config.risk_rules import RiskRules
from services.data_models import RiskLevel
from config.model_config import ModelConfig
from utils.logger import ContractEngineLogger
from services.data_models import GlossaryEntry
from utils.text_processor import TextProcessor
from services.data_models import ClauseAnalysis
from model_manager.errors import QuotaExceeded
from services.data_models import DocumentAnalysis
from services.data_models import RiskDistribution
from model_manager.response_parser import Structured
from model_manager.errors import ExternalAnalysisError
from model_manager.request_scheduler import RequestScheduler
from model_manager.response_parser import parse_reasoner_output


class DocumentSummarizer:
    """
    Aggregates clause analyses into a DocumentAnalysis : risk distribution, overall risk,
    and key findings / recommendations from the external reasoner with a rules-based template fallback
    """
    def __init__(self, scheduler: RequestScheduler, reasoner: Any):
        """
        Initialize the document summarizer

        Arguments:
        ----------
            scheduler { RequestScheduler } : Shared queue for external calls

            reasoner                       : Object exposing async reason(prompt_kind, payload)
        """
        self.scheduler = scheduler
        self.reasoner  = reasoner
        self.rules     = RiskRules()

        log_info("DocumentSummarizer initialized")


    @ContractEngineLogger.log_execution_time("document_summary")
    async def summarize(self, clauses: List[ClauseAnalysis], document_type: str = "general", glossary: Optional[List[GlossaryEntry]] = None) -> DocumentAnalysis:
        """
        Build the document-level analysis; external failures never escape

        Arguments:
        ----------
            clauses       { list } : Analyzed clauses in document order

            document_type { str }  : Document type tag

            glossary      { list } : Glossary entries to attach

        Returns:
        --------
            { DocumentAnalysis }   : Complete analysis record
        """
        distribution = RiskDistribution.from_clauses(clauses)
        overall_risk = distribution.overall_risk()

        findings, recommendations = await self._findings_and_recommendations(clauses       = clauses,
                                                                             document_type = document_type,
                                                                             distribution  = distribution,
                                                                             overall_risk  = overall_risk,
                                                                            )

        log_info("Document summary built",
                 document_type = document_type,
                 total_clauses = len(clauses),
                 overall_risk  = overall_risk.value,
                 **distribution.to_dict(),
                )

        return DocumentAnalysis(clauses           = list(clauses),
                                glossary          = list(glossary or []),
                                risk_distribution = distribution,
                                overall_risk      = overall_risk,
                                key_findings      = findings,
                                recommendations   = recommendations,
                                document_type     = document_type,
                               )


    async def _findings_and_recommendations(self, clauses: List[ClauseAnalysis], document_type: str, distribution: RiskDistribution,
                                            overall_risk: RiskLevel) -> Tuple[List[str], List[str]]:
        fallback_findings        = self.template_findings(len(clauses), distribution, overall_risk)
        fallback_recommendations = self.rules.get_fallback_recommendations(overall_risk.value)

        if not clauses:
            return fallback_findings, fallback_recommendations

        payload = {"document_type"    : document_type,
                   "contract_excerpt" : self.build_excerpt(clauses),
                  }

        try:
            output = await self.scheduler.submit(partial(self.reasoner.reason, ModelConfig.DOCUMENT_SUMMARY, payload),
                                                 label = ModelConfig.DOCUMENT_SUMMARY,
                                                )

        except QuotaExceeded:
            log_info("Using rules-based summary (API quota reached)")
            return fallback_findings, fallback_recommendations

        except ExternalAnalysisError as e:
            log_info("Using rules-based summary (AI temporarily unavailable)", failure = type(e).__name__)
            return fallback_findings, fallback_recommendations

        except Exception as e:
            log_error(e, context = {"component" : "DocumentSummarizer", "operation" : "summarize"})
            return fallback_findings, fallback_recommendations

        parsed = parse_reasoner_output(output)

        if isinstance(parsed, Structured):
            findings        = self._string_list(parsed.fields.get("key_findings"))
            recommendations = self._string_list(parsed.fields.get("recommendations"))

            return (findings or fallback_findings), (recommendations or fallback_recommendations)

        log_warning("Summary output was not structured, using truncated text", chars = len(parsed.raw_text))

        raw_finding = TextProcessor.truncate(parsed.raw_text.strip(), settings.EXPLANATION_PREVIEW_CHARS)

        return ([raw_finding] if raw_finding else fallback_findings), fallback_recommendations


    @staticmethod
    def build_excerpt(clauses: List[ClauseAnalysis]) -> str:
        """
        Clause texts joined by blank lines, cut to the excerpt budget
        """
        joined = "\n\n".join(clause.clause_text for clause in clauses)

        return joined[:settings.SUMMARY_EXCERPT_CHARS]


    @staticmethod
    def template_findings(total_clauses: int, distribution: RiskDistribution, overall_risk: RiskLevel) -> List[str]:
        return [f"Document contains {total_clauses} clauses",
                f"Overall risk level: {overall_risk.value}",
                f"High risk clauses: {distribution.high}",
                f"Medium risk clauses: {distribution.medium}",
                f"Low risk clauses: {distribution.low}",
               ]


    @staticmethod
    def _string_list(value: Any) -> List[str]:
        if isinstance(value, str):
            value = [value]

        if not isinstance(value, list):
            return []

        return [str(item).strip() for item in value if str(item).strip()]
