# DEPENDENCIES
from typing import Any
from typing import List
from typing import Union
from functools import partial

from utils.logger import log_info
from utils.logger import log_error
from utils.logger import log_warning
from config.settings import settings
from config.risk_rules import RiskRules
from services.data_models import RiskLevel
from services.data_models import ClauseUnit
from config.model_config import ModelConfig
from services.data_models import RulesVerdict
from services.data_models import ClauseAnalysis
from utils.text_processor import TextProcessor
from services.data_models import ExternalVerdict
from model_manager.errors import QuotaExceeded
from model_manager.response_parser import Structured
from model_manager.errors import ExternalAnalysisError
from services.risk_analyzer import RulesRiskAnalyzer
from model_manager.request_scheduler import RequestScheduler
from model_manager.response_parser import parse_reasoner_output


class ClauseAnalyzer:
    """
    Fuses the rules verdict with the external reasoner's verdict for one clause

    The external verdict is replaced by a rules-based one whenever the reasoner fails,
    and the final level is the higher of the two (escalate, never downgrade)
    """
    def __init__(self, scheduler: RequestScheduler, reasoner: Any, rules_analyzer: RulesRiskAnalyzer = None):
        """
        Initialize clause analyzer

        Arguments:
        ----------
            scheduler      { RequestScheduler }  : Shared queue for external calls

            reasoner                             : Object exposing async reason(prompt_kind, payload)

            rules_analyzer { RulesRiskAnalyzer } : Keyword risk engine
        """
        self.scheduler      = scheduler
        self.reasoner       = reasoner
        self.rules_analyzer = rules_analyzer or RulesRiskAnalyzer()
        self.rules          = RiskRules()


    async def analyze(self, clause: Union[ClauseUnit, str], page: int = 1, document_type: str = "general") -> ClauseAnalysis:
        """
        Analyze one clause; never raises

        Arguments:
        ----------
            clause        { ClauseUnit | str } : Clause unit or raw clause text

            page                 { int }       : Inferred page number

            document_type        { str }       : Document type tag passed to the reasoner

        Returns:
        --------
               { ClauseAnalysis }              : Fused analysis (Medium "analysis failed" record on unexpected errors)
        """
        clause_text = clause.text if isinstance(clause, ClauseUnit) else str(clause or "")

        try:
            rules_verdict    = self.rules_analyzer.analyze(clause_text)
            external_verdict = await self._external_verdict(clause_text, document_type, rules_verdict)

            return ClauseAnalysis(page               = page,
                                  clause_text        = clause_text,
                                  explanation        = external_verdict.explanation,
                                  risk_from_rules    = rules_verdict.risk_level,
                                  risk_from_external = external_verdict.risk_level,
                                  final_risk         = RiskLevel.highest(rules_verdict.risk_level, external_verdict.risk_level),
                                  reason             = external_verdict.reason,
                                  keywords           = list(rules_verdict.matched_keywords),
                                  important_terms    = list(external_verdict.important_terms),
                                 )

        except Exception as e:
            log_error(e, context = {"component" : "ClauseAnalyzer", "operation" : "analyze", "page" : page})

            return self.failed_analysis(clause_text, page)


    async def _external_verdict(self, clause_text: str, document_type: str, rules_verdict: RulesVerdict) -> ExternalVerdict:
        """
        Ask the reasoner through the scheduler, substituting the rules-based verdict on failure
        """
        payload = {"document_type" : document_type,
                   "clause_text"   : clause_text,
                  }

        try:
            output = await self.scheduler.submit(partial(self.reasoner.reason, ModelConfig.CLAUSE_ANALYSIS, payload),
                                                 label = ModelConfig.CLAUSE_ANALYSIS,
                                                )

        except QuotaExceeded:
            log_info("Using rules-based analysis (API quota reached)")
            return self.rules_based_verdict(rules_verdict)

        except ExternalAnalysisError as e:
            log_info("Using rules-based analysis (AI temporarily unavailable)", failure = type(e).__name__)
            return self.rules_based_verdict(rules_verdict)

        parsed = parse_reasoner_output(output)

        if isinstance(parsed, Structured):
            return self._verdict_from_fields(parsed.fields)

        log_warning("Clause analysis output was not structured, using truncated text", chars = len(parsed.raw_text))

        return ExternalVerdict(explanation     = TextProcessor.truncate(parsed.raw_text, settings.EXPLANATION_PREVIEW_CHARS),
                               risk_level      = RiskLevel.MEDIUM,
                               reason          = self.rules.UNCLEAR_FORMAT_REASON,
                               important_terms = [],
                              )


    @staticmethod
    def _verdict_from_fields(fields: dict) -> ExternalVerdict:
        terms = fields.get("important_terms") or []

        if isinstance(terms, str):
            terms = [terms]

        return ExternalVerdict(explanation     = str(fields.get("explanation") or "Unable to generate explanation"),
                               risk_level      = RiskLevel.parse(fields.get("risk_level")),
                               reason          = str(fields.get("reason") or "Unable to determine risk reason"),
                               important_terms = [str(term) for term in terms if term],
                              )


    def rules_based_verdict(self, rules_verdict: RulesVerdict) -> ExternalVerdict:
        """
        Deterministic stand-in for the external verdict
        """
        keywords = list(rules_verdict.matched_keywords)

        if keywords:
            reason = self.rules.RULES_REASON_MATCHED.format(keywords = ", ".join(keywords))

        else:
            reason = self.rules.RULES_REASON_STANDARD

        return ExternalVerdict(explanation     = self.rules_based_explanation(rules_verdict.risk_level, keywords),
                               risk_level      = rules_verdict.risk_level,
                               reason          = reason,
                               important_terms = keywords,
                              )


    def rules_based_explanation(self, risk_level: RiskLevel, keywords: List[str]) -> str:
        if not keywords:
            return self.rules.NO_INDICATORS_TEXT

        prefix = self.rules.EXPLANATION_PREFIX.format(level    = risk_level.value.lower(),
                                                      keywords = ", ".join(keywords),
                                                     )

        return prefix + self.rules.EXPLANATION_SUFFIXES[risk_level.value]


    def failed_analysis(self, clause_text: str, page: int) -> ClauseAnalysis:
        """
        Record used when analysis breaks entirely, so aggregation always has a value
        """
        return ClauseAnalysis(page               = page,
                              clause_text        = clause_text,
                              explanation        = self.rules.FAILED_EXPLANATION,
                              risk_from_rules    = RiskLevel.MEDIUM,
                              risk_from_external = RiskLevel.MEDIUM,
                              final_risk         = RiskLevel.MEDIUM,
                              reason             = self.rules.FAILED_REASON,
                              keywords           = [],
                              important_terms    = [],
                             )
