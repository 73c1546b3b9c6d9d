"""
Tests for clause analysis and risk fusion
"""

import json
import asyncio

from conftest import FakeReasoner
from config.risk_rules import RiskRules
from services.data_models import RiskLevel
from services.data_models import ClauseUnit
from model_manager.errors import QuotaExceeded
from model_manager.errors import TransientFailure
from services.clause_analyzer import ClauseAnalyzer


def analyze(make_scheduler, reasoner, text, **kwargs):
    """Run one clause analysis on a fresh scheduler"""
    scheduler = make_scheduler()
    analyzer  = ClauseAnalyzer(scheduler=scheduler, reasoner=reasoner)

    async def run():
        result = await analyzer.analyze(text, **kwargs)
        await scheduler.close()
        return result

    return asyncio.run(run())


def answer(**fields):
    return json.dumps(fields)


class TestStructuredAnswers:
    """External verdict recovered from the reasoner"""

    def test_structured_answer_is_used(self, make_scheduler):
        reasoner = FakeReasoner(responses={"clause_analysis": "Here you go: " + answer(explanation="You pay monthly.",
                                                                                       risk_level="Low",
                                                                                       reason="Routine payment term",
                                                                                       important_terms=["rent"])})
        result   = analyze(make_scheduler, reasoner, "Rent is payable monthly.", page=3, document_type="rental_agreement")

        assert result.explanation == "You pay monthly."
        assert result.reason == "Routine payment term"
        assert result.important_terms == ["rent"]
        assert result.page == 3
        assert result.final_risk == RiskLevel.LOW
        assert reasoner.calls[0][0] == "clause_analysis"
        assert reasoner.calls[0][1]["document_type"] == "rental_agreement"

    def test_external_high_escalates(self, make_scheduler):
        """A High external verdict beats a Low rules verdict"""
        reasoner = FakeReasoner(responses={"clause_analysis": answer(explanation="x", risk_level="High", reason="y", important_terms=[])})
        result   = analyze(make_scheduler, reasoner, "The landlord may enter at any time.")

        assert result.risk_from_rules == RiskLevel.LOW
        assert result.risk_from_external == RiskLevel.HIGH
        assert result.final_risk == RiskLevel.HIGH

    def test_rules_high_never_downgraded(self, make_scheduler):
        """penalty + personal guarantee stays High even when the model says Low"""
        reasoner = FakeReasoner(responses={"clause_analysis": answer(explanation="fine", risk_level="Low", reason="ok", important_terms=[])})
        result   = analyze(make_scheduler, reasoner, "A penalty applies and a personal guarantee is required.")

        assert result.risk_from_rules == RiskLevel.HIGH
        assert result.risk_from_external == RiskLevel.LOW
        assert result.final_risk == RiskLevel.HIGH
        assert result.keywords == ["penalty", "personal guarantee"]

    def test_unknown_risk_label_is_medium(self, make_scheduler):
        reasoner = FakeReasoner(responses={"clause_analysis": answer(explanation="x", risk_level="Severe")})
        result   = analyze(make_scheduler, reasoner, "Plain clause.")

        assert result.risk_from_external == RiskLevel.MEDIUM

    def test_accepts_clause_unit(self, make_scheduler):
        reasoner = FakeReasoner(responses={"clause_analysis": answer(explanation="x", risk_level="Low")})
        unit     = ClauseUnit(text="Plain clause.", word_count=2, estimated_token_count=3)
        result   = analyze(make_scheduler, reasoner, unit)

        assert result.clause_text == "Plain clause."


class TestDegradedAnswers:
    """Unstructured output and failures"""

    def test_unstructured_answer(self, make_scheduler):
        reasoner = FakeReasoner(responses={"clause_analysis": "This clause simply sets the rent."})
        result   = analyze(make_scheduler, reasoner, "Rent is 100.")

        assert result.explanation == "This clause simply sets the rent."
        assert result.risk_from_external == RiskLevel.MEDIUM
        assert result.reason == RiskRules.UNCLEAR_FORMAT_REASON
        assert result.important_terms == []

    def test_unstructured_answer_is_truncated(self, make_scheduler):
        reasoner = FakeReasoner(responses={"clause_analysis": "x" * 500})
        result   = analyze(make_scheduler, reasoner, "Rent is 100.")

        assert result.explanation == "x" * 200 + "..."

    def test_quota_falls_back_to_rules(self, make_scheduler):
        """Rs. 15,000 clause: Low from rules, Low after fallback"""
        reasoner = FakeReasoner(error=QuotaExceeded("quota"))
        result   = analyze(make_scheduler, reasoner, "1. Rent is Rs. 15,000 per month.")

        assert result.risk_from_rules == RiskLevel.LOW
        assert result.risk_from_external == RiskLevel.LOW
        assert result.final_risk == RiskLevel.LOW
        assert result.explanation == RiskRules.NO_INDICATORS_TEXT
        assert result.reason == "Rules-based analysis: Standard contract clause"
        assert len(reasoner.calls) == 1

    def test_fallback_with_keywords(self, make_scheduler):
        reasoner = FakeReasoner(error=QuotaExceeded("quota"))
        result   = analyze(make_scheduler, reasoner, "Any breach triggers a penalty.")

        assert result.final_risk == RiskLevel.HIGH
        assert result.explanation.startswith("This clause contains high risk terms: penalty, breach. ")
        assert result.explanation.endswith(RiskRules.EXPLANATION_SUFFIXES["High"])
        assert result.reason == "Rules-based analysis: Contains keywords: penalty, breach"
        assert result.important_terms == ["penalty", "breach"]

    def test_transient_exhausts_then_falls_back(self, make_scheduler):
        reasoner = FakeReasoner(error=TransientFailure("overloaded"))
        result   = analyze(make_scheduler, reasoner, "Payment terms are net 30.")

        assert len(reasoner.calls) == 3
        assert result.risk_from_external == result.risk_from_rules
        assert result.reason.startswith("Rules-based analysis")

    def test_unexpected_error_gives_failed_analysis(self, make_scheduler):
        """Total failure yields Medium with an explicit reason"""

        class BrokenRules:
            def analyze(self, text):
                raise RuntimeError("broken")

        scheduler = make_scheduler()
        analyzer  = ClauseAnalyzer(scheduler=scheduler, reasoner=FakeReasoner(), rules_analyzer=BrokenRules())

        async def run():
            result = await analyzer.analyze("Some clause", page=2)
            await scheduler.close()
            return result

        result = asyncio.run(run())

        assert result.final_risk == RiskLevel.MEDIUM
        assert result.risk_from_rules == RiskLevel.MEDIUM
        assert result.risk_from_external == RiskLevel.MEDIUM
        assert result.reason == RiskRules.FAILED_REASON
        assert result.explanation == RiskRules.FAILED_EXPLANATION
        assert result.page == 2
