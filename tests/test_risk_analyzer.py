"""
Tests for keyword-based risk scoring
"""

from services.data_models import RiskLevel
from services.risk_analyzer import RulesRiskAnalyzer


class TestRulesRiskAnalyzer:
    """Weights, thresholds and matched keywords"""

    def test_high_keywords_reach_high(self):
        """penalty + personal guarantee score 6"""
        verdict = RulesRiskAnalyzer().analyze("A PENALTY applies and a Personal Guarantee is required.")

        assert verdict.risk_score >= 6
        assert verdict.risk_level == RiskLevel.HIGH
        assert verdict.matched_keywords == ("penalty", "personal guarantee")

    def test_medium_threshold(self):
        """One high keyword (3) is Medium"""
        verdict = RulesRiskAnalyzer().analyze("Any breach of these terms is serious.")

        assert verdict.risk_score == 3
        assert verdict.risk_level == RiskLevel.MEDIUM

    def test_low_keywords_only(self):
        verdict = RulesRiskAnalyzer().analyze("Delivery within five business days.")

        assert verdict.risk_score == 2
        assert verdict.risk_level == RiskLevel.LOW
        assert set(verdict.matched_keywords) == {"delivery", "business days"}

    def test_mixed_weights(self):
        """late fee (2) + arbitration (2) + warranty (1) = 5"""
        verdict = RulesRiskAnalyzer().analyze("A late fee applies; disputes go to arbitration; warranty excluded.")

        assert verdict.risk_score == 5
        assert verdict.risk_level == RiskLevel.MEDIUM

    def test_no_keywords(self):
        verdict = RulesRiskAnalyzer().analyze("1. Rent is Rs. 15,000 per month.")

        assert verdict.risk_score == 0
        assert verdict.risk_level == RiskLevel.LOW
        assert verdict.matched_keywords == ()

    def test_empty_text(self):
        verdict = RulesRiskAnalyzer().analyze("")

        assert verdict.risk_level == RiskLevel.LOW

    def test_overlapping_keywords_both_count(self):
        """'default' inside 'cross-default' also matches"""
        verdict = RulesRiskAnalyzer().analyze("A cross-default clause.")

        assert "cross-default" in verdict.matched_keywords
        assert "default" in verdict.matched_keywords
        assert verdict.risk_level == RiskLevel.HIGH
