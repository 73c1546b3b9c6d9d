"""
Tests for risk levels, aggregation records and prompt configuration
"""

import pytest

from conftest import make_clause
from config.model_config import ModelConfig
from services.data_models import RiskLevel
from services.data_models import RiskDistribution


class TestRiskLevel:
    """Ordering, parsing and fusion"""

    def test_ordering(self):
        assert RiskLevel.LOW < RiskLevel.MEDIUM < RiskLevel.HIGH
        assert RiskLevel.HIGH <= RiskLevel.HIGH

    @pytest.mark.parametrize("value, expected", [("high", RiskLevel.HIGH),
                                                 (" Low ", RiskLevel.LOW),
                                                 ("MEDIUM", RiskLevel.MEDIUM),
                                                 (RiskLevel.LOW, RiskLevel.LOW),
                                                 ("critical", RiskLevel.MEDIUM),
                                                 (None, RiskLevel.MEDIUM),
                                                ])
    def test_parse(self, value, expected):
        assert RiskLevel.parse(value) == expected

    def test_parse_custom_default(self):
        assert RiskLevel.parse("unknown", default=RiskLevel.LOW) == RiskLevel.LOW

    @pytest.mark.parametrize("a, b", [(x, y) for x in RiskLevel for y in RiskLevel])
    def test_highest_is_max(self, a, b):
        fused = RiskLevel.highest(a, b)

        assert fused.rank == max(a.rank, b.rank)


class TestRiskDistribution:
    """Counts and overall level"""

    def test_counts_sum_to_clauses(self):
        clauses      = [make_clause("a"), make_clause("b", risk=RiskLevel.MEDIUM), make_clause("c", risk=RiskLevel.HIGH)]
        distribution = RiskDistribution.from_clauses(clauses)

        assert distribution.total == len(clauses)
        assert distribution.overall_risk() == RiskLevel.HIGH

    def test_empty(self):
        assert RiskDistribution.from_clauses([]).overall_risk() == RiskLevel.LOW


class TestModelConfig:
    """Prompt templates"""

    def test_render_clause_prompt(self):
        prompt = ModelConfig.render_prompt(ModelConfig.CLAUSE_ANALYSIS, {"document_type": "rental_agreement", "clause_text": "Pay {now}"})

        assert "Pay {now}" in prompt
        assert '"risk_level": "Low|Medium|High"' in prompt

    def test_missing_field(self):
        with pytest.raises(KeyError):
            ModelConfig.render_prompt(ModelConfig.DOCUMENT_SUMMARY, {"document_type": "other"})

    def test_generation_config(self):
        assert ModelConfig.get_generation_config(ModelConfig.CLAUSE_ANALYSIS)["json_mode"] is True
        assert ModelConfig.get_generation_config("unknown") == {}
