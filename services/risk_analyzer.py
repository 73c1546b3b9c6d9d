# DEPENDENCIES
from typing import List

from config.risk_rules import RiskRules
from services.data_models import RiskLevel
from services.data_models import RulesVerdict


class RulesRiskAnalyzer:
    """
    Keyword-taxonomy risk scoring: high terms weigh 3, medium 2, low 1; High at 6+, Medium at 3+
    """
    def __init__(self, rules: RiskRules = None):
        self.rules             = rules or RiskRules()
        self.weighted_keywords = [(severity, [keyword.lower() for keyword in keywords], weight) for severity, keywords, weight in self.rules.get_weighted_keywords()]


    def analyze(self, clause_text: str) -> RulesVerdict:
        """
        Score a clause from keyword matches

        Arguments:
        ----------
            clause_text { str } : Clause text

        Returns:
        --------
            { RulesVerdict }    : Level, cumulative score and deduplicated matched keywords
        """
        text       = (clause_text or "").lower()
        score      = 0
        matched    : List[str] = list()

        for _, keywords, weight in self.weighted_keywords:
            for keyword in keywords:
                if keyword in text:
                    score += weight
                    matched.append(keyword)

        return RulesVerdict(risk_level       = RiskLevel.parse(self.rules.level_for_score(score)),
                            risk_score       = score,
                            matched_keywords = tuple(dict.fromkeys(matched)),
                           )
