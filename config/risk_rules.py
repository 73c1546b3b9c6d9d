# DEPENDENCIES
from typing import List
from typing import Tuple


class RiskRules:
    """
    Keyword taxonomies, weights and fallback templates for rules-based clause risk scoring
    """
    # Severity -> domain-curated legal terms (matched case-insensitively as substrings)
    HIGH_RISK_KEYWORDS     = ["penalty",
                              "seize",
                              "collateral",
                              "waiver",
                              "indemnity",
                              "forfeit",
                              "liquidated damages",
                              "acceleration",
                              "default",
                              "breach",
                              "termination without cause",
                              "unlimited liability",
                              "personal guarantee",
                              "cross-default",
                              "material adverse change",
                              "force majeure exclusion",
                             ]

    MEDIUM_RISK_KEYWORDS   = ["late fee",
                              "interest rate",
                              "security deposit",
                              "arbitration",
                              "jurisdiction",
                              "governing law",
                              "assignment",
                              "modification",
                              "notice period",
                              "renewal terms",
                              "insurance requirements",
                              "compliance obligations",
                              "reporting requirements",
                             ]

    LOW_RISK_KEYWORDS      = ["payment terms",
                              "delivery",
                              "warranty",
                              "maintenance",
                              "standard terms",
                              "mutual agreement",
                              "good faith",
                              "reasonable efforts",
                              "business days",
                              "written notice",
                             ]

    # (severity, keyword list, weight) in scan order
    KEYWORD_WEIGHTS        = [("high", HIGH_RISK_KEYWORDS, 3),
                              ("medium", MEDIUM_RISK_KEYWORDS, 2),
                              ("low", LOW_RISK_KEYWORDS, 1),
                             ]

    # Minimum cumulative score per level, highest first
    LEVEL_THRESHOLDS       = [("High", 6),
                              ("Medium", 3),
                             ]

    # Rules-based explanation templates (used when the external reasoner is unavailable)
    NO_INDICATORS_TEXT     = "This appears to be a standard contract clause with no major risk indicators detected."

    EXPLANATION_PREFIX     = "This clause contains {level} risk terms: {keywords}. "

    EXPLANATION_SUFFIXES   = {"High"   : "These terms may significantly impact your rights or obligations. Consider legal review.",
                              "Medium" : "These terms require attention and understanding before signing.",
                              "Low"    : "These are generally standard terms but worth understanding.",
                             }

    RULES_REASON_MATCHED   = "Rules-based analysis: Contains keywords: {keywords}"
    RULES_REASON_STANDARD  = "Rules-based analysis: Standard contract clause"

    # Degraded results
    UNCLEAR_FORMAT_REASON  = "AI analysis completed but format unclear"
    FAILED_EXPLANATION     = "Unable to analyze this clause. Please review manually."
    FAILED_REASON          = "Analysis failed"

    # Recommendation sets for the rules-based document summary, keyed by overall risk
    FALLBACK_RECOMMENDATIONS = {"High"   : ["Consider legal review due to high-risk clauses",
                                            "Pay special attention to penalty and liability clauses",
                                           ],
                                "Medium" : ["Review medium-risk clauses carefully",
                                            "Consider professional consultation for complex terms",
                                           ],
                                "Low"    : ["Standard contract terms detected",
                                            "Generally acceptable risk level",
                                           ],
                               }


    @classmethod
    def get_weighted_keywords(cls) -> List[Tuple[str, List[str], int]]:
        """
        Keyword lists with their weights, in scan order
        """
        return list(cls.KEYWORD_WEIGHTS)


    @classmethod
    def level_for_score(cls, score: int) -> str:
        """
        Map a cumulative keyword score to a risk label
        """
        for level, threshold in cls.LEVEL_THRESHOLDS:
            if (score >= threshold):
                return level

        return "Low"


    @classmethod
    def get_fallback_recommendations(cls, overall_risk: str) -> List[str]:
        """
        Recommendation set for an overall risk label
        """
        return list(cls.FALLBACK_RECOMMENDATIONS.get(overall_risk, cls.FALLBACK_RECOMMENDATIONS["Medium"]))
