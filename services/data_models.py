# DEPENDENCIES
from enum import Enum
from typing import Any
from typing import Dict
from typing import List
from typing import Tuple
from typing import Optional
from dataclasses import field
from dataclasses import dataclass


class RiskLevel(Enum):
    """
    Ordinal risk category: Low < Medium < High
    """
    LOW    = "Low"
    MEDIUM = "Medium"
    HIGH   = "High"


    @property
    def rank(self) -> int:
        return _RISK_RANKS[self]


    def __lt__(self, other: "RiskLevel") -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented

        return self.rank < other.rank


    def __le__(self, other: "RiskLevel") -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented

        return self.rank <= other.rank


    @classmethod
    def parse(cls, value: Any, default: "RiskLevel" = None) -> "RiskLevel":
        """
        Parse a free-form label ("high", "Medium", RiskLevel.LOW ...), falling back to default (Medium)
        """
        if isinstance(value, RiskLevel):
            return value

        if isinstance(value, str):
            label = value.strip().capitalize()

            for level in cls:
                if (level.value == label):
                    return level

        return default or cls.MEDIUM


    @classmethod
    def highest(cls, *levels: "RiskLevel") -> "RiskLevel":
        """
        Escalate-never-downgrade fusion of any number of levels
        """
        return max(levels, key = lambda level: level.rank)


_RISK_RANKS = {RiskLevel.LOW    : 1,
               RiskLevel.MEDIUM : 2,
               RiskLevel.HIGH   : 3,
              }


@dataclass(frozen = True)
class ClauseUnit:
    """
    Clause-sized slice of document text produced by the segmenter
    """
    text                  : str
    word_count            : int
    estimated_token_count : int

    def to_dict(self) -> Dict[str, Any]:
        return {"text"                  : self.text,
                "word_count"            : self.word_count,
                "estimated_token_count" : self.estimated_token_count,
               }


@dataclass(frozen = True)
class RulesVerdict:
    """
    Keyword-derived risk verdict for one clause
    """
    risk_level       : RiskLevel
    risk_score       : int
    matched_keywords : Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"risk_level"       : self.risk_level.value,
                "risk_score"       : self.risk_score,
                "matched_keywords" : list(self.matched_keywords),
               }


@dataclass
class ExternalVerdict:
    """
    Verdict returned by (or synthesized in place of) the external reasoner
    """
    explanation     : str
    risk_level      : RiskLevel
    reason          : str
    important_terms : List[str] = field(default_factory = list)


@dataclass
class ClauseAnalysis:
    """
    Fused analysis of one clause
    """
    page               : int
    clause_text        : str
    explanation        : str
    risk_from_rules    : RiskLevel
    risk_from_external : RiskLevel
    final_risk         : RiskLevel
    reason             : str
    keywords           : List[str] = field(default_factory = list)
    important_terms    : List[str] = field(default_factory = list)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for serialization
        """
        return {"page"               : self.page,
                "clause_text"        : self.clause_text,
                "explanation"        : self.explanation,
                "risk_from_rules"    : self.risk_from_rules.value,
                "risk_from_external" : self.risk_from_external.value,
                "final_risk"         : self.final_risk.value,
                "reason"             : self.reason,
                "keywords"           : list(self.keywords),
                "important_terms"    : list(self.important_terms),
               }


@dataclass(frozen = True)
class GlossaryEntry:
    term     : str
    meaning  : str
    category : str = "legal"

    def to_dict(self) -> Dict[str, str]:
        return {"term"     : self.term,
                "meaning"  : self.meaning,
                "category" : self.category,
               }


@dataclass
class RiskDistribution:
    """
    Clause counts per final risk level
    """
    low    : int = 0
    medium : int = 0
    high   : int = 0

    @classmethod
    def from_clauses(cls, clauses: List[ClauseAnalysis]) -> "RiskDistribution":
        distribution = cls()

        for clause in clauses:
            if (clause.final_risk == RiskLevel.HIGH):
                distribution.high += 1

            elif (clause.final_risk == RiskLevel.MEDIUM):
                distribution.medium += 1

            else:
                distribution.low += 1

        return distribution


    @property
    def total(self) -> int:
        return self.low + self.medium + self.high


    def overall_risk(self) -> RiskLevel:
        """
        High if any clause is High, else Medium if medium outnumbers low, else Low
        """
        if (self.high > 0):
            return RiskLevel.HIGH

        if (self.medium > self.low):
            return RiskLevel.MEDIUM

        return RiskLevel.LOW


    def to_dict(self) -> Dict[str, int]:
        return {"low"    : self.low,
                "medium" : self.medium,
                "high"   : self.high,
               }


@dataclass
class DocumentAnalysis:
    """
    Complete analysis record of one source document
    """
    clauses           : List[ClauseAnalysis]
    glossary          : List[GlossaryEntry]
    risk_distribution : RiskDistribution
    overall_risk      : RiskLevel
    key_findings      : List[str]
    recommendations   : List[str]
    document_type     : str = "general"

    @property
    def total_clauses(self) -> int:
        return len(self.clauses)


    @property
    def full_text(self) -> str:
        return " ".join(clause.clause_text for clause in self.clauses)


    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for serialization
        """
        return {"document_type" : self.document_type,
                "clauses"       : [clause.to_dict() for clause in self.clauses],
                "glossary"      : [entry.to_dict() for entry in self.glossary],
                "summary"       : {"total_clauses"     : self.total_clauses,
                                   "risk_distribution" : self.risk_distribution.to_dict(),
                                   "overall_risk"      : self.overall_risk.value,
                                   "key_findings"      : list(self.key_findings),
                                   "recommendations"   : list(self.recommendations),
                                  },
               }


@dataclass
class ClauseSummary:
    """
    Display form of one side of a comparison entry
    """
    text        : str
    risk        : RiskLevel
    explanation : str
    full_text   : str

    def to_dict(self) -> Dict[str, Any]:
        return {"text"        : self.text,
                "risk"        : self.risk.value,
                "explanation" : self.explanation,
                "full_text"   : self.full_text,
               }


@dataclass
class ComparisonEntry:
    """
    One row of a clause-by-clause comparison
    """
    clause_type     : str
    side_a          : Optional[ClauseSummary]
    side_b          : Optional[ClauseSummary]
    difference_text : str
    overall_risk    : RiskLevel
    plain_english   : str

    def to_dict(self) -> Dict[str, Any]:
        return {"clause_type"     : self.clause_type,
                "doc1"            : self.side_a.to_dict() if self.side_a else None,
                "doc2"            : self.side_b.to_dict() if self.side_b else None,
                "difference"      : self.difference_text,
                "overall_risk"    : self.overall_risk.value,
                "plain_english"   : self.plain_english,
               }


@dataclass
class ComparisonReport:
    """
    Result of comparing two analyzed documents
    """
    clause_by_clause_comparison : List[ComparisonEntry]
    detailed_similarities       : List[str]
    risk_comparison             : Dict[str, str]
    clause_count                : Dict[str, int]
    similarities                : List[str] = field(default_factory = list)
    differences                 : List[str] = field(default_factory = list)
    recommendations             : List[str] = field(default_factory = list)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for serialization
        """
        return {"clause_by_clause_comparison" : [entry.to_dict() for entry in self.clause_by_clause_comparison],
                "detailed_similarities"       : list(self.detailed_similarities),
                "risk_comparison"             : dict(self.risk_comparison),
                "clause_count"                : dict(self.clause_count),
                "similarities"                : list(self.similarities),
                "differences"                 : list(self.differences),
                "recommendations"             : list(self.recommendations),
               }
