# DEPENDENCIES
from typing import List
from typing import Tuple
from typing import Optional

from utils.logger import log_info
from config.settings import settings
from services.data_models import RiskLevel
from utils.logger import ContractEngineLogger
from utils.text_processor import TextProcessor
from services.fact_extractor import NumericFact
from services.data_models import ClauseSummary
from services.data_models import ClauseAnalysis
from services.fact_extractor import FactExtractor
from services.data_models import ComparisonEntry
from services.data_models import ComparisonReport
from services.data_models import DocumentAnalysis
from config.comparison_rules import ComparisonRules


class DocumentComparator:
    """
    Clause-type-aware comparison of two analyzed documents

    Every clause of either document ends up in exactly one comparison entry: typed
    pairs first, then one-sided entries for whatever was left over
    """
    def __init__(self, rules: ComparisonRules = None, fact_extractor: FactExtractor = None):
        """
        Initialize document comparator

        Arguments:
        ----------
            rules          { ComparisonRules } : Clause-type and vocabulary tables

            fact_extractor  { FactExtractor }  : Numeric fact extraction
        """
        self.rules          = rules or ComparisonRules()
        self.fact_extractor = fact_extractor or FactExtractor(rules = self.rules)


    @ContractEngineLogger.log_execution_time("document_comparison")
    def compare(self, doc_a: DocumentAnalysis, doc_b: DocumentAnalysis) -> ComparisonReport:
        """
        Compare two documents

        Arguments:
        ----------
            doc_a { DocumentAnalysis } : Document 1

            doc_b { DocumentAnalysis } : Document 2

        Returns:
        --------
            { ComparisonReport }       : Clause-by-clause entries, similarities and document-level risk comparison
        """
        entries                                    = self.compare_clauses(doc_a.clauses, doc_b.clauses)
        similarities, differences, recommendations = self.compare_risk(doc_a, doc_b)

        report = ComparisonReport(clause_by_clause_comparison = entries,
                                  detailed_similarities       = self.find_similarities(doc_a, doc_b),
                                  risk_comparison             = {"doc1" : doc_a.overall_risk.value,
                                                                 "doc2" : doc_b.overall_risk.value,
                                                                },
                                  clause_count                = {"doc1" : doc_a.total_clauses,
                                                                 "doc2" : doc_b.total_clauses,
                                                                },
                                  similarities                = similarities,
                                  differences                 = differences,
                                  recommendations             = recommendations,
                                 )

        log_info("Documents compared",
                 doc1_clauses = doc_a.total_clauses,
                 doc2_clauses = doc_b.total_clauses,
                 entries      = len(entries),
                )

        return report


    def compare_clauses(self, clauses_a: List[ClauseAnalysis], clauses_b: List[ClauseAnalysis]) -> List[ComparisonEntry]:
        """
        Type matching, then residual one-sided entries
        """
        lowered_a  = [clause.clause_text.lower() for clause in clauses_a]
        lowered_b  = [clause.clause_text.lower() for clause in clauses_b]
        consumed_a = set()
        consumed_b = set()
        entries    = list()

        for clause_type, keywords in self.rules.CLAUSE_TYPES:
            index_a = self._first_unconsumed(lowered_a, consumed_a, keywords)
            index_b = self._first_unconsumed(lowered_b, consumed_b, keywords)

            if (index_a is None) and (index_b is None):
                continue

            if index_a is not None:
                consumed_a.add(index_a)

            if index_b is not None:
                consumed_b.add(index_b)

            entries.append(self.build_entry(clause_a    = clauses_a[index_a] if index_a is not None else None,
                                            clause_b    = clauses_b[index_b] if index_b is not None else None,
                                            clause_type = clause_type,
                                           ))

        for index, clause in enumerate(clauses_a):
            if index not in consumed_a:
                entries.append(self.build_entry(clause, None, self.rules.RESIDUAL_TYPE))

        for index, clause in enumerate(clauses_b):
            if index not in consumed_b:
                entries.append(self.build_entry(None, clause, self.rules.RESIDUAL_TYPE))

        return entries


    @staticmethod
    def _first_unconsumed(lowered_texts: List[str], consumed: set, keywords: List[str]) -> Optional[int]:
        for index, text in enumerate(lowered_texts):
            if (index not in consumed) and any(keyword in text for keyword in keywords):
                return index

        return None


    def build_entry(self, clause_a: Optional[ClauseAnalysis], clause_b: Optional[ClauseAnalysis], clause_type: str) -> ComparisonEntry:
        """
        One comparison row; at least one side must be present
        """
        if clause_a and clause_b:
            fact_a, fact_b = self._facts(clause_type, clause_a, clause_b)
            difference     = self.describe_difference(clause_a, clause_b, clause_type, fact_a, fact_b)
            overall_risk   = RiskLevel.highest(clause_a.final_risk, clause_b.final_risk)
            plain_english  = self.plain_english(clause_a, clause_b, clause_type, fact_a, fact_b)

        else:
            present, absent = (1, 2) if clause_a else (2, 1)
            clause          = clause_a or clause_b
            difference      = f"Only present in Document {present}"
            overall_risk    = clause.final_risk
            plain_english   = f"Document {present} has this {clause_type} clause, but Document {absent} doesn't."

        return ComparisonEntry(clause_type     = clause_type.capitalize(),
                               side_a          = self._side(clause_a, clause_type),
                               side_b          = self._side(clause_b, clause_type),
                               difference_text = difference,
                               overall_risk    = overall_risk,
                               plain_english   = plain_english,
                              )


    def _facts(self, clause_type: str, clause_a: ClauseAnalysis, clause_b: ClauseAnalysis) -> Tuple[Optional[NumericFact], Optional[NumericFact]]:
        return (self.fact_extractor.extract(clause_type, clause_a.clause_text),
                self.fact_extractor.extract(clause_type, clause_b.clause_text),
               )


    @staticmethod
    def _facts_differ(fact_a: Optional[NumericFact], fact_b: Optional[NumericFact]) -> bool:
        if (fact_a is None) or (fact_b is None) or not fact_a.comparable_with(fact_b):
            return False

        return fact_a.sort_key() != fact_b.sort_key()


    def describe_difference(self, clause_a: ClauseAnalysis, clause_b: ClauseAnalysis, clause_type: str, fact_a: Optional[NumericFact] = None,
                            fact_b: Optional[NumericFact] = None) -> str:
        """
        Differing figure, else differing text, else differing risk, else "minor variations"
        """
        if self._facts_differ(fact_a, fact_b):
            subject = {"rent"    : "Rent",
                       "deposit" : "Deposit",
                       "notice"  : "Notice period",
                      }[clause_type]

            return f"{subject} differs: {fact_a.display()} vs {fact_b.display()}"

        if (clause_a.clause_text.lower() != clause_b.clause_text.lower()):
            return "Clause content differs between documents"

        if (clause_a.final_risk != clause_b.final_risk):
            return f"Risk levels differ: {clause_a.final_risk.value} vs {clause_b.final_risk.value}"

        return "Similar clauses with minor variations"


    def plain_english(self, clause_a: ClauseAnalysis, clause_b: ClauseAnalysis, clause_type: str, fact_a: Optional[NumericFact] = None,
                      fact_b: Optional[NumericFact] = None) -> str:
        """
        First-person comparative sentence for a matched pair
        """
        sentence = self._fact_sentence(clause_type, fact_a, fact_b)

        if sentence:
            return sentence

        if (clause_a.final_risk != clause_b.final_risk):
            return (f"Document 1 has {clause_a.final_risk.value.lower()} risk while "
                    f"Document 2 has {clause_b.final_risk.value.lower()} risk for this clause."
                   )

        return "Both documents have similar terms for this clause."


    @staticmethod
    def _fact_sentence(clause_type: str, fact_a: Optional[NumericFact], fact_b: Optional[NumericFact]) -> Optional[str]:
        if (fact_a is None) or (fact_b is None) or not fact_a.comparable_with(fact_b):
            return None

        # Lower figure first: (document number, fact)
        low_doc, low     = (1, fact_a) if (fact_a.sort_key() <= fact_b.sort_key()) else (2, fact_b)
        high_doc, high   = (2, fact_b) if (low_doc == 1) else (1, fact_a)
        same             = (low.sort_key() == high.sort_key())

        if (clause_type == "rent"):
            if same:
                return f"Both documents have the same rent amount ({fact_a.display()}/month)."

            return f"Document {low_doc} is cheaper ({low.display()}/month) compared to Document {high_doc} ({high.display()}/month)."

        if same:
            return None

        if (clause_type == "deposit"):
            return f"Document {low_doc} requires lower upfront deposit ({low.display()}) vs Document {high_doc} ({high.display()})."

        if (clause_type == "notice"):
            return f"Document {low_doc} allows quicker exit ({low.display()} notice) compared to Document {high_doc} ({high.display()})."

        return None


    def _side(self, clause: Optional[ClauseAnalysis], clause_type: str) -> Optional[ClauseSummary]:
        """
        Display form of one side: preview text, prefixed with the key figure for rent / deposit / notice
        """
        if clause is None:
            return None

        display_text = TextProcessor.truncate(clause.clause_text, settings.COMPARISON_PREVIEW_CHARS)
        label        = self.rules.DISPLAY_LABELS.get(clause_type)
        fact         = self.fact_extractor.extract(clause_type, clause.clause_text) if label else None

        if fact is not None:
            display_text = f"{label}: {fact.display()} - {display_text}"

        return ClauseSummary(text        = display_text,
                             risk        = clause.final_risk,
                             explanation = clause.explanation,
                             full_text   = clause.clause_text,
                            )


    def find_similarities(self, doc_a: DocumentAnalysis, doc_b: DocumentAnalysis) -> List[str]:
        """
        Sentence-level similarities, or one generic sentence when none hold
        """
        similarities = list()

        if (doc_a.document_type == doc_b.document_type):
            similarities.append(f"Both documents are the same type: {doc_a.document_type.replace('_', ' ')}")

        if (doc_a.overall_risk == doc_b.overall_risk):
            similarities.append(f"Both documents have {doc_a.overall_risk.value.lower()} overall risk level")

        text_a       = doc_a.full_text.lower()
        text_b       = doc_b.full_text.lower()
        common_terms = [term for term in self.rules.SHARED_VOCABULARY if (term in text_a) and (term in text_b)]

        if common_terms:
            similarities.append(f"Both agreements mention: {', '.join(common_terms)}")

        if (abs(doc_a.total_clauses - doc_b.total_clauses) <= self.rules.SIMILAR_STRUCTURE_MAX_DIFF):
            similarities.append(f"Both documents have similar structure ({doc_a.total_clauses} vs {doc_b.total_clauses} clauses)")

        return similarities or [self.rules.GENERIC_SIMILARITY]


    @staticmethod
    def compare_risk(doc_a: DocumentAnalysis, doc_b: DocumentAnalysis) -> Tuple[List[str], List[str], List[str]]:
        """
        Document-level verdict on high-risk clause counts

        Returns:
        --------
            { tuple } : (similarities, differences, recommendations)
        """
        high_a = doc_a.risk_distribution.high
        high_b = doc_b.risk_distribution.high

        if (high_a > high_b):
            return [], ["Document 1 has more high-risk clauses"], ["Consider using Document 2 as it has fewer high-risk terms"]

        if (high_b > high_a):
            return [], ["Document 2 has more high-risk clauses"], ["Consider using Document 1 as it has fewer high-risk terms"]

        return ["Both documents have similar risk levels"], [], []
