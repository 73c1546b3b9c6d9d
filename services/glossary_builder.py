# DEPENDENCIES
from typing import Set
from typing import List
from typing import Iterator

from config.glossary_terms import lookup_term
from services.data_models import GlossaryEntry
from services.data_models import ClauseAnalysis
from config.glossary_terms import GLOSSARY_CATEGORY


class GlossaryBuilder:
    """
    Collects curated definitions for the terms referenced by analyzed clauses
    """
    def build(self, clauses: List[ClauseAnalysis]) -> List[GlossaryEntry]:
        """
        Build a deduplicated, alphabetically sorted glossary

        Important terms of all clauses are scanned before matched keywords; the first
        spelling seen for a term wins and terms outside the curated set are skipped

        Arguments:
        ----------
            clauses { list } : Analyzed clauses

        Returns:
        --------
              { list }       : GlossaryEntry list sorted by term (case-insensitive)
        """
        entries : List[GlossaryEntry] = list()
        seen    : Set[str]            = set()

        for term in self._candidates(clauses):
            key     = term.strip().lower()
            meaning = lookup_term(key)

            if (key in seen) or (meaning is None):
                continue

            seen.add(key)
            entries.append(GlossaryEntry(term     = term.strip(),
                                         meaning  = meaning,
                                         category = GLOSSARY_CATEGORY,
                                        ))

        return sorted(entries, key = lambda entry: entry.term.lower())


    @staticmethod
    def _candidates(clauses: List[ClauseAnalysis]) -> Iterator[str]:
        for clause in clauses:
            yield from (term for term in clause.important_terms if term)

        for clause in clauses:
            yield from (keyword for keyword in clause.keywords if keyword)
