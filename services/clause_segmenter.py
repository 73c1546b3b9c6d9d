# DEPENDENCIES
import re
import math
from typing import List
from typing import Iterator
from typing import Optional

from utils.logger import log_info
from config.settings import settings
from services.data_models import ClauseUnit
from utils.text_processor import TextProcessor


class ClauseSegmenter:
    """
    Splits extracted contract text into clause-sized units

    Marker patterns are applied in order, each one to the output of the previous pass.
    Splits happen on the line break in front of a marker, so the marker stays with the
    clause it introduces and no text is lost
    """
    # Ordered legal-structure markers
    CLAUSE_MARKERS = [re.compile(r'\n(?=\d+\.\s)'),                          # 1. 2. ...
                      re.compile(r'\n(?=\([a-z]\)\s)'),                      # (a) (b) ...
                      re.compile(r'\n(?=Article\s+\d+)', re.IGNORECASE),
                      re.compile(r'\n(?=Section\s+\d+)', re.IGNORECASE),
                      re.compile(r'\n(?=Clause\s+\d+)', re.IGNORECASE),
                      re.compile(r'(?<=\.)\n(?=[A-Z])'),                     # paragraph-ending sentence
                     ]

    TOKENS_PER_WORD = 1.3


    def __init__(self, max_tokens: Optional[int] = None):
        """
        Arguments:
        ----------
            max_tokens { int } : Approximate token budget per unit (default: settings.CLAUSE_MAX_TOKENS)
        """
        self.max_tokens = max_tokens if max_tokens is not None else settings.CLAUSE_MAX_TOKENS

        if (self.max_tokens < 1):
            raise ValueError("max_tokens must be positive")

        self.window_words = max(1, math.floor(self.max_tokens / self.TOKENS_PER_WORD))


    def split(self, text: str) -> List[ClauseUnit]:
        """
        Segment text into ordered clause units

        Arguments:
        ----------
            text { str } : Raw extracted text

        Returns:
        --------
               { list }  : ClauseUnit list, empty for empty or whitespace-only input
        """
        units = list(self.iter_units(text))

        log_info("Text segmented into clauses",
                 input_chars = len(text or ""),
                 clauses     = len(units),
                 max_tokens  = self.max_tokens,
                )

        return units


    def iter_units(self, text: str) -> Iterator[ClauseUnit]:
        """
        Lazily yield clause units (a fresh call restarts from the beginning)
        """
        normalized = TextProcessor.normalize_whitespace(text)

        if not normalized:
            return

        pieces = [normalized]

        for marker in self.CLAUSE_MARKERS:
            next_pieces = list()

            for piece in pieces:
                next_pieces.extend(part for part in marker.split(piece) if part.strip())

            pieces = next_pieces

        for piece in pieces:
            yield from self._to_units(TextProcessor.flatten(piece))


    def _to_units(self, clause_text: str) -> Iterator[ClauseUnit]:
        """
        Emit the clause as one unit, or as fixed-size word windows when over budget
        """
        words = clause_text.split()

        if (self.estimate_tokens(len(words)) <= self.max_tokens):
            yield self._make_unit(words)
            return

        for start in range(0, len(words), self.window_words):
            yield self._make_unit(words[start:start + self.window_words])


    def _make_unit(self, words: List[str]) -> ClauseUnit:
        return ClauseUnit(text                  = " ".join(words),
                          word_count            = len(words),
                          estimated_token_count = round(self.estimate_tokens(len(words))),
                         )


    @classmethod
    def estimate_tokens(cls, word_count: int) -> float:
        return word_count * cls.TOKENS_PER_WORD
