# DEPENDENCIES
import re
from typing import List
from typing import Tuple
from typing import Pattern
from typing import Optional
from dataclasses import dataclass

from config.settings import settings
from config.comparison_rules import ComparisonRules


@dataclass(frozen = True)
class NumericFact:
    """
    Number pulled out of clause prose, with its unit ("rupee", "month" or "day")
    """
    value : int
    unit  : str

    @property
    def in_days(self) -> Optional[int]:
        days_per_unit = ComparisonRules.UNIT_DAYS.get(self.unit)

        return None if days_per_unit is None else self.value * days_per_unit


    def comparable_with(self, other: "NumericFact") -> bool:
        if (self.unit == other.unit):
            return True

        return (self.in_days is not None) and (other.in_days is not None)


    def sort_key(self) -> int:
        days = self.in_days

        return self.value if days is None else days


    def display(self) -> str:
        """
        Human form: ₹15,000 / 1 month / 2 months / 30 days
        """
        if (self.unit == "rupee"):
            return f"₹{self.value:,}"

        return f"{self.value} {self.unit}" + ("" if (self.value == 1) else "s")


class FactExtractor:
    """
    Best-effort extraction of rent, deposit and notice figures from clause text

    Pattern families are tried in fixed priority order and the first usable match wins
    """
    def __init__(self, rules: ComparisonRules = None, bare_number_fallback: Optional[bool] = None):
        """
        Arguments:
        ----------
            rules                { ComparisonRules } : Pattern tables

            bare_number_fallback      { bool }       : Accept any 4+ digit run as a rent amount (default: settings.RENT_BARE_NUMBER_FALLBACK)
        """
        self.rules                = rules or ComparisonRules()
        self.bare_number_fallback = settings.RENT_BARE_NUMBER_FALLBACK if bare_number_fallback is None else bare_number_fallback

        rent_patterns             = list(self.rules.RENT_PATTERNS)

        if self.bare_number_fallback:
            rent_patterns.append(self.rules.RENT_BARE_NUMBER_PATTERN)

        self.rent_patterns        = [re.compile(pattern) for pattern in rent_patterns]
        self.deposit_patterns     = self._compile_with_units(self.rules.DEPOSIT_PATTERNS)
        self.notice_patterns      = self._compile_with_units(self.rules.NOTICE_PATTERNS)


    @staticmethod
    def _compile_with_units(patterns: List[Tuple[str, str]]) -> List[Tuple[Pattern, str]]:
        return [(re.compile(pattern), unit) for pattern, unit in patterns]


    def extract(self, clause_type: str, text: str) -> Optional[NumericFact]:
        """
        Extract the key figure for a clause type

        Arguments:
        ----------
            clause_type { str } : rent, deposit or notice (other types have no figure)

            text        { str } : Clause text

        Returns:
        --------
            { NumericFact }     : Extracted figure, None when nothing usable was found
        """
        extractors = {"rent"    : self.extract_rent,
                      "deposit" : self.extract_deposit,
                      "notice"  : self.extract_notice,
                     }

        extractor  = extractors.get(clause_type)

        return extractor(text) if extractor else None


    def extract_rent(self, text: str) -> Optional[NumericFact]:
        """
        Monthly rent in rupees, limited to the plausible rent range
        """
        lowered          = (text or "").lower()
        minimum, maximum = self.rules.RENT_RANGE

        for pattern in self.rent_patterns:
            match = pattern.search(lowered)

            if not match:
                continue

            amount = self._to_int(match.group(1))

            if (amount is not None) and (minimum <= amount <= maximum):
                return NumericFact(value = amount, unit = "rupee")

        return None


    def extract_deposit(self, text: str) -> Optional[NumericFact]:
        """
        Security deposit, as months of rent or a rupee amount
        """
        return self._first_match(self.deposit_patterns, text)


    def extract_notice(self, text: str) -> Optional[NumericFact]:
        """
        Notice period, in months or days
        """
        return self._first_match(self.notice_patterns, text)


    def _first_match(self, patterns: List[Tuple[Pattern, str]], text: str) -> Optional[NumericFact]:
        lowered = (text or "").lower()

        for pattern, unit in patterns:
            match  = pattern.search(lowered)
            amount = self._to_int(match.group(1)) if match else None

            if amount:
                return NumericFact(value = amount, unit = unit)

        return None


    @staticmethod
    def _to_int(digits: str) -> Optional[int]:
        cleaned = re.sub(r'[^\d]', '', digits or "")

        return int(cleaned) if cleaned else None
