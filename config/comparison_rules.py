# DEPENDENCIES
from typing import Dict
from typing import List
from typing import Tuple


class ComparisonRules:
    """
    Static tables driving clause-type matching and numeric fact extraction
    """
    # Ordered clause-type keyword groups; order decides which type claims a clause first
    CLAUSE_TYPES : List[Tuple[str, List[str]]] = [("rent", ["rent", "payment", "monthly", "amount"]),
                                                  ("deposit", ["deposit", "security", "advance"]),
                                                  ("notice", ["notice", "termination", "exit"]),
                                                  ("maintenance", ["maintenance", "repair", "upkeep"]),
                                                  ("utilities", ["utilities", "electricity", "water"]),
                                                  ("pets", ["pets", "animals"]),
                                                  ("subletting", ["sublet", "subletting", "assign"]),
                                                  ("duration", ["duration", "term", "period", "lease"]),
                                                  ("renewal", ["renewal", "extend", "renew"]),
                                                 ]

    RESIDUAL_TYPE                              = "other"

    # Rent amount patterns, most specific first (applied to lowercased text)
    RENT_PATTERNS                              = [r"₹\s*(\d+(?:,\d+)*)",
                                                  r"\brs\.?\s*(\d+(?:,\d+)*)",
                                                  r"(\d+(?:,\d+)*)\s*(?:rupees?|rs\.?|₹)",
                                                  r"rent.*?(\d+(?:,\d+)*)",
                                                  r"monthly.*?(\d+(?:,\d+)*)",
                                                 ]

    # Permissive last resort: any run of 4+ digits
    RENT_BARE_NUMBER_PATTERN                   = r"(\d{4,})"

    RENT_RANGE                                 = (1000, 1000000)

    # Deposit: months of rent first, then currency amounts
    DEPOSIT_PATTERNS : List[Tuple[str, str]]   = [(r"(\d+)\s*months?", "month"),
                                                  (r"₹\s*(\d+(?:,\d+)*)", "rupee"),
                                                  (r"\brs\.?\s*(\d+(?:,\d+)*)", "rupee"),
                                                 ]

    NOTICE_PATTERNS : List[Tuple[str, str]]    = [(r"(\d+)\s*months?\s*(?:written\s+)?notice", "month"),
                                                  (r"notice.*?(\d+)\s*months?", "month"),
                                                  (r"(\d+)\s*months?\s*prior", "month"),
                                                  (r"(\d+)\s*days?\s*(?:written\s+)?notice", "day"),
                                                 ]

    # Days per unit, for ordering notice periods expressed in different units
    UNIT_DAYS : Dict[str, int]                 = {"day"   : 1,
                                                  "month" : 30,
                                                 }

    # Named terms whose presence in both documents counts as a similarity
    SHARED_VOCABULARY                          = ["landlord",
                                                  "tenant",
                                                  "renewal",
                                                  "maintenance",
                                                  "utilities",
                                                  "parking",
                                                 ]

    SIMILAR_STRUCTURE_MAX_DIFF                 = 2

    GENERIC_SIMILARITY                         = "Both documents are legal agreements with standard terms"

    # Display prefixes for the key fact of a comparison side
    DISPLAY_LABELS : Dict[str, str]            = {"rent"    : "Rent",
                                                  "deposit" : "Deposit",
                                                  "notice"  : "Notice",
                                                 }
