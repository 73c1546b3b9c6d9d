# DEPENDENCIES
from typing import Dict
from typing import Optional


# Curated plain-English meanings, keyed by lowercase term
LEGAL_GLOSSARY : Dict[str, str] = {"collateral"              : "Asset pledged as security for a loan that can be seized if payments are not made",
                                   "indemnity"               : "Protection against legal liability or financial loss",
                                   "liquidated damages"      : "Pre-agreed amount of compensation for breach of contract",
                                   "force majeure"           : "Unforeseeable circumstances that prevent fulfilling a contract",
                                   "arbitration"             : "Alternative dispute resolution outside of court",
                                   "jurisdiction"            : "Legal authority of a court to hear and decide a case",
                                   "material adverse change" : "Significant negative change in financial condition or business",
                                   "cross-default"           : "Default on one agreement triggers default on other agreements",
                                   "acceleration"            : "Making the entire debt immediately due upon default",
                                   "waiver"                  : "Voluntary giving up of a legal right or claim",
                                   "assignment"              : "Transfer of rights or obligations to another party",
                                   "breach"                  : "Failure to fulfill terms of a contract",
                                   "default"                 : "Failure to meet legal obligations, especially debt payments",
                                   "penalty"                 : "Punishment or fine for breaking contract terms",
                                   "security deposit"        : "Money held as protection against damage or non-payment",
                                   "governing law"           : "Legal system that will interpret the contract",
                                   "personal guarantee"      : "Individual promise to pay if business cannot",
                                   "unlimited liability"     : "Full personal responsibility for all debts and obligations",
                                  }

GLOSSARY_CATEGORY               = "legal"


def lookup_term(term: str) -> Optional[str]:
    """
    Case-insensitive glossary lookup, None for terms outside the curated set
    """
    if not term:
        return None

    return LEGAL_GLOSSARY.get(term.strip().lower())
