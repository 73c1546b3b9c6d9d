# DEPENDENCIES
import re
from typing import Dict
from typing import List


class TextProcessor:
    """
    Text normalization and key-information extraction utilities
    """
    @staticmethod
    def normalize_whitespace(text: str) -> str:
        """
        Collapse runs of spaces and tabs, strip every line and drop blank lines

        Line breaks are kept because clause markers are anchored on them

        Arguments:
        ----------
            text { str } : Raw extracted text

        Returns:
        --------
               { str }   : Normalized text ("" for empty input)
        """
        if not text:
            return ""

        lines = (re.sub(r'[^\S\n]+', ' ', line).strip() for line in text.splitlines())

        return "\n".join(line for line in lines if line)


    @staticmethod
    def flatten(text: str) -> str:
        """
        Collapse all whitespace (including line breaks) to single spaces
        """
        return re.sub(r'\s+', ' ', text or "").strip()


    @staticmethod
    def truncate(text: str, max_chars: int, suffix: str = "...") -> str:
        """
        Cut text to max_chars, appending suffix only when something was cut
        """
        if (len(text) <= max_chars):
            return text

        return text[:max_chars] + suffix


    @staticmethod
    def extract_key_information(text: str) -> Dict[str, List[str]]:
        """
        Extract parties, dates, amounts, emails and phone numbers

        Arguments:
        ----------
            text { str } : Input text

        Returns:
        --------
               { dict }  : Deduplicated values per category, in first-seen order
        """
        info           = {"parties" : [],
                          "dates"   : [],
                          "amounts" : [],
                          "emails"  : [],
                          "phones"  : [],
                         }

        if not text:
            return info

        # Names after role words, then all-caps runs
        party_patterns = [r'(?:between|party|tenant|landlord|borrower|lender|employee|employer|client|company)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)',
                          r'\b([A-Z]{2,}(?:\s+[A-Z]{2,})*)\b',
                         ]

        for pattern in party_patterns:
            info["parties"].extend(re.findall(pattern, text))

        date_patterns  = [r'\b\d{1,2}/\d{1,2}/\d{4}\b',
                          r'\b\d{1,2}-\d{1,2}-\d{4}\b',
                          r'\b(?:January|February|March|April|May|June|July|August|September|October|November|December)\s+\d{1,2},?\s+\d{4}\b',
                         ]

        for pattern in date_patterns:
            info["dates"].extend(re.findall(pattern, text, re.IGNORECASE))

        amount_patterns = [r'\$[\d,]+(?:\.\d{2})?',
                           r'₹\s*[\d,]+(?:\.\d{2})?',
                           r'\bRs\.?\s*[\d,]+(?:\.\d{2})?',
                          ]

        for pattern in amount_patterns:
            info["amounts"].extend(re.findall(pattern, text, re.IGNORECASE))

        info["emails"] = re.findall(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b', text)

        phone_pattern  = r'\b(?:\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b'
        info["phones"] = re.findall(phone_pattern, text)

        # Deduplicate, keeping first occurrence
        for key in info:
            info[key] = list(dict.fromkeys(value.strip() for value in info[key]))

        return info
