# DEPENDENCIES
import re
from typing import Any
from typing import Dict
from typing import List
from typing import Optional


class DocumentValidator:
    """
    Document-type detection and extracted-text quality checks
    """
    # Document type -> indicative patterns (each match adds one point)
    DOCUMENT_TYPE_PATTERNS = {"rental_agreement"    : [r'rent', r'lease', r'tenant', r'landlord', r'property', r'premises'],
                              "loan_contract"       : [r'loan', r'borrow', r'lender', r'interest', r'principal', r'collateral'],
                              "terms_of_service"    : [r'terms of service', r'user agreement', r'privacy policy', r'website', r'service'],
                              "employment_contract" : [r'employment', r'employee', r'employer', r'salary', r'position', r'job'],
                             }

    UNKNOWN_TYPE           = "other"

    # Patterns that indicate OCR noise when they exceed a share of the word count
    OCR_ERROR_PATTERNS     = [r'[^\w\s.,;:!?()\-]',
                              r'\b[a-z]{1,2}\b',
                              r'\d[a-z]|[a-z]\d',
                             ]

    OCR_ERROR_RATIO        = 0.1


    @staticmethod
    def detect_document_type(text: str) -> str:
        """
        Detect the document type from keyword pattern counts

        Arguments:
        ----------
            text { str } : Extracted document text

        Returns:
        --------
               { str }   : Best scoring document type, or "other" when nothing matches
        """
        if not text:
            return DocumentValidator.UNKNOWN_TYPE

        scores = dict()

        for document_type, patterns in DocumentValidator.DOCUMENT_TYPE_PATTERNS.items():
            scores[document_type] = sum(len(re.findall(pattern, text, re.IGNORECASE)) for pattern in patterns)

        best_type  = max(scores, key = scores.get)

        if (scores[best_type] == 0):
            return DocumentValidator.UNKNOWN_TYPE

        return best_type


    @staticmethod
    def validate_text_quality(text: str, confidence: Optional[float] = None) -> Dict[str, Any]:
        """
        Score extracted text quality (0-100) and list detected issues

        Arguments:
        ----------
            text       { str }   : Extracted text

            confidence { float } : OCR confidence (0-100) when the text came from OCR

        Returns:
        --------
                 { dict }        : {"score", "issues", "recommendations"}
        """
        issues          : List[str] = list()
        recommendations : List[str] = list()
        score                       = 0

        if not text or not text.strip():
            return {"score"           : 0,
                    "issues"          : ["No text extracted"],
                    "recommendations" : recommendations,
                   }

        word_count      = len(text.split())
        avg_word_length = len(text) / word_count

        if (word_count < 50):
            issues.append("Very short document")
            score -= 20

        elif (word_count > 100):
            score += 20

        # Too short or too long words suggest OCR errors
        if (avg_word_length < 3):
            issues.append("Possible OCR errors - words too short")
            score -= 15

        elif (avg_word_length > 8):
            issues.append("Possible OCR errors - words too long")
            score -= 10

        else:
            score += 10

        for pattern in DocumentValidator.OCR_ERROR_PATTERNS:
            if (len(re.findall(pattern, text)) > word_count * DocumentValidator.OCR_ERROR_RATIO):
                issues.append("High number of potential OCR errors")
                score -= 15

        if confidence is not None:
            if (confidence < 70):
                issues.append("Low OCR confidence")
                score -= 20

            elif (confidence > 90):
                score += 15

        score = max(0, min(100, score + 50))

        if issues:
            recommendations.append("Consider re-scanning with higher quality")
            recommendations.append("Manually review extracted text for accuracy")

        return {"score"           : score,
                "issues"          : issues,
                "recommendations" : recommendations,
               }
