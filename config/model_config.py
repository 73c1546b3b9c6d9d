# DEPENDENCIES
from typing import Any
from typing import Dict


class ModelConfig:
    """
    External reasoner settings per prompt kind - FOR LLM PROMPTING ONLY
    """
    CLAUSE_ANALYSIS  = "clause_analysis"
    DOCUMENT_SUMMARY = "document_summary"

    SYSTEM_PROMPT    = ("You are a legal expert who explains contracts to people without legal training. "
                        "Return ONLY valid JSON, no markdown, no explanation."
                       )

    # Generation parameters
    LLM_GENERATION   = {CLAUSE_ANALYSIS  : {"temperature" : 0.3,
                                            "max_tokens"  : 600,
                                            "json_mode"   : True,
                                           },
                        DOCUMENT_SUMMARY : {"temperature" : 0.2,
                                            "max_tokens"  : 1000,
                                            "json_mode"   : True,
                                           },
                       }

    PROMPT_TEMPLATES = {CLAUSE_ANALYSIS  : """
                                           You are analyzing a contract clause. Provide a clear, simple explanation that a non-lawyer can understand.

                                           Document Type: {document_type}
                                           Clause Text: "{clause_text}"

                                           Provide:
                                           1. A simple, plain-English explanation (2-3 sentences max)
                                           2. Risk level (Low, Medium, or High)
                                           3. Brief reason for the risk level (1 sentence)
                                           4. Any important terms that should be in a glossary

                                           Respond in JSON format:
                                           {{
                                             "explanation": "Plain English explanation here",
                                             "risk_level": "Low|Medium|High",
                                             "reason": "Brief reason for risk level",
                                             "important_terms": ["term1", "term2"]
                                           }}

                                           Focus on what this means for the person signing the contract.
                                           """,
                        DOCUMENT_SUMMARY : """
                                           Analyze this {document_type} contract and provide a summary.

                                           Contract Text:
                                           {contract_excerpt}

                                           Provide a JSON response with:
                                           {{
                                             "key_findings": ["finding1", "finding2", "finding3"],
                                             "recommendations": ["recommendation1", "recommendation2"],
                                             "overall_risk": "Low|Medium|High",
                                             "summary": "2-3 sentence overall summary"
                                           }}

                                           Focus on the most important aspects that could affect the person signing this contract.
                                           """,
                       }


    @classmethod
    def get_generation_config(cls, prompt_kind: str) -> Dict[str, Any]:
        """
        Generation parameters for a prompt kind
        """
        return dict(cls.LLM_GENERATION.get(prompt_kind, {}))


    @classmethod
    def render_prompt(cls, prompt_kind: str, payload: Dict[str, Any]) -> str:
        """
        Fill the prompt template of a prompt kind

        Raises:
        -------
            KeyError : Unknown prompt kind or missing payload field
        """
        template = cls.PROMPT_TEMPLATES[prompt_kind]

        return template.format(**payload)
