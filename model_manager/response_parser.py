# DEPENDENCIES
import json
from typing import Any
from typing import Dict
from typing import Union
from typing import Optional
from dataclasses import dataclass


@dataclass(frozen = True)
class Structured:
    """
    Reasoner output recovered as a JSON object
    """
    fields : Dict[str, Any]


@dataclass(frozen = True)
class Unstructured:
    """
    Reasoner output with no recoverable JSON object
    """
    raw_text : str


ParsedOutput = Union[Structured, Unstructured]


def parse_reasoner_output(output: Any) -> ParsedOutput:
    """
    Best-effort structured extraction from a reasoner answer

    Dicts pass through; text is stripped of markdown fences and scanned for the first
    balanced brace-delimited block that parses as a JSON object

    Arguments:
    ----------
        output { Any }   : Raw reasoner result (dict or text)

    Returns:
    --------
        { Structured | Unstructured } : Tagged parse result
    """
    if isinstance(output, dict):
        return Structured(fields = output)

    text   = "" if output is None else str(output)
    parsed = extract_json_object(text)

    if parsed is None:
        return Unstructured(raw_text = text)

    return Structured(fields = parsed)


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """
    Return the first balanced {...} block of text that parses as a JSON object
    """
    cleaned = text.replace("```json", "").replace("```", "")
    start   = cleaned.find("{")

    while (start != -1):
        end       = _balanced_end(cleaned, start)
        candidate = None

        if end is not None:
            try:
                candidate = json.loads(cleaned[start:end + 1])

            except json.JSONDecodeError:
                candidate = None

        if isinstance(candidate, dict):
            return candidate

        start = cleaned.find("{", start + 1)

    return None


def _balanced_end(text: str, start: int) -> Optional[int]:
    """
    Index of the brace closing the one at start, skipping braces inside JSON strings
    """
    depth     = 0
    in_string = False
    escaped   = False

    for index in range(start, len(text)):
        char = text[index]

        if in_string:
            if escaped:
                escaped = False

            elif (char == "\\"):
                escaped = True

            elif (char == '"'):
                in_string = False

            continue

        if (char == '"'):
            in_string = True

        elif (char == "{"):
            depth += 1

        elif (char == "}"):
            depth -= 1

            if (depth == 0):
                return index

    return None
