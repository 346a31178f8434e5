"""Prompt templates for dictionary enrichment and label analysis."""

import json
from dataclasses import dataclass
from datetime import date

ENRICHMENT_HEADER = (
    "For each word in the following list, provide Chinese translation and "
    "details in JSON format:\n{words}\n"
)

SPECIAL_CASES = """
Special handling:
1. If word is in ALL CAPS: Try to find the common-case version
2. If word appears misspelled: Suggest the closest correct word
3. If word cannot be directly translated: Provide closest equivalent

Example special cases:
{
    "word": "RUNTIME",
    "suggested": "runtime",
    "phonetic": "/ˈrʌnˌtaɪm/",
    "translation": "运行时",
    "description": "程序运行期间的时间段，也指程序在运行时的环境",
    "synonyms": ["execution time", "running time"],
    "antonyms": ["compile time", "design time"]
}

{
    "word": "progam",
    "suggested": "program",
    "phonetic": "/ˈproʊˌɡræm/",
    "translation": "程序",
    "description": "发现可能的拼写错误，已更正为'program'并提供其翻译",
    "synonyms": ["application", "software"],
    "antonyms": ["hardware", "equipment"]
}
"""

ENRICHMENT_FOOTER = (
    "\nReturn as a JSON array. For any field that cannot be determined, use null."
)

ANALYSIS_TEMPLATE = """Recognize the production date and expiration date of items in the image, return in JSON format:
{example}
Date format should be YYYY.MM.DD. Production date and expiration date cannot be the same day.
Today is {today}. If only one date is printed and it is not labelled, treat it as the expiration date when it is after today and as the production date when it is on or before today; leave the other date null.
Use null for any field that cannot be read. Wrap the JSON in a ```json code block."""

ANALYSIS_EXAMPLE = {
    "production_date": "2024.08.20",
    "expiration_date": "2026.08.20",
    "production_id": "L233EEV",
    "additional_info": "CDNK25012111170001",
}


@dataclass(frozen=True)
class EnrichmentOptions:
    """Switches for the enrichment output format."""

    include_phonetic: bool = True
    include_examples: bool = False
    special_casing: bool = True


def enrichment_record_template(options: EnrichmentOptions) -> dict:
    """Build the per-word example record shown to the model."""
    record: dict = {"word": "example"}
    if options.include_phonetic:
        record["phonetic"] = "/ɪɡˈzæmpəl/"
    record["translation"] = "例子"
    record["description"] = "详细介绍(100字以内)"
    record["synonyms"] = ["similar1", "similar2"]
    record["antonyms"] = ["opposite1", "opposite2"]
    if options.include_examples:
        record["examples"] = [
            {"sentence": "This is an example sentence.", "translation": "这是一个例句。"},
            {"sentence": "Give me an example.", "translation": "给我举个例子。"},
        ]
    return record


def build_enrichment_prompt(
    words: list[str], options: EnrichmentOptions = EnrichmentOptions()
) -> str:
    """
    Build the prompt for one chunk of words.

    Args:
        words: Words in the chunk, in order
        options: Output format switches

    Returns:
        The complete prompt text
    """
    template = json.dumps(enrichment_record_template(options), ensure_ascii=False, indent=4)
    parts = [
        ENRICHMENT_HEADER.format(words=", ".join(words)),
        f"\nRequired format for each word:\n{template}\n",
    ]
    if options.special_casing:
        parts.append(SPECIAL_CASES)
    parts.append(ENRICHMENT_FOOTER)
    return "".join(parts)


def build_analysis_prompt(today: date) -> str:
    """Build the label-analysis prompt for a given current date."""
    example = json.dumps(ANALYSIS_EXAMPLE, indent=4)
    return ANALYSIS_TEMPLATE.format(example=example, today=today.strftime("%Y.%m.%d"))
