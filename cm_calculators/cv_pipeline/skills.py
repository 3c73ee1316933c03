"""Keyword-based skill categorisation for QA / test automation CVs."""

import re
from typing import Dict, List, Set

from cm_calculators.utils.helpers import capitalize_words
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)


def _keywords(alternatives: str) -> re.Pattern:
    return re.compile(rf"(?<!\w)(?:{alternatives})(?!\w)", re.IGNORECASE)


# Declaration order decides which category wins for shared keywords (azure).
SKILL_CATEGORIES: Dict[str, re.Pattern] = {
    "Automation Tools": _keywords(
        r"selenium|appium|katalon|nightwatch|cypress|playwright|webdriver|protractor|robot\s*framework|test\s*complete"
    ),
    "Programming Languages": _keywords(
        r"java|python|javascript|typescript|html|css|sql|xml|c#|ruby|php|scala|golang|swift|kotlin"
    ),
    "Test Management Tools": _keywords(
        r"jira|confluence|testlink|qtest|azure|tfs|alm|quality\s*center|test\s*rail|zephyr|xray"
    ),
    "Cloud & DevOps": _keywords(
        r"aws|azure|gcp|docker|kubernetes|jenkins|terraform|ci/cd|git|github|gitlab|bitbucket"
    ),
    "Testing Concepts": _keywords(
        r"api testing|performance testing|load testing|security testing|automation framework"
        r"|test strategy|test planning|agile testing"
    ),
    "Other Tools": _keywords(
        r"postman|swagger|soapui|fiddler|charles|wireshark|maven|gradle|npm|yarn"
    ),
}

_SEPARATORS = re.compile(r"[,;|•]")
MAX_PHRASE_WORDS = 3


def tokenize(content: str) -> List[str]:
    """Lower-cased words longer than one character, list separators removed."""
    cleaned = _SEPARATORS.sub(" ", content or "")
    return [w.lower() for w in cleaned.split() if len(w) > 1]


def _phrase_category(phrase: str) -> str:
    """Category whose keyword is exactly this phrase, or ''."""
    for category, pattern in SKILL_CATEGORIES.items():
        if pattern.fullmatch(phrase):
            return category
    return ""


def _word_category(word: str) -> str:
    for category, pattern in SKILL_CATEGORIES.items():
        if pattern.search(word):
            return category
    return ""


def extract_skills(content: str) -> Dict[str, List[str]]:
    """
    Map skill category -> sorted skill names found in content.
    Two- and three-word phrases are tried before single words; empty
    categories are omitted. Returns {} on failure.
    """
    try:
        found: Dict[str, Set[str]] = {category: set() for category in SKILL_CATEGORIES}
        words = tokenize(content)
        i = 0
        while i < len(words):
            consumed = 1
            phrase = words[i]
            for extra in range(1, MAX_PHRASE_WORDS):
                if i + extra >= len(words):
                    break
                phrase = f"{phrase} {words[i + extra]}"
                category = _phrase_category(phrase)
                if category:
                    found[category].add(phrase)
                    consumed = extra + 1
                    break
            if consumed == 1:
                category = _word_category(words[i])
                if category:
                    found[category].add(words[i])
            i += consumed

        result = {
            category: sorted(capitalize_words(s) for s in skills)
            for category, skills in found.items()
            if skills
        }
        logger.info("Extracted skills in %s categories", len(result))
        return result
    except Exception as e:
        logger.exception("Skills extraction failed: %s", e)
        return {}


def merge_skills(target: Dict[str, List[str]], extra: Dict[str, List[str]]) -> Dict[str, List[str]]:
    """Union two category maps, keeping each list sorted and unique."""
    merged = {k: list(v) for k, v in target.items()}
    for category, skills in extra.items():
        merged[category] = sorted(set(merged.get(category, [])) | set(skills))
    return merged
