"""
Cheap string-similarity heuristic used to order candidates in best-first search.

No remote calls: only the two titles are compared. A higher score means the
candidate looks closer to the target.
"""
import re
import unicodedata
from typing import List

from wiki_mindmap.utils.title_helpers import has_digits

EXACT_MATCH_SCORE = 100
CANDIDATE_CONTAINS_TARGET_SCORE = 30
TARGET_CONTAINS_CANDIDATE_SCORE = 20
SHARED_WORD_BONUS = 2

# (minimum similarity ratio, score), checked top to bottom
SIMILARITY_THRESHOLDS = [
    (0.8, 25),
    (0.7, 20),
    (0.6, 15),
    (0.5, 10),
    (0.4, 5),
    (0.3, 2),
]

_SEPARATORS_RE = re.compile(r"[\d\s\-_]+")
_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Lower-case, strip diacritics, turn digits/spaces/dashes into single spaces, drop punctuation."""
    decomposed = unicodedata.normalize("NFD", title.lower())
    text = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    text = _SEPARATORS_RE.sub(" ", text)
    text = _PUNCTUATION_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def levenshtein(a: str, b: str) -> int:
    """Edit distance with a two-row table."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j], current[j - 1], previous[j - 1]))
        previous = current
    return previous[-1]


def similarity_ratio(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1 - levenshtein(a, b) / longest


def _words(text: str) -> List[str]:
    return [word for word in text.split() if len(word) > 1]


def score(candidate: str, target: str) -> int:
    """
    Score how promising `candidate` is for reaching `target`.

    Titles containing digits are disqualified (0). Exact normalized matches
    score 100, containment 30/20, anything else 1-25 by edit-distance
    similarity plus a bonus per shared word.
    """
    if has_digits(candidate) or has_digits(target):
        return 0

    clean_candidate = normalize_title(candidate)
    clean_target = normalize_title(target)
    if not clean_candidate or not clean_target:
        return 0

    if clean_candidate == clean_target:
        return EXACT_MATCH_SCORE
    if clean_target in clean_candidate:
        return CANDIDATE_CONTAINS_TARGET_SCORE
    if clean_candidate in clean_target:
        return TARGET_CONTAINS_CANDIDATE_SCORE

    ratio = similarity_ratio(clean_candidate, clean_target)
    result = 1
    for threshold, threshold_score in SIMILARITY_THRESHOLDS:
        if ratio > threshold:
            result = threshold_score
            break

    target_words = set(_words(clean_target))
    shared = [word for word in _words(clean_candidate) if word in target_words]
    return result + SHARED_WORD_BONUS * len(shared)
