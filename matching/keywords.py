import re
from typing import Iterable, List

from .vocabulary import ALL_TERMS

REQUIRED_KEYWORDS_MARKER = "Required Keywords:"

_MARKER_RE = re.compile(r"required keywords:([^\r\n]*)", re.IGNORECASE)


def capitalize(term: str) -> str:
    """Upper-case the first letter only ("node.js" -> "Node.js")."""
    return term[:1].upper() + term[1:]


def dedupe(terms: Iterable[str]) -> List[str]:
    """Drop case-insensitive duplicates, keeping first occurrence order."""
    seen = set()
    out = []
    for t in terms:
        key = t.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(t)
    return out


def find_terms(text: str, terms: Iterable[str] = ALL_TERMS) -> List[str]:
    """Vocabulary terms contained anywhere in text (substring, no word boundaries)."""
    text_lower = (text or "").lower()
    return [t for t in terms if t.lower() in text_lower]


def parse_required_keywords(text: str) -> List[str]:
    """Comma-separated tokens following the "Required Keywords:" marker on its line."""
    match = _MARKER_RE.search(text or "")
    if not match:
        return []
    return [tok.strip() for tok in match.group(1).split(",") if tok.strip()]


def extract_keywords(job_description: str) -> List[str]:
    """
    Skill keywords a job description asks for.

    Vocabulary hits come first in vocabulary order, then any explicit
    "Required Keywords:" tokens. Each is capitalized and duplicates are removed.
    """
    found = [capitalize(t) for t in find_terms(job_description)]
    found += [capitalize(t) for t in parse_required_keywords(job_description)]
    return dedupe(found)


def append_required_keywords(description: str, keywords: Iterable[str]) -> str:
    cleaned = [k.strip() for k in keywords if k and k.strip()]
    if not cleaned:
        return description
    return f"{description}\n\n{REQUIRED_KEYWORDS_MARKER} {', '.join(cleaned)}"
