"""
Skill Detectors.

Responsibilities:
- Find skills mentioned in lower-cased résumé text.
- Report canonical skill names only.

Non-Responsibilities:
- No experience, location or education inference.
- No scoring.

Invariant:
Each detector is independent of the others and of call order; the
extractor unions their results, so a miss in one pass never hides a hit
in another.
"""

import re
from typing import Iterable, List, Set, Tuple

from resumescore.skills import (
    MULTI_WORD_ALIASES,
    SINGLE_WORD_ALIASES,
    SKILL_ALIASES,
    aliases_for,
    canonicalize,
)

_PHRASE_LEFT = r"(?:^|[\s,;|•\-/(])"
_PHRASE_RIGHT = r"(?=[\s,;|•\-/)]|$)"

# The targeted pass also accepts brackets and trailing sentence punctuation.
_TARGET_LEFT = r"(?:^|[\s,;|•\-/(\[])"
_TARGET_RIGHT = r"(?=[\s,;|•\-/)\].,:]|$)"

_NON_TOKEN_CHARS = re.compile(r"[^a-z0-9#.+\-/\s]")
_TOKEN_PUNCT = re.compile(r"[,;|•()]")


def _phrase_regex(alias: str) -> "re.Pattern[str]":
    return re.compile(_PHRASE_LEFT + "(" + re.escape(alias) + ")" + _PHRASE_RIGHT)


# Compiled once; the alias table never changes after import.
_PHRASE_PATTERNS: Tuple[Tuple[str, "re.Pattern[str]"], ...] = tuple(
    (alias, _phrase_regex(alias)) for alias in MULTI_WORD_ALIASES
)

CONTEXTUAL_PATTERNS: Tuple[Tuple["re.Pattern[str]", str], ...] = (
    (re.compile(r"\brest(?:ful)?\s*(?:api|service|endpoint|web)"), "REST"),
    (re.compile(r"\bapi\s*(?:design|develop|integrat|gateway)"), "API Design"),
    (re.compile(r"\bcontinuous\s*(?:integration|deployment|delivery)"), "CI/CD"),
    (re.compile(r"\btest[\s-]*driven"), "TDD"),
    (re.compile(r"\bdomain[\s-]*driven"), "DDD"),
    (re.compile(r"\bevent[\s-]*driven"), "Event-Driven Architecture"),
    (re.compile(r"\bmicroservice\s*(?:architecture|pattern|based)"), "Microservices"),
    (re.compile(r"\bcontainer(?:ized|isation|ization)"), "Docker"),
    (re.compile(r"\borchestrat(?:e|ion|ing)\s*(?:container|cluster|pod)"), "Kubernetes"),
    (re.compile(r"\binfrastructure[\s-]*as[\s-]*code"), "Terraform"),
    (re.compile(r"\bml\s*(?:model|pipeline|engineer|ops)"), "Machine Learning"),
    (re.compile(r"\bdata\s*(?:pipeline|warehouse|lake|engineer)"), "ETL"),
    (re.compile(r"\bfull[\s-]*stack"), "Full-Stack"),
    (re.compile(r"\bcloud[\s-]*native"), "Cloud Native"),
    (re.compile(r"\bagile\s*(?:methodology|methodologies|development|team|process|framework)"), "Agile"),
    (re.compile(r"\bscrum\s*(?:master|team|ceremony|sprint|process)"), "Scrum"),
)


def tokenize(text_lower: str) -> List[str]:
    """Split text into tokens, keeping characters that occur inside skill names (# . + - /)."""
    return _NON_TOKEN_CHARS.sub(" ", text_lower).split()


def detect_phrase_aliases(text_lower: str) -> Set[str]:
    """
    Scan for multi-word and punctuated aliases, longest first.

    A matched span is blanked before shorter aliases are tried, so
    "react native" is claimed once and is not re-read as "react js" or
    similar fragments by this pass.
    """
    found: Set[str] = set()
    working = text_lower
    for alias, pattern in _PHRASE_PATTERNS:
        if alias not in working:
            continue
        claimed = False
        for match in pattern.finditer(working):
            claimed = True
            start, end = match.span(1)
            working = working[:start] + " " * (end - start) + working[end:]
        if claimed:
            found.add(SKILL_ALIASES[alias])
    return found


def detect_token_aliases(text_lower: str) -> Set[str]:
    """Look up every token (and the token minus a trailing dot) as a single-word alias."""
    found: Set[str] = set()
    for token in tokenize(text_lower):
        cleaned = _TOKEN_PUNCT.sub("", token)
        if cleaned in SINGLE_WORD_ALIASES:
            found.add(SKILL_ALIASES[cleaned])
        no_dot = cleaned.rstrip(".")
        if no_dot != cleaned and no_dot in SINGLE_WORD_ALIASES:
            found.add(SKILL_ALIASES[no_dot])
    return found


def detect_ngram_aliases(text_lower: str) -> Set[str]:
    """Look up bigrams and trigrams of the token stream ("ruby on rails", "google cloud platform")."""
    found: Set[str] = set()
    tokens = tokenize(text_lower)
    for size in (2, 3):
        for i in range(len(tokens) - size + 1):
            gram = _TOKEN_PUNCT.sub("", " ".join(tokens[i:i + size]))
            if gram in SKILL_ALIASES:
                found.add(SKILL_ALIASES[gram])
    return found


def detect_required_skills(text_lower: str, required_skills: Iterable[str]) -> Set[str]:
    """
    Actively search for each required skill under every alias it is known by.

    The raw requirement string and its canonical name are searched too, so
    a requirement missing from the alias table can still be found verbatim.
    """
    found: Set[str] = set()
    for required in required_skills:
        canonical = canonicalize(required)
        terms = list(aliases_for(canonical))
        for extra in (required.strip().lower(), canonical.lower()):
            if extra and extra not in terms:
                terms.append(extra)

        for term in terms:
            pattern = _TARGET_LEFT + re.escape(term) + _TARGET_RIGHT
            if re.search(pattern, text_lower):
                found.add(canonical)
                break
    return found


def detect_contextual_skills(text_lower: str) -> Set[str]:
    """Skills implied by prose, e.g. "continuous delivery" implies CI/CD."""
    return {skill for pattern, skill in CONTEXTUAL_PATTERNS if pattern.search(text_lower)}
