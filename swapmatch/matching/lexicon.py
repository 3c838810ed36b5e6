"""Static synonym and context lookup tables.

Both tables are built once at import time and exposed read-only. Lookups are
case-insensitive. A word that appears in several synonym groups resolves to the
first group declared, matching a top-to-bottom scan of SYNONYM_GROUPS.
"""

from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Tuple

from swapmatch.normalization import extract_keywords

GENERAL_CONTEXT = "general"

SYNONYM_GROUPS: Mapping[str, FrozenSet[str]] = MappingProxyType({
    "javascript": frozenset({"js", "javascript", "node", "nodejs", "react", "vue", "angular"}),
    "python": frozenset({"python", "py", "django", "flask", "pandas", "numpy"}),
    "java": frozenset({"java", "spring", "springboot", "jsp", "servlet"}),
    "website": frozenset({"website", "web", "site", "webpage", "webdev", "frontend", "backend"}),
    "portfolio": frozenset({"portfolio", "showcase", "profile", "resume", "cv"}),
    "design": frozenset({"design", "ui", "ux", "graphic", "visual", "creative"}),
    "development": frozenset({"development", "dev", "coding", "programming", "building"}),
    "teaching": frozenset({"teaching", "tutoring", "lessons", "training", "education", "learn"}),
    "math": frozenset({"math", "mathematics", "calculus", "algebra", "geometry", "statistics"}),
    "english": frozenset({"english", "grammar", "writing", "language", "literature"}),
    "music": frozenset({"music", "guitar", "piano", "singing", "drums", "violin"}),
    "fitness": frozenset({"fitness", "gym", "workout", "exercise", "training", "yoga"}),
    "cooking": frozenset({"cooking", "baking", "chef", "recipe", "food", "culinary"}),
    "art": frozenset({"art", "drawing", "painting", "sketch", "illustration", "digital art"}),
    "photography": frozenset({"photography", "photo", "camera", "photoshoot", "editing"}),
    "video": frozenset({"video", "editing", "filming", "youtube", "content", "production"}),
})

# Order matters: classification returns the first context that matches
CONTEXTS: Tuple[Tuple[str, FrozenSet[str]], ...] = (
    ("programming", frozenset({
        "code", "programming", "development", "software", "app", "web",
        "python", "java", "javascript",
    })),
    ("design", frozenset({"design", "graphic", "logo", "visual", "creative", "art", "ui", "ux"})),
    ("education", frozenset({
        "teaching", "tutoring", "lessons", "learning", "education", "training",
    })),
    ("music", frozenset({"music", "guitar", "piano", "singing", "instrument", "song"})),
    ("fitness", frozenset({"fitness", "gym", "workout", "exercise", "yoga", "health"})),
    ("business", frozenset({"business", "marketing", "sales", "consulting", "strategy"})),
)


def _build_synonym_index(groups: Mapping[str, FrozenSet[str]]) -> Mapping[str, FrozenSet[str]]:
    """Invert SYNONYM_GROUPS into term -> group, keeping the first group per term."""
    index: Dict[str, FrozenSet[str]] = {}
    for group in groups.values():
        for term in group:
            index.setdefault(term, group)
    return MappingProxyType(index)


_SYNONYM_INDEX = _build_synonym_index(SYNONYM_GROUPS)


def find_synonyms(word: str) -> FrozenSet[str]:
    """Return the synonym group containing ``word``.

    Args:
        word: Keyword or phrase to resolve

    Returns:
        The matching synonym group, or a singleton of the lowercased word when no
        group lists it

    Example:
        >>> sorted(find_synonyms("Tutoring"))[:3]
        ['education', 'learn', 'lessons']
        >>> find_synonyms("gardening")
        frozenset({'gardening'})
    """
    lowered = word.lower()
    return _SYNONYM_INDEX.get(lowered, frozenset({lowered}))


def classify_keywords(keywords: Iterable[str]) -> str:
    """Return the first context whose keyword set intersects ``keywords``."""
    keyword_set = set(keywords)
    for name, context_keywords in CONTEXTS:
        if keyword_set & context_keywords:
            return name
    return GENERAL_CONTEXT


def classify_context(text: str) -> str:
    """Classify free text into a coarse topical context.

    This is first-match over CONTEXTS, not best-match. Text without any context
    keyword is classified as GENERAL_CONTEXT.
    """
    return classify_keywords(extract_keywords(text))
