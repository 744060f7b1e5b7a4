"""Search query preprocessing.

Trilium accepts OR between attribute filters (``#book or #article``) and
between property expressions, but not between bare fulltext words. This module
rewrites ``meeting or project`` into the equivalent
``note.content *=* meeting OR note.content *=* project`` and leaves every other
query untouched.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

logger = logging.getLogger(__name__)

# A quoted phrase (escaped characters are inert inside) or a run of non-whitespace
TOKEN_PATTERN = re.compile(r'"(?:[^"\\]|\\.)*"|\S+')

STRUCTURED_PREFIXES = ("#", "~", "note.", "not(")
OPERATOR_CHARACTERS = frozenset("=!<>")
BRACKET_PREFIXES = ("(", ")")

CONTENT_CONTAINS = "note.content *=*"


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def tokenize(query: str) -> list[str]:
    """Split a query into tokens, keeping quoted phrases (with quotes) intact.

    Examples:
        >>> tokenize('"meeting notes" or #project')
        ['"meeting notes"', 'or', '#project']
        >>> tokenize("   ")
        []
    """
    return TOKEN_PATTERN.findall(query)


def _is_or_operator(token: str) -> bool:
    return token.lower() == "or"


def _is_structured_token(token: str) -> bool:
    """Return True when a token uses attribute, property or operator syntax."""
    if token.startswith(STRUCTURED_PREFIXES):
        return True
    # Exclamation marks closing a word ("urgent!") are punctuation, not negation
    if OPERATOR_CHARACTERS.intersection(token.rstrip("!")):
        return True
    return token.startswith(BRACKET_PREFIXES)


def is_bare_fulltext(tokens: Sequence[str]) -> bool:
    """Return True when every token of a segment is a plain word or phrase."""
    return not any(_is_structured_token(token) for token in tokens)


def _split_segments(tokens: Sequence[str]) -> list[list[str]]:
    """Split tokens at top-level OR operators, dropping empty segments."""
    segments: list[list[str]] = []
    current: list[str] = []
    for token in tokens:
        if _is_or_operator(token):
            if current:
                segments.append(current)
                current = []
        else:
            current.append(token)
    if current:
        segments.append(current)
    return segments


def _wrap_fulltext_segment(tokens: Sequence[str]) -> str:
    if len(tokens) == 1:
        return f"{CONTENT_CONTAINS} {tokens[0]}"
    wrapped = " AND ".join(f"{CONTENT_CONTAINS} {token}" for token in tokens)
    return f"({wrapped})"


# ==============================================================================
# QUERY OPERATIONS
# ==============================================================================


def preprocess_search_query(query: str) -> str:
    """Rewrite OR between bare fulltext terms into explicit content filters.

    Args:
        query: Raw Trilium search query as typed by the caller.

    Returns:
        The query unchanged when it has no top-level OR, or when every OR segment
        is already structured. Otherwise each bare fulltext segment becomes a
        ``note.content *=*`` expression (AND-grouped in parentheses when the
        segment has several words) and segments are joined with ``" OR "``.

    Examples:
        >>> preprocess_search_query("meeting or project")
        'note.content *=* meeting OR note.content *=* project'
        >>> preprocess_search_query("#book or #article")
        '#book or #article'
    """
    tokens = tokenize(query)
    if not tokens:
        return query

    segments = _split_segments(tokens)
    if len(segments) <= 1:
        return query

    if not any(is_bare_fulltext(segment) for segment in segments):
        return query

    rewritten = " OR ".join(
        _wrap_fulltext_segment(segment) if is_bare_fulltext(segment) else " ".join(segment)
        for segment in segments
    )
    logger.debug("Rewrote search query %r as %r", query, rewritten)
    return rewritten
