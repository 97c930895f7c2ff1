"""
NoteKeeper Backend - Tag Matcher
=================================

What:  Stateless operations over a note's tag sequence: add, remove, match
       and search.
How:   Pure functions. They never touch the store; callers hand in the
       current tags (or notes) and write the returned sequence back.

Matching Modes:
    exact    (default) lowercased whole-string equality
    pattern  the query is a regular expression anchored to the whole tag and
             matched case-insensitively; invalid expressions raise
             SearchPatternError

    Adding and removing always compare tags exactly (case-sensitive), so
    "Blue" and "blue" can both be stored on one note.
"""

import re
from typing import Any, Callable, Iterable, List, Optional

from notekeeper.exceptions import InvalidInputError, SearchPatternError
from notekeeper.models.note import Note

SEARCH_MODES = ("exact", "pattern")


def _require_list(value: Any) -> list:
    if not isinstance(value, list):
        raise InvalidInputError(context={"received_type": type(value).__name__})
    return value


def add_tags(existing: Iterable[str], incoming: Any) -> List[str]:
    """
    Append new tags to an existing sequence.

    Non-string items in ``incoming`` are skipped. A string is appended only
    if it is not already present, so repeated input collapses to one entry.

    Raises:
        InvalidInputError: ``incoming`` is not a list.
    """
    incoming = _require_list(incoming)
    tags = list(existing or [])

    for tag in incoming:
        if not isinstance(tag, str):
            continue
        if tag in tags:
            continue
        tags.append(tag)

    return tags


def remove_tags(existing: Iterable[str], to_remove: Any) -> List[str]:
    """
    Drop every tag whose exact value appears in ``to_remove``.

    Raises:
        InvalidInputError: ``to_remove`` is not a list.
    """
    to_remove = _require_list(to_remove)
    return [tag for tag in (existing or []) if tag not in to_remove]


def _compile(query: str) -> "re.Pattern[str]":
    try:
        return re.compile(query, re.IGNORECASE)
    except re.error as e:
        raise SearchPatternError(query=query, reason=str(e)) from e


def matcher(query: str, mode: str = "exact") -> Callable[[str], bool]:
    """
    Build the tag predicate for ``query``. Pattern queries compile once here.

    Exact mode lowercases both sides with ``str.lower`` rather than
    ``str.casefold``, so "STRASSE" does not match "straße".
    """
    if mode == "pattern":
        pattern = _compile(query)
        return lambda tag: pattern.fullmatch(tag) is not None

    lowered = query.lower()
    return lambda tag: tag.lower() == lowered


def matches(tag: str, query: str, mode: str = "exact") -> bool:
    """Case-insensitive whole-string match of ``query`` against ``tag``."""
    return matcher(query, mode)(tag)


def search(
    notes: Iterable[Note],
    query: Optional[str],
    mode: str = "exact",
) -> Optional[List[Note]]:
    """
    Find every note carrying at least one tag that matches ``query``.

    Returns:
        None when no query was supplied (no search performed), otherwise
        the matching notes in the order given, possibly empty.

    Raises:
        SearchPatternError: ``mode`` is "pattern" and the query does not
            compile.
    """
    if not query:
        return None

    is_match = matcher(query, mode)
    return [
        note for note in notes
        if note.tags and any(is_match(tag) for tag in note.tags)
    ]
