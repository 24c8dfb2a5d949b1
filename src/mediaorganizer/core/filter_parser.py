"""Parse search-box text into a :class:`~mediaorganizer.models.Filter`.

Grammar
-------
* Tokens are separated by whitespace. Double quotes group words into one
  token (``"road trip"``); a quote without a partner is ignored.
* ``#name`` or ``tag:name`` requires the tag ``name``. The ``tag:`` prefix is
  case-insensitive. A prefix without a name is ignored.
* A token containing ``*`` or ``?`` is a glob matched against the whole path:
  ``*`` matches any run of characters and ``?`` exactly one.
* Any other token matches paths containing it.
* Repeated terms are kept once, in order of first appearance.

Literal ``%``, ``_`` and ``\\`` in the text never act as wildcards.
"""

from __future__ import annotations

import re
from typing import List

from ..models import Filter

_TOKEN_RE = re.compile(r'(?:[^\s"]+|"[^"]*")+')
_TAG_PREFIXES = ("#", "tag:")


def escape_like_pattern(text: str) -> str:
    """Escape ``LIKE`` wildcards in *text*; pair with ``ESCAPE '\\'``."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def glob_to_like(term: str) -> str:
    """Translate a ``*``/``?`` glob into an escaped ``LIKE`` pattern."""
    return escape_like_pattern(term).replace("*", "%").replace("?", "_")


def tokenize(text: str) -> List[str]:
    """Split *text* into search tokens with quotes removed."""
    tokens = []
    for match in _TOKEN_RE.finditer(text or ""):
        token = match.group(0).replace('"', "")
        if token:
            tokens.append(token)
    return tokens


def _tag_name(token: str) -> str | None:
    lowered = token.lower()
    for prefix in _TAG_PREFIXES:
        if lowered.startswith(prefix):
            return token[len(prefix):].strip()
    return None


def filter_from_string(text: str) -> Filter:
    """Build a filter from free text typed by the user.

    >>> filter_from_string('#holiday beach *.mp4')
    Filter(tags=['holiday'], filenames=['%beach%', '%.mp4'], escaped=True)
    """
    tags: List[str] = []
    filenames: List[str] = []

    for token in tokenize(text):
        name = _tag_name(token)
        if name is not None:
            if name and name not in tags:
                tags.append(name)
            continue

        if "*" in token or "?" in token:
            pattern = glob_to_like(token)
        else:
            pattern = f"%{escape_like_pattern(token)}%"
        if pattern not in filenames:
            filenames.append(pattern)

    return Filter(tags=tags or None, filenames=filenames or None, escaped=bool(filenames))


__all__ = ["escape_like_pattern", "filter_from_string", "glob_to_like", "tokenize"]
