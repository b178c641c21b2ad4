"""Hashtag extraction."""

import re
from collections import Counter

from .entries import Entry

TAG_PATTERN = re.compile(r"#\w+")


def extract_tags(entries: list[Entry]) -> dict[str, int]:
    """Count ``#word`` tags across entries, most frequent first."""
    counts: Counter[str] = Counter()
    for entry in entries:
        counts.update(TAG_PATTERN.findall(entry.content))
    return dict(counts.most_common())
