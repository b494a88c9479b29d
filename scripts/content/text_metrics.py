"""
Studio Admin Hub — Text Metrics
=================================

Word, character and paragraph counts plus a reading-time estimate for
post bodies coming out of the rich-text editor.

Markup is removed with a plain regex (anything from "<" to the next ">"),
not an HTML parser. Missing or non-string input counts as empty text.

Functions:
  strip_tags()              - Remove <...> tags
  count_words()             - Whitespace-delimited tokens
  count_characters()        - Length of the stripped text
  count_paragraphs()        - Blocks separated by blank lines
  calculate_reading_time()  - Minutes at WORDS_PER_MINUTE, at least 1
  analyze_text()            - All of the above as a TextMetrics
  format_reading_time()     - Localised phrase for a minute count
"""
from __future__ import annotations

import math
import re
from typing import Any, List, Optional

from models.content_models import ReadingTimePhrases, TextMetrics
from scripts.lib import settings

TAG_RE = re.compile(r"<[^>]*>")
PARAGRAPH_BREAK_RE = re.compile(r"\n\n+")
# Word separators: Unicode whitespace plus the zero-width no-break space
WORD_SEPARATOR_RE = re.compile(r"[\s\ufeff]+")

READING_TIME_PHRASES = {
    "en": ReadingTimePhrases(
        less_than_minute="less than a minute",
        one_minute="1 minute",
        many_minutes="{minutes} minutes",
    ),
    "ar": ReadingTimePhrases(
        less_than_minute="أقل من دقيقة",
        one_minute="دقيقة واحدة",
        many_minutes="{minutes} دقائق",
    ),
}


def _normalize(text: Any) -> str:
    return text if isinstance(text, str) else ""


def _words(clean: str) -> List[str]:
    return [w for w in WORD_SEPARATOR_RE.split(clean) if w]


def _paragraphs(clean: str) -> int:
    return sum(1 for block in PARAGRAPH_BREAK_RE.split(clean) if _words(block))


def strip_tags(text: Any) -> str:
    """Remove every <...> tag from text."""
    return TAG_RE.sub("", _normalize(text))


def count_words(text: Any) -> int:
    return len(_words(strip_tags(text)))


def count_characters(text: Any) -> int:
    """Length of the stripped text, surrounding whitespace included."""
    return len(strip_tags(text))


def count_paragraphs(text: Any) -> int:
    return _paragraphs(strip_tags(text))


def calculate_reading_time(text: Any, words_per_minute: int = None) -> int:
    """
    Estimated reading time in whole minutes.

    Rounds up, and never reports less than one minute so an empty draft
    shows "1 minute" rather than "0 minutes".
    """
    wpm = words_per_minute or settings.WORDS_PER_MINUTE
    return max(1, math.ceil(count_words(text) / wpm))


def analyze_text(text: Any, words_per_minute: int = None) -> TextMetrics:
    """Compute all text metrics in one pass over the stripped text."""
    clean = strip_tags(text)
    word_count = len(_words(clean))
    wpm = words_per_minute or settings.WORDS_PER_MINUTE
    return TextMetrics(
        word_count=word_count,
        character_count=len(clean),
        paragraph_count=_paragraphs(clean),
        reading_time=max(1, math.ceil(word_count / wpm)),
    )


def format_reading_time(
    minutes: Any,
    locale: str = "en",
    phrases: Optional[ReadingTimePhrases] = None,
) -> str:
    """
    Render a minute count as a phrase.

    Three cases: under one minute, exactly one minute, and everything else
    (which gets the number substituted into the plural template). Pass
    `phrases` to plug in a caller's own localisation. Anything that is not
    a finite number reads as zero minutes; whole floats print without ".0".
    """
    phrases = phrases or READING_TIME_PHRASES.get(locale, READING_TIME_PHRASES["en"])
    if (
        not isinstance(minutes, (int, float))
        or isinstance(minutes, bool)
        or not math.isfinite(minutes)
    ):
        minutes = 0
    elif isinstance(minutes, float) and minutes.is_integer():
        minutes = int(minutes)

    if minutes < 1:
        return phrases.less_than_minute
    if minutes == 1:
        return phrases.one_minute
    return phrases.many_minutes.format(minutes=minutes)
