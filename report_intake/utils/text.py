"""Text normalization helpers shared by the filter, scorer and detector."""

import re
from typing import FrozenSet, List, Optional, Set

# Words that carry no signal when comparing report titles or bodies. Includes
# the genre vocabulary every report uses ("sighting", "encounter").
STOP_WORDS: FrozenSet[str] = frozenset({
    'a', 'an', 'the', 'in', 'on', 'at', 'to', 'of', 'and', 'or', 'but',
    'is', 'was', 'were', 'are', 'be', 'been', 'being',
    'my', 'i', 'me', 'we', 'our', 'you', 'your',
    'this', 'that', 'these', 'those', 'it', 'its',
    'with', 'from', 'for', 'by', 'about', 'into',
    'just', 'very', 'really', 'so', 'had', 'have', 'has',
    'report', 'sighting', 'encounter', 'experience', 'witnessed',
})

_NON_ALNUM = re.compile(r'[^a-z0-9\s]')
_WHITESPACE = re.compile(r'\s+')
_SENTENCE_SPLIT = re.compile(r'[.!?]+')
_PARAGRAPH_SPLIT = re.compile(r'\n\s*\n')


def normalize_text(text: Optional[str]) -> str:
    """Lowercase, replace punctuation with spaces and collapse whitespace."""
    if not text:
        return ""
    text = _NON_ALNUM.sub(' ', text.lower())
    return _WHITESPACE.sub(' ', text).strip()


def tokenize(text: Optional[str], stop_words: FrozenSet[str] = STOP_WORDS) -> Set[str]:
    """Tokenize into a set of words, dropping stop words and words of 2 chars or fewer."""
    return {
        word for word in normalize_text(text).split()
        if len(word) > 2 and word not in stop_words
    }


def words(text: Optional[str]) -> List[str]:
    """Whitespace-split words of the raw text."""
    if not text:
        return []
    return text.split()


def word_count(text: Optional[str]) -> int:
    return len(words(text))


def split_sentences(text: Optional[str], min_chars: int = 10) -> List[str]:
    """Sentences split on terminal punctuation, ignoring fragments of min_chars or fewer."""
    if not text:
        return []
    return [s.strip() for s in _SENTENCE_SPLIT.split(text) if len(s.strip()) > min_chars]


def split_paragraphs(text: Optional[str], min_chars: int = 30) -> List[str]:
    """Blank-line separated paragraphs longer than min_chars."""
    if not text:
        return []
    return [p.strip() for p in _PARAGRAPH_SPLIT.split(text) if len(p.strip()) > min_chars]
