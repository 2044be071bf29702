"""
Lightweight phenomenon tagging for reports that pass the intake filter.

Matches a report's text against each known phenomenon's name and aliases
(word-boundary, case-insensitive). Confidence depends on where the hit is:
title 0.85, summary 0.75, body 0.6, plus 0.1 when the report's category lines
up with the phenomenon's category, capped at 0.95.

The phenomenon list comes from a caller-supplied loader (normally a database
query) and is held in a ``PatternCache`` with a TTL. The cache is an explicit
object owned by the caller: tests get a fresh one, and admin edits can call
``invalidate()`` instead of waiting out the TTL.
"""

import logging
import re
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.quality import PhenomenonMatch

logger = logging.getLogger(__name__)

PATTERN_CACHE_TTL = 300.0  # seconds

TITLE_CONFIDENCE = 0.85
SUMMARY_CONFIDENCE = 0.75
BODY_CONFIDENCE = 0.6
CATEGORY_BONUS = 0.1
MAX_CONFIDENCE = 0.95

# Phenomenon category -> report category keywords that line up with it
CATEGORY_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "cryptids": ("cryptid", "creature", "monster"),
    "ufos_aliens": ("ufo", "uap", "alien", "extraterrestrial"),
    "ghosts_hauntings": ("ghost", "haunting", "spirit", "paranormal"),
    "psychic_phenomena": ("psychic", "esp", "telepathy", "paranormal"),
    "psychological_experiences": ("unexplained", "strange", "mysterious"),
}


@dataclass(frozen=True)
class Phenomenon:
    """A known phenomenon and the names it goes by."""
    id: str
    name: str
    category: str
    aliases: Tuple[str, ...] = ()

    @property
    def names(self) -> List[str]:
        return [n.strip().lower() for n in (self.name, *self.aliases) if n and n.strip()]


@dataclass
class _CompiledPhenomenon:
    phenomenon: Phenomenon
    patterns: List[Tuple[str, re.Pattern]] = field(default_factory=list)


def _compile_names(names: List[str]) -> List[Tuple[str, re.Pattern]]:
    return [(n, re.compile(r"\b" + re.escape(n) + r"\b", re.IGNORECASE)) for n in names]


class PatternCache:
    """
    TTL cache around a phenomenon loader.

    Args:
        loader: Zero-argument callable returning the active phenomena
        ttl_seconds: How long a loaded list stays fresh
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        loader: Callable[[], Iterable[Phenomenon]],
        ttl_seconds: float = PATTERN_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._loader = loader
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Optional[List[_CompiledPhenomenon]] = None
        self._loaded_at = 0.0

    def get(self) -> List[_CompiledPhenomenon]:
        """Cached phenomena, reloading when missing or expired."""
        if self._entries is not None and self._clock() - self._loaded_at < self.ttl_seconds:
            return self._entries

        phenomena = list(self._loader())
        self._entries = [_CompiledPhenomenon(p, _compile_names(p.names)) for p in phenomena]
        self._loaded_at = self._clock()
        logger.debug("Loaded %d phenomenon patterns", len(self._entries))
        return self._entries

    def invalidate(self) -> None:
        """Drop the cached list; the next get() reloads."""
        self._entries = None
        logger.debug("Phenomenon pattern cache invalidated")


def is_category_match(report_category: Optional[str], phenomenon_category: str) -> bool:
    """True when the report's category keywords line up with the phenomenon's category."""
    report_category = (report_category or "").lower()
    if not report_category:
        return False
    keywords = CATEGORY_KEYWORDS.get(phenomenon_category, ())
    return any(k in report_category for k in keywords) or phenomenon_category in report_category


class PhenomenonMatcher:
    """Tags report text with known phenomena."""

    def __init__(self, cache: PatternCache):
        self.cache = cache

    def identify(
        self,
        title: Optional[str],
        summary: Optional[str],
        description: Optional[str],
        category: Optional[str] = None,
    ) -> List[PhenomenonMatch]:
        """
        Phenomena mentioned in the report, at most one match per phenomenon.

        Returns:
            Matches sorted by confidence, highest first
        """
        title = title or ""
        summary = summary or ""
        search_text = " ".join((title, summary, description or ""))

        matches = []
        for entry in self.cache.get():
            for name, pattern in entry.patterns:
                if not pattern.search(search_text):
                    continue
                if pattern.search(title):
                    confidence = TITLE_CONFIDENCE
                elif pattern.search(summary):
                    confidence = SUMMARY_CONFIDENCE
                else:
                    confidence = BODY_CONFIDENCE
                if is_category_match(category, entry.phenomenon.category):
                    confidence = min(confidence + CATEGORY_BONUS, MAX_CONFIDENCE)
                matches.append(PhenomenonMatch(
                    phenomenon_id=entry.phenomenon.id,
                    confidence=round(confidence, 2),
                    matched=name,
                ))
                break

        matches.sort(key=lambda m: m.confidence, reverse=True)
        return matches


def phenomena_from_rows(rows: Sequence[dict]) -> List[Phenomenon]:
    """Build Phenomenon objects from database rows (id, name, aliases, category)."""
    result = []
    for row in rows:
        if not row.get("name"):
            continue
        result.append(Phenomenon(
            id=str(row.get("id")),
            name=row["name"],
            category=row.get("category") or "",
            aliases=tuple(a for a in (row.get("aliases") or ()) if a),
        ))
    return result
