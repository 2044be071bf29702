"""Rejection filter for content that is not a first-hand experience report.

Cheap, text-only classification run before any scoring. Pattern banks are
ordered lists of compiled regexes grouped into rules; rules are evaluated in
priority order and the first hit wins:

1. **Removed placeholder** -- ``[removed]`` / ``[deleted]`` bodies, always.
2. **Meta post** -- posts soliciting stories ("share your scariest ghost
   story"), checked against title and body regardless of length.
3. **Too short** -- bodies under ``min_length`` characters.
4. **Non-experience** -- art, merchandise, media, memes, cosplay, news.
5. **Fiction** -- explicit fiction markers (nosleep, "part 2", fanfic).
6. **Low effort** -- title markers (short, all caps, "???", "aaaaa",
   question-only), applied only when the body is shorter than
   ``low_effort_body_threshold``.
7. **Spam URL** -- merch/tip-jar/shortener hosts in the body.

A rejection is a result with a human-readable reason, not an exception.
Unmatched input passes.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from .thresholds import (
    MIN_BODY_LENGTH,
    LOW_EFFORT_BODY_THRESHOLD,
    OBVIOUS_LOW_QUALITY_MIN_BODY,
    OBVIOUS_LOW_QUALITY_MIN_ALNUM_RATIO,
)

logger = logging.getLogger(__name__)


class RejectionCategory(str, Enum):
    """Which rule rejected a report."""
    REMOVED = "removed"
    META_POST = "meta_post"
    TOO_SHORT = "too_short"
    NON_EXPERIENCE = "non_experience"
    FICTION = "fiction"
    LOW_EFFORT = "low_effort"
    SPAM_URL = "spam_url"


def _compile(*patterns: str, flags: int = re.IGNORECASE) -> Tuple[re.Pattern, ...]:
    return tuple(re.compile(p, flags) for p in patterns)


# Posts that ask for stories rather than share one
META_POST_PATTERNS = _compile(
    # Asking for experiences
    r"\b(share your|tell me about|tell us about|what's your|what are your)\b",
    r"\b(looking for|searching for|collecting) (stories|experiences|accounts)\b",
    r"\b(anyone have|does anyone have|has anyone had|who has had)\b",
    r"\b(anyone else|has anyone else|did anyone else)\b",
    # Research/media requests
    r"\b(i'm (making|creating|writing|working on)|for my (book|podcast|channel|video|documentary|research|project|zine))\b",
    r"\b(gathering|collecting|compiling) (stories|experiences|data)\b",
    # Challenges/contests
    r"\b(challenge|contest|giveaway)\b",
    # Questions seeking multiple responses
    r"\bwhat (paranormal|supernatural|strange|weird|creepy) (experience|thing|event)s? (have you|did you)\b",
    # Discussion prompts
    r"\b(discussion|megathread|weekly thread)\b",
)

# Art, merchandise, media and other non-experience content
NON_EXPERIENCE_PATTERNS = _compile(
    # Art and crafts
    r"\b(i (made|drew|painted|created|designed|crafted|stitched|knitted|crocheted))\b",
    r"\b(my (art|artwork|drawing|painting|sketch|illustration|design|craft|creation))\b",
    r"\b(cross[- ]?stitch|embroidery|crochet|knitting|quilting|woodworking|sculpture)\b",
    r"\b(fan ?art|oc|original character|commission)\b",
    r"\b(digital art|traditional art|pixel art|3d model)\b",
    # Merchandise and promotion
    r"\b(for sale|buy now|shop|store|etsy|redbubble|teepublic|amazon)\b",
    r"\b(merch|merchandise|t-shirt|shirt|poster|sticker|mug|print)\b",
    r"\b(link in (bio|comments|description)|check out my)\b",
    r"\b(free download|download free|pattern free)\b",
    # Media and entertainment
    r"\b(movie|film|show|series|episode|trailer|review|rating)\s+(about|of|for)",
    r"\b(game|video ?game|indie game|rpg|tabletop)\b",
    r"\b(podcast episode|new episode|latest episode)\b",
    r"\b(book release|new book|my novel|my book)\b",
    # Memes and jokes
    r"\b(meme|shitpost|joke|lol|lmao|rofl)\b",
    r"\b(wrong answers only|caption this)\b",
    # Tattoos and cosplay
    r"\b(my (new )?tattoo|got (a |this )?tattoo|tattoo (design|idea|artist))\b",
    r"\b(cosplay|costume|dressed as|dressed up as)\b",
    # News and articles
    r"\b(according to|scientists|researchers found|study shows|report says)\b",
)

# Stories that say they are fiction
FICTION_PATTERNS = _compile(
    r"\b(creative writing|fiction|short story|writing prompt)\b",
    r"\b(inspired by|based on the game|fan fiction|fanfic)\b",
    r"\b(in this movie|in the show|in the book|in the game)\b",
    r"\b(nosleep|creepypasta|let me tell you a story)\b",
    r"\b(part \d+|chapter \d+|continued from)\b",
    r"\b(trigger warning.*fiction|this is fictional|not a true story)\b",
)

# Low-effort title markers. Case-sensitive: the all-caps check depends on it.
LOW_EFFORT_PATTERNS = (
    re.compile(r"^.{0,50}$"),            # very short
    re.compile(r"^[A-Z\s!?.]{20,}$"),    # all caps
    re.compile(r"[!?]{3,}"),             # excessive punctuation
    re.compile(r"(.)\1{4,}"),            # repeated characters
    re.compile(r"^(help|what|why|how|does|is|can|should)\s", re.IGNORECASE),  # question only
)

SPAM_URL_PATTERNS = _compile(
    r"etsy\.com",
    r"redbubble\.com",
    r"teepublic\.com",
    r"society6\.com",
    r"zazzle\.com",
    r"spreadshirt\.com",
    r"cafepress\.com",
    r"teespring\.com",
    r"printful\.com",
    r"patreon\.com",
    r"ko-fi\.com",
    r"buymeacoffee\.com",
    r"gumroad\.com",
    r"linktr\.ee",
    r"bit\.ly",
    r"tinyurl\.com",
    r"onlyfans\.com",
)

REMOVED_PLACEHOLDERS = frozenset({"[removed]", "[deleted]"})

_REPEATED_BLOCK = re.compile(r"(.{10,})\1{2,}")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


@dataclass
class FilterOptions:
    """Rule toggles and length limits for the rejection filter."""
    check_meta: bool = True
    check_fiction: bool = True
    check_low_effort: bool = True
    check_spam: bool = True
    min_length: int = MIN_BODY_LENGTH
    low_effort_body_threshold: int = LOW_EFFORT_BODY_THRESHOLD


DEFAULT_OPTIONS = FilterOptions()


@dataclass(frozen=True)
class FilterResult:
    """Pass, or reject with a reason and the rule that fired."""
    passed: bool
    reason: Optional[str] = None
    rule: Optional[RejectionCategory] = None

    @classmethod
    def accept(cls) -> "FilterResult":
        return cls(passed=True)

    @classmethod
    def reject(cls, rule: RejectionCategory, reason: str) -> "FilterResult":
        return cls(passed=False, reason=reason, rule=rule)


def _first_match(patterns: Sequence[re.Pattern], text: str) -> Optional[re.Pattern]:
    for pattern in patterns:
        if pattern.search(text):
            return pattern
    return None


def _describe(pattern: re.Pattern) -> str:
    return f"{pattern.pattern[:30]}..."


class RejectionFilter:
    """Priority-ordered pattern banks deciding whether a post is an experience report."""

    def __init__(self, options: Optional[FilterOptions] = None):
        self.options = options or DEFAULT_OPTIONS

    def classify(self, title: Optional[str], body: Optional[str]) -> FilterResult:
        """
        Classify a post by its title and body.

        Args:
            title: Post title (may be empty)
            body: Post body / description (may be empty)

        Returns:
            FilterResult with passed=True, or passed=False plus reason and rule
        """
        opts = self.options
        title = title or ""
        body = body or ""
        combined = f"{title} {body}"

        if body.strip().lower() in REMOVED_PLACEHOLDERS:
            return FilterResult.reject(RejectionCategory.REMOVED, "Content was deleted or removed")

        if opts.check_meta:
            hit = _first_match(META_POST_PATTERNS, combined)
            if hit:
                return FilterResult.reject(RejectionCategory.META_POST, f"Meta post pattern: {_describe(hit)}")

        if len(body) < opts.min_length:
            return FilterResult.reject(
                RejectionCategory.TOO_SHORT,
                f"Content too short ({len(body)} < {opts.min_length} chars)",
            )

        hit = _first_match(NON_EXPERIENCE_PATTERNS, combined)
        if hit:
            return FilterResult.reject(RejectionCategory.NON_EXPERIENCE, f"Non-experience content: {_describe(hit)}")

        if opts.check_fiction:
            hit = _first_match(FICTION_PATTERNS, combined)
            if hit:
                return FilterResult.reject(RejectionCategory.FICTION, f"Fiction marker: {_describe(hit)}")

        if opts.check_low_effort and len(body) < opts.low_effort_body_threshold:
            hit = _first_match(LOW_EFFORT_PATTERNS, title)
            if hit:
                return FilterResult.reject(RejectionCategory.LOW_EFFORT, f"Low effort content: {_describe(hit)}")

        if opts.check_spam and _first_match(SPAM_URL_PATTERNS, body):
            return FilterResult.reject(RejectionCategory.SPAM_URL, "Spam URL detected")

        return FilterResult.accept()


def is_obviously_low_quality(title: Optional[str], body: Optional[str]) -> bool:
    """Quick early-rejection check, cheaper than the full filter."""
    title = title or ""
    body = body or ""

    if len(body) < OBVIOUS_LOW_QUALITY_MIN_BODY:
        return True

    # All caps
    if len(title) > 10 and title == title.upper() and title != title.lower():
        return True

    # Mostly punctuation or symbols
    alnum = _NON_ALNUM.sub("", body)
    if len(alnum) < len(body) * OBVIOUS_LOW_QUALITY_MIN_ALNUM_RATIO:
        return True

    # Repetitive content
    if _REPEATED_BLOCK.search(body):
        return True

    return False


_default_filter: Optional[RejectionFilter] = None


def get_rejection_filter() -> RejectionFilter:
    """Get the shared filter instance with default options."""
    global _default_filter
    if _default_filter is None:
        _default_filter = RejectionFilter()
    return _default_filter


def classify(title: Optional[str], body: Optional[str], options: Optional[FilterOptions] = None) -> FilterResult:
    """Classify a post with the default filter, or with the given options."""
    flt = RejectionFilter(options) if options is not None else get_rejection_filter()
    result = flt.classify(title, body)
    if not result.passed:
        logger.debug("Rejected %r: %s", (title or "")[:60], result.reason)
    return result
