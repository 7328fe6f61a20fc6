"""
Tokenizer constants for RSVP text processing.

This module contains all the constants used by the tokenization engine
including speed bounds, pacing multipliers, punctuation sets and the
abbreviation lists used for sentence segmentation.
"""

# Tokenizer version - increment when logic changes
TOKENIZER_VERSION = "2.0.0"

# Languages with abbreviation lists
SUPPORTED_LANGUAGES = {"en", "de"}

# Maximum input size: ~10 million characters
MAX_INPUT_SIZE = 10_000_000

# -----------------------------------------------------------------------------
# Reading Speed
# -----------------------------------------------------------------------------

WPM_MIN = 200
WPM_MAX = 1000
WPM_DEFAULT = 400

MS_PER_MINUTE = 60_000

# -----------------------------------------------------------------------------
# Focal Point (ORP) and Hyphenation
# -----------------------------------------------------------------------------

ORP_OFFSET_DEFAULT = 0.35

# Words longer than this (punctuation excluded) are split into fragments
MAX_CHUNK_LENGTH = 13

# Preferred fragment size when grouping syllables
TARGET_CHUNK_SIZE = 8

CONTINUATION_MARK = "-"

VOWELS = frozenset("aeiouyAEIOUY\u00e4\u00f6\u00fc\u00c4\u00d6\u00dc")  # incl. ä ö ü

# Trailing punctuation ignored when measuring a word: . , ! ? ; : ' " ) } ] >
TRAILING_PUNCTUATION = ".,!?;:'\")}]>"

# -----------------------------------------------------------------------------
# Pacing Multipliers
# -----------------------------------------------------------------------------

SHORT_WORD_THRESHOLD = 4    # fewer letters than this is a short word
LONG_WORD_THRESHOLD = 12    # more letters than this is a long word

SHORT_WORD_MULTIPLIER = 0.8
NORMAL_WORD_MULTIPLIER = 1.0
LONG_WORD_MULTIPLIER = 1.4

# Clause-breaking punctuation: micro-pause
CLAUSE_PAUSE_PUNCTUATION = {",", ";", ":"}
CLAUSE_PAUSE_MULTIPLIER = 2.0

# Sentence-ending punctuation: cognitive wrap-up pause
SENTENCE_END_PUNCTUATION = {".", "!", "?"}
SENTENCE_END_MULTIPLIER = 3.0

# -----------------------------------------------------------------------------
# Sentence Segmentation
# -----------------------------------------------------------------------------

# Sentence-ending punctuation (ASCII ellipsis "..." is covered via '.')
SENTENCE_ENDERS = {".", "!", "?", "\u2026"}  # \u2026 = …

ELLIPSIS_STRINGS = {"...", "\u2026"}

# Closing quotes and brackets that may follow terminal punctuation
TRAILING_CLOSERS = {
    '"', "'", ")", "]", "}",
    "\u201d",  # right double quotation mark
    "\u2019",  # right single quotation mark
    "\u00bb",  # right-pointing double angle quotation mark
    "\u00ab",  # left-pointing double angle quotation mark (closing in German)
    "\u203a",  # single right-pointing angle quotation mark
    "\u201c",  # left double quotation mark (closing in German)
}

# Common abbreviations that don't end sentences (English)
# Stored lowercase without the trailing period
ENGLISH_ABBREVIATIONS = {
    # Titles
    "mr", "mrs", "ms", "dr", "prof", "sr", "jr",
    # Common
    "vs", "etc", "inc", "ltd", "dept", "vol", "rev",
    # Military/titles
    "gen", "col", "lt", "sgt", "capt", "cmdr",
    # Months
    "jan", "feb", "mar", "apr", "jun", "jul", "aug", "sep", "oct", "nov", "dec",
    # Addresses
    "st", "ave", "blvd",
    # Latin abbreviations
    "e.g", "i.e", "cf", "approx", "fig",
}

GERMAN_ABBREVIATIONS = {
    "hr", "fr", "bzw", "usw", "vgl", "ca", "z.b", "u.a", "d.h", "s.o", "s.u",
    "nr", "str", "tel", "inkl", "exkl", "ggf", "evtl", "bzgl", "okt", "dez",
}

# German includes English abbreviations for mixed-language text
ABBREVIATIONS = {
    "en": ENGLISH_ABBREVIATIONS,
    "de": ENGLISH_ABBREVIATIONS | GERMAN_ABBREVIATIONS,
}

# -----------------------------------------------------------------------------
# Playback
# -----------------------------------------------------------------------------

# Inter-tick gaps above this are logged as frame drops (10 fps or worse)
FRAME_DROP_THRESHOLD_MS = 100.0

# Default real-time tick interval (~60 Hz display refresh)
DEFAULT_TICK_INTERVAL_MS = 1000.0 / 60.0
