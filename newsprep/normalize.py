# newsprep/normalize.py
"""Raw article text -> lowercase letters, apostrophes and single spaces.

Steps run in a fixed order (later patterns assume the earlier ones ran):

    a) rejoin split contractions ("don t", "it’s" scraped as "it s")
    b) lowercase
    c) real-news source only: drop the "CITY (Reuters) - " dateline
    d) drop links, both http/www and pic.twitter.com short links
    e) drop @mentions
    f) drop #hashtags
    g) everything but a-z and ' becomes a space

The result is whitespace-collapsed and run through the contraction table
once more, so a contraction split by markup removed in d)-g) is rejoined
and ``normalize`` is a fixed point on its own output.
"""

import re

FAKE = "fake"
REAL = "real"
SOURCES = (FAKE, REAL)

# source whose rows carry an agency dateline before the story body
TAGLINE_SOURCE = REAL

CONTRACTIONS = {
    "ain t": "ain't",
    "aren t": "aren't",
    "can t": "can't",
    "couldn t": "couldn't",
    "didn t": "didn't",
    "doesn t": "doesn't",
    "don t": "don't",
    "hadn t": "hadn't",
    "hasn t": "hasn't",
    "haven t": "haven't",
    "isn t": "isn't",
    "mustn t": "mustn't",
    "needn t": "needn't",
    "shouldn t": "shouldn't",
    "wasn t": "wasn't",
    "weren t": "weren't",
    "won t": "won't",
    "wouldn t": "wouldn't",
    "i m": "i'm",
    "i ve": "i've",
    "i ll": "i'll",
    "i d": "i'd",
    "you re": "you're",
    "you ve": "you've",
    "you ll": "you'll",
    "we re": "we're",
    "we ve": "we've",
    "we ll": "we'll",
    "they re": "they're",
    "they ve": "they've",
    "they ll": "they'll",
    "he ll": "he'll",
    "he d": "he'd",
    "she ll": "she'll",
    "she d": "she'd",
    "it s": "it's",
    "that s": "that's",
    "there s": "there's",
    "what s": "what's",
    "who s": "who's",
    "let s": "let's",
}

# the gap between the two halves: whitespace or a typographic apostrophe
_SPLIT = r"(?:\s+|\s*[‘’ʼ`´]\s*)"


def _ascii_caseless(word):
    # re.IGNORECASE also matches "İ", "ı" and "ſ", which .lower() cannot map back to a key
    return "".join(f"[{c}{c.upper()}]" if c.isalpha() else re.escape(c) for c in word)


_CONTRACTION_RE = re.compile(
    r"\b(" + "|".join(
        _ascii_caseless(k.split(" ")[0]) + _SPLIT + _ascii_caseless(k.split(" ")[1])
        for k in sorted(CONTRACTIONS, key=len, reverse=True)
    ) + r")\b"
)
_GAP_RE = re.compile(_SPLIT)

TAGLINE_RE = re.compile(r"^.*?\(reuters\)\s*-?\s*", flags=re.DOTALL)
URL_RE = re.compile(r"(?:https?://|www\.)\S+")
MEDIA_LINK_RE = re.compile(r"pic\.twitter\.com/\S*")
MENTION_RE = re.compile(r"@\w+")
HASHTAG_RE = re.compile(r"#\w+")
NON_LETTER_RE = re.compile(r"[^a-z']")
WHITESPACE_RE = re.compile(r"\s+")


def _contraction(match):
    key = _GAP_RE.sub(" ", match.group(0)).lower()
    return CONTRACTIONS[key]


def repair_contractions(text):
    return _CONTRACTION_RE.sub(_contraction, text)


def strip_tagline(text):
    """Drop everything up through the first ``(reuters)`` marker, if any."""
    return TAGLINE_RE.sub("", text, count=1)


def collapse_whitespace(text):
    return WHITESPACE_RE.sub(" ", text).strip()


def normalize(raw_text, source_kind):
    if source_kind not in SOURCES:
        raise ValueError(f"Unknown source kind {source_kind!r}; expected one of {SOURCES}")
    if not isinstance(raw_text, str):
        return ""

    text = repair_contractions(raw_text)
    text = text.lower()
    if source_kind == TAGLINE_SOURCE:
        text = strip_tagline(text)
    text = URL_RE.sub(" ", text)
    text = MEDIA_LINK_RE.sub(" ", text)
    text = MENTION_RE.sub(" ", text)
    text = HASHTAG_RE.sub(" ", text)
    text = NON_LETTER_RE.sub(" ", text)
    return repair_contractions(collapse_whitespace(text))
