"""Plain-text clean-up applied to extracted page text.

Page sources still contain the site generator's Liquid directives when the
feed is built (``{% include note.html content="..." %}``, ``{% highlight %}``
blocks and so on).  Those directives are noise for a search index, so the
text extracted from the DOM is passed through a small, ordered table of
regex rules that strips the known kinds.  This is not a Liquid parser:
directives that do not match a rule pass through unchanged.
"""

import re
from typing import List, Pattern, Tuple

# ASCII quotes plus the Unicode initial/final punctuation quotes (categories
# Pi and Pf) that smart-quote editors put around include arguments.
_QUOTE = (
    "[\"'"
    "«»‘’‛“”‟‹›"
    "⸂-⸅⸉⸊⸌⸍⸜⸝⸠⸡"
    "]"
)

# Callout includes whose ``content`` argument is page text worth keeping
CALLOUT_KINDS = ("deprecated", "important", "note", "query", "warning")

# Applied in order; each rule is (pattern, replacement)
SHORTCODE_RULES: List[Tuple[Pattern[str], str]] = [
    # Opening of a callout include, up to and including the argument's quote
    (
        re.compile(
            r"\{%\s*include\s*(?:" + "|".join(CALLOUT_KINDS) + r")\.html\s*content=\s*" + _QUOTE
        ),
        "",
    ),
    (re.compile(r"\{%\s*highlight\s*\w*"), ""),
    (re.compile(r"\{%\s*endhighlight"), ""),
    (re.compile(r"\{%\s*(?:raw|endraw)"), ""),
    # Closing delimiter, with the callout argument's closing quote if present
    (re.compile(_QUOTE + r"*\s*%\}"), ""),
]


def normalize_newlines(text: str) -> str:
    """Replace every carriage return and newline with a single space."""
    return text.replace("\r", " ").replace("\n", " ")


def _apply_rules(text: str) -> str:
    for pattern, replacement in SHORTCODE_RULES:
        text = pattern.sub(replacement, text)
    return text


def strip_shortcodes(text: str) -> str:
    """Remove known Liquid directive spans from *text*.

    The rule table is re-applied until the text stops changing, since
    removing one span can join the pieces of another.  Every rule removes at
    least one character per match, so this terminates, and running the
    function on its own output is a no-op.
    """
    while True:
        stripped = _apply_rules(text)
        if stripped == text:
            return stripped
        text = stripped


def clean_text(text: str) -> str:
    """Normalize newlines, then strip shortcodes."""
    return strip_shortcodes(normalize_newlines(text))
