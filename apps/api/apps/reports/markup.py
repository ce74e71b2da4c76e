"""
Rich-text notes to plain text.
"""
import html
import re

_LINE_BREAK_RE = re.compile(r'<br\s*/?>', re.IGNORECASE)
_BLOCK_END_RE = re.compile(r'</(p|li|div|h[1-6]|blockquote|tr)\s*>', re.IGNORECASE)
_TAG_RE = re.compile(r'<[^>]+>')
_EXTRA_NEWLINES_RE = re.compile(r'\n{3,}')


def strip_markup(value):
    """
    Flatten editor HTML into wrapped-text-ready plain text.

    Line breaks and closing block tags become newlines, other tags are
    dropped, entities are unescaped and non-breaking spaces become spaces.
    """
    if not value:
        return ''
    text = _LINE_BREAK_RE.sub('\n', value)
    text = _BLOCK_END_RE.sub('\n', text)
    text = _TAG_RE.sub('', text)
    text = html.unescape(text).replace('\xa0', ' ')
    text = _EXTRA_NEWLINES_RE.sub('\n\n', text)
    return text.strip()
