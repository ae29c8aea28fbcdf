"""
Naming helpers: slugs, titles, natural ordering and image src resolution.
"""

import os
import re
import unicodedata
from typing import Dict, List, Set, Tuple, Union

DEFAULT_SLUG = 'photo'

_SLUG_RE = re.compile(r'[^a-z0-9]+')
_DIGITS_RE = re.compile(r'(\d+)')
_SEPARATOR_RE = re.compile(r'[-_]+')
_WHITESPACE_RE = re.compile(r'\s+')

PUBLIC_PREFIX = 'public/'
PUBLIC_MARKER = '/public/'


def slugify(text: str) -> str:
    """
    Lowercase text, collapse non-alphanumeric runs to single hyphens and
    trim hyphens from both ends. Falls back to DEFAULT_SLUG when nothing is left.
    """
    slug = _SLUG_RE.sub('-', text.lower()).strip('-')
    return slug or DEFAULT_SLUG


def title_case(text: str) -> str:
    """Turn a filename stem into a display title: 'my_cool-photo' -> 'My Cool Photo'."""
    words = _WHITESPACE_RE.sub(' ', _SEPARATOR_RE.sub(' ', text)).strip().split(' ')
    return ' '.join(word[:1].upper() + word[1:].lower() for word in words if word)


def _fold(text: str) -> str:
    """Case- and accent-insensitive form used for comparison."""
    decomposed = unicodedata.normalize('NFKD', text)
    return ''.join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def _natural_parts(text: str) -> List[Union[str, int]]:
    # re.split with a capture group alternates text and digits, so text always
    # sits at even indexes and numbers at odd ones; comparisons never mix types.
    parts: List[Union[str, int]] = []
    for index, token in enumerate(_DIGITS_RE.split(text)):
        parts.append(int(token) if index % 2 else token)
    return parts


NaturalKey = Tuple[List[Union[str, int]], List[Union[str, int]], str]


def natural_key(name: str) -> NaturalKey:
    """
    Sort key treating digit runs as numbers, ignoring case and accents.

    Stem and extension are compared separately, so 'sunset.jpg' sorts before
    'sunset2.jpg'. The raw name is the final tiebreak so ordering stays total.
    """
    stem, suffix = os.path.splitext(_fold(name))
    return _natural_parts(stem), _natural_parts(suffix), name


class SlugAllocator:
    """
    Hands out unique slugs within one run.

    The first file with a given base slug keeps it; the Nth one gets '-N'.
    A candidate already handed out (e.g. 'a-2' from both 'a.png' and
    'a-2.jpg') moves on to the next free suffix.
    """

    def __init__(self):
        self.counts: Dict[str, int] = {}
        self.taken: Set[str] = set()

    def allocate(self, stem: str) -> str:
        base = slugify(stem)
        seen = self.counts.get(base, 0) + 1
        slug = f"{base}-{seen}" if seen > 1 else base
        while slug in self.taken:
            seen += 1
            slug = f"{base}-{seen}"
        self.counts[base] = seen
        self.taken.add(slug)
        return slug


def to_web_path(file_path: str) -> str:
    """
    Rewrite a filesystem path to a site-root-relative URL path.

    'public/photography/images/a.jpg' -> '/photography/images/a.jpg'
    '/srv/site/public/images/a.jpg'   -> '/images/a.jpg'
    Paths without a public segment are returned unchanged.
    """
    normalized = file_path.replace('\\', '/')

    if normalized.startswith(PUBLIC_PREFIX):
        return '/' + normalized[len(PUBLIC_PREFIX):]

    marker_index = normalized.find(PUBLIC_MARKER)
    if marker_index >= 0:
        return normalized[marker_index + len('/public'):]

    return normalized


def resolve_src(output_path: str, output_name: str, base_url: str = '') -> str:
    """Remote URL when a base URL is configured, otherwise the local web path."""
    if base_url:
        return f"{base_url}/{output_name}"
    return to_web_path(output_path)
