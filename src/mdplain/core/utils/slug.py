"""Output file names derived from document titles or paths"""

import re
import unicodedata


MAX_SLUG_LENGTH = 100
FALLBACK_SLUG = 'document'


def slugify(text: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Lowercase, accent-free, hyphen-separated slug safe for a file name.

    Falls back to 'document' when nothing usable is left.
    """
    folded = ''.join(c for c in unicodedata.normalize('NFD', text) if unicodedata.category(c) != 'Mn')
    slug = re.sub(r'[\s_]+', '-', folded.lower())
    slug = re.sub(r'[^\w-]', '', slug)
    slug = re.sub(r'-{2,}', '-', slug).strip('-')
    return slug[:max_length].rstrip('-') or FALLBACK_SLUG
