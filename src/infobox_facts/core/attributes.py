# ABOUTME: Normalization of infobox attribute names
# ABOUTME: Shared by the attribute parser and the schema pattern compiler so both agree on keys

import re

_IGNORED_IN_NAMES = re.compile(r"[_ \d]")


def normalize_attribute(name: str) -> str:
    """Normalize an infobox attribute name.

    Trims, lowercases and removes underscores, spaces and digits, so that
    "Date_of_Birth 2" and " dateofbirth " both become "dateofbirth".
    """
    return _IGNORED_IN_NAMES.sub("", name.strip().lower())
