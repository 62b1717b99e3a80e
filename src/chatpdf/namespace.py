"""File key → vector-index namespace."""

from __future__ import annotations

import hashlib


def derive_namespace(file_key: str) -> str:
    """Return *file_key* with every non-ASCII character removed.

    ``"uploads/café.pdf"`` becomes ``"uploads/caf.pdf"``.  A key with no
    ASCII content at all maps to the MD5 digest of the key instead of the
    empty (shared) namespace.
    """
    namespace = file_key.encode("ascii", errors="ignore").decode("ascii")
    if not namespace:
        return hashlib.md5(file_key.encode("utf-8", errors="surrogatepass")).hexdigest()
    return namespace
