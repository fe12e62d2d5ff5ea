"""Content hashing utilities.

Digests identify backed-up content in the file bucket. Speed matters more
than cryptographic strength here, so xxhash is used.
"""

from typing import Union

import xxhash


def content_digest(content: Union[str, bytes], encoding: str = "utf-8") -> str:
    """Compute the digest of in-memory content.

    Args:
        content: Text or bytes to hash
        encoding: Encoding applied to text content

    Returns:
        Hex digest (xxh64)
    """
    if isinstance(content, str):
        content = content.encode(encoding)
    return xxhash.xxh64(content).hexdigest()
