"""Hash utilities for Kit."""

import hashlib
import string

HASH_LENGTH = 40
SHARD_PREFIX_LENGTH = 2

_HEX_DIGITS = frozenset(string.hexdigits.lower())


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def hash_file(filepath: str) -> str:
    """
    Compute SHA-1 hash of file.
    
    Args:
        filepath: Path to file
        
    Returns:
        40-character hex string
    """
    with open(filepath, 'rb') as f:
        return hash_object(f.read())


def is_valid_key(key: str) -> bool:
    """
    Check whether a string can address the object store.
    
    A key must be at least as long as the shard prefix and contain only
    lowercase hex digits.
    """
    if not isinstance(key, str) or len(key) < SHARD_PREFIX_LENGTH:
        return False
    return all(c in _HEX_DIGITS for c in key)
