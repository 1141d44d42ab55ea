"""MD5 digests of files, and storage and checking of those digests."""

import hashlib
import sys

DIGEST_SIZE = 16
CHUNK_SIZE = 4096


def compute_md5(path):
    """Return the 16-byte MD5 digest of the file at *path*.

    Raises OSError if the file cannot be read.
    """
    md5 = hashlib.md5(usedforsecurity=False)
    with open(path, "rb") as stream:
        for chunk in iter(lambda: stream.read(CHUNK_SIZE), b""):
            md5.update(chunk)
    return md5.digest()


def save_md5(path, digest):
    """Write the raw 16-byte *digest* to the file at *path*."""
    digest = bytes(digest)
    if len(digest) != DIGEST_SIZE:
        raise ValueError(
            f"an MD5 digest has {DIGEST_SIZE} bytes, got {len(digest)}"
        )
    with open(path, "wb") as stream:
        stream.write(digest)


def verify_md5(hash_path, file_path):
    """Tell whether the digest stored at *hash_path* matches *file_path*.

    A missing or unreadable hash file counts as a mismatch; an unreadable
    data file raises OSError.
    """
    computed = compute_md5(file_path)
    try:
        with open(hash_path, "rb") as stream:
            stored = stream.read(DIGEST_SIZE)
    except OSError as exc:
        print(f"Erro ao abrir o arquivo de hash: {exc}", file=sys.stderr)
        return False
    return stored == computed