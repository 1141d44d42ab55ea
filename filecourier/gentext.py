"""Generator of files filled with random printable ASCII characters."""

import random
import sys
from pathlib import Path

FILE_SIZE = 1_000_000_000
PRINTABLE = "".join(chr(code) for code in range(32, 127))
_CHUNK = 1 << 16


def generate_file(size=FILE_SIZE, directory=".", rng=None):
    """Write *size* random printable characters to ``<size>b.txt``.

    Returns the path of the file. *rng* is a random.Random; a fresh one
    seeded from the system is used when omitted.
    """
    if size < 0:
        raise ValueError(f"size must not be negative: {size}")
    rng = random.Random() if rng is None else rng
    path = Path(directory) / f"{size}b.txt"
    with open(path, "w", encoding="ascii", newline="") as stream:
        remaining = size
        while remaining:
            count = min(_CHUNK, remaining)
            stream.write("".join(rng.choices(PRINTABLE, k=count)))
            remaining -= count
    return path


def main(argv=None):
    """Command entry point: gentext [TAMANHO]."""
    args = sys.argv[1:] if argv is None else list(argv)
    usage = "Uso: gentext [TAMANHO]"
    if len(args) > 1:
        print(usage, file=sys.stderr)
        return 1
    try:
        size = int(args[0]) if args else FILE_SIZE
        path = generate_file(size)
    except ValueError:
        print(usage, file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Erro ao criar arquivo: {exc}", file=sys.stderr)
        return 1
    print(f"Arquivo '{path.name}' criado com {size} bytes")
    return 0