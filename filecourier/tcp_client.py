"""Client that downloads one file over TCP and checks its MD5 digest."""

import ipaddress
import os
import socket
import sys
import time
from dataclasses import dataclass
from pathlib import Path, PurePath

from filecourier.md5hash import DIGEST_SIZE, verify_md5

BUFFER_SIZE = 4096
DIRECTORY = "Recebidos"
HASH_FILENAME = "hashRecebido.txt"
SAVE_PREFIX = "recebido_"


@dataclass(frozen=True)
class DownloadResult:
    """Outcome of one download."""

    save_path: Path
    hash_path: Path
    total_bytes: int
    elapsed_ns: int
    verified: bool


def build_paths(filename, directory=DIRECTORY):
    """Return the local paths for the received file and its digest."""
    base = PurePath(filename).name
    directory = Path(directory)
    return directory / f"{SAVE_PREFIX}{base}", directory / HASH_FILENAME


def ensure_directory(directory=DIRECTORY):
    """Create *directory* with owner-only permissions unless it exists."""
    path = Path(directory)
    try:
        path.mkdir(mode=0o700)
    except FileExistsError:
        pass
    return path


def speed_report(total_bytes, elapsed_ns):
    """Describe the transfer speed and the elapsed time."""
    seconds = elapsed_ns / 1.0e9
    millis = abs(elapsed_ns) // 1_000_000
    if elapsed_ns < 0:
        millis = -millis
    if elapsed_ns > 0 and total_bytes > 0:
        kbps = total_bytes / 1024.0 / seconds
        mbps = total_bytes / (1024.0 * 1024.0) / seconds
        first = f"Velocidade de download: {kbps:.2f} KB/s ({mbps:.2f} MB/s)"
    else:
        first = "Impossível calcular a velocidade."
    return f"{first}\nTempo total: {elapsed_ns} ns ({millis} ms, {seconds:.2f}s)"


def _receive_hash(sock, hash_path):
    received = bytearray()
    with open(hash_path, "wb") as stream:
        try:
            while len(received) < DIGEST_SIZE:
                chunk = sock.recv(DIGEST_SIZE - len(received))
                if not chunk:
                    raise ConnectionError("Erro ao receber hash: conexão encerrada")
                received += chunk
        except OSError:
            stream.close()
            os.remove(hash_path)
            raise
        stream.write(received)
    return bytes(received)


def _receive_file(sock, save_path):
    total = 0
    with open(save_path, "wb") as stream:
        try:
            for chunk in iter(lambda: sock.recv(BUFFER_SIZE), b""):
                stream.write(chunk)
                total += len(chunk)
        except OSError:
            stream.close()
            os.remove(save_path)
            raise
    return total


def fetch(host, port, filename, directory=DIRECTORY):
    """Request *filename* from the server and store it under *directory*.

    Raises ValueError for a host that is not an IPv4 address and OSError
    (ConnectionError included) when the transfer fails.
    """
    try:
        ipaddress.IPv4Address(host)
    except ValueError:
        raise ValueError(f"Endereço IP inválido: {host}") from None

    directory = ensure_directory(directory)
    save_path, hash_path = build_paths(filename, directory)

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.connect((host, port))
        start = time.monotonic_ns()
        sock.sendall(os.fsencode(filename))
        _receive_hash(sock, hash_path)
        total = _receive_file(sock, save_path)
        elapsed = time.monotonic_ns() - start

    return DownloadResult(
        save_path=save_path,
        hash_path=hash_path,
        total_bytes=total,
        elapsed_ns=elapsed,
        verified=verify_md5(hash_path, save_path),
    )


def main(argv=None):
    """Command entry point: tcp_client <IP_SERVIDOR> <PORTA> <NOME_ARQUIVO>."""
    args = sys.argv[1:] if argv is None else list(argv)
    usage = "Uso: tcp_client <IP_SERVIDOR> <PORTA> <NOME_ARQUIVO>"
    if len(args) != 3:
        print(usage, file=sys.stderr)
        return 1
    host, port_text, filename = args
    try:
        port = int(port_text)
    except ValueError:
        print(usage, file=sys.stderr)
        return 1

    try:
        result = fetch(host, port, filename)
    except (OSError, ValueError) as exc:
        print(f"Erro: {exc}", file=sys.stderr)
        return 1

    print(f"Conectado ao servidor {host}:{port}")
    print(f"Solicitação do arquivo '{filename}' enviada.")
    print(f"Hash MD5 recebido e salvo em '{result.hash_path}'.")
    print(
        f"Arquivo '{result.save_path}' recebido com sucesso "
        f"({result.total_bytes} bytes)."
    )
    print(speed_report(result.total_bytes, result.elapsed_ns))
    if result.verified:
        print("Hash MD5 conferido: o arquivo está correto.\n")
    else:
        print("Hash MD5 conferido: o arquivo está corrompido.\n")
    return 0