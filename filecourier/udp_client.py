"""Client that downloads one file over UDP and reports losses and integrity."""

import ipaddress
import os
import socket
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from filecourier.md5hash import DIGEST_SIZE, verify_md5
from filecourier.packet import Packet
from filecourier.tcp_client import DIRECTORY, build_paths, ensure_directory, speed_report

BUFFER_SIZE = 4096
MAX_PACKETS = 100000
DEFAULT_TIMEOUT = 5.0


@dataclass(frozen=True)
class UdpDownloadResult:
    """Outcome of one UDP download.

    ``verified`` is None when packets were lost and integrity was not checked.
    """

    save_path: Path
    hash_path: Path
    expected: int
    received: int
    lost: int
    total_bytes: int
    elapsed_ns: int
    finished: bool
    verified: Optional[bool]


def receive_packets(sock):
    """Collect data packets until the end packet or a receive timeout.

    Returns ``(chunks, finished)``: a dict from packet number to data, the
    first copy of each number kept, and whether the end packet arrived.
    Numbers at or above MAX_PACKETS and malformed datagrams are ignored.
    """
    chunks = {}
    try:
        while True:
            datagram = sock.recv(BUFFER_SIZE)
            try:
                packet = Packet.decode(datagram)
            except ValueError:
                continue
            if packet.is_end():
                return chunks, True
            if packet.number >= MAX_PACKETS:
                continue
            chunks.setdefault(packet.number, packet.data)
    except TimeoutError:
        return chunks, False


def _receive_hash(sock, hash_path):
    received = bytearray()
    try:
        with open(hash_path, "wb") as stream:
            while len(received) < DIGEST_SIZE:
                chunk = sock.recv(DIGEST_SIZE - len(received))
                if not chunk:
                    raise ConnectionError("Erro ao receber hash: datagrama vazio")
                received += chunk
            stream.write(received)
    except OSError as exc:
        try:
            os.remove(hash_path)
        except FileNotFoundError:
            pass
        if isinstance(exc, ConnectionError):
            raise
        raise ConnectionError(f"Erro ao receber hash: {exc}") from exc
    return bytes(received)


def fetch(host, port, filename, directory=DIRECTORY, timeout=DEFAULT_TIMEOUT):
    """Request *filename* over UDP and store what arrives under *directory*.

    Raises ValueError for a host that is not an IPv4 address and
    ConnectionError when the digest does not arrive.
    """
    try:
        ipaddress.IPv4Address(host)
    except ValueError:
        raise ValueError(f"Endereço IP inválido: {host}") from None

    directory = ensure_directory(directory)
    save_path, hash_path = build_paths(filename, directory)

    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.settimeout(timeout)
        start = time.monotonic_ns()
        sock.sendto(os.fsencode(filename), (host, port))
        _receive_hash(sock, hash_path)
        chunks, finished = receive_packets(sock)
        elapsed = time.monotonic_ns() - start

    with open(save_path, "wb") as stream:
        for number in sorted(chunks):
            stream.write(chunks[number])

    received = len(chunks)
    expected = max(chunks) + 1 if chunks else 0
    lost = expected - received
    return UdpDownloadResult(
        save_path=save_path,
        hash_path=hash_path,
        expected=expected,
        received=received,
        lost=lost,
        total_bytes=sum(len(data) for data in chunks.values()),
        elapsed_ns=elapsed,
        finished=finished,
        verified=verify_md5(hash_path, save_path) if lost == 0 else None,
    )


def main(argv=None):
    """Command entry point: udp_client <IP_SERVIDOR> <PORTA> <NOME_ARQUIVO>."""
    args = sys.argv[1:] if argv is None else list(argv)
    usage = "Uso: udp_client <IP_SERVIDOR> <PORTA> <NOME_ARQUIVO>"
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

    print(f"Solicitação do arquivo '{filename}' enviada.")
    print(f"Hash MD5 recebido e salvo em '{result.hash_path}'.")
    if result.finished:
        print("Pacote final recebido.")
    else:
        print("Timeout atingido! Pacote final foi perdido!")
    print(
        f"Total esperado: {result.expected} pacotes | "
        f"Total recebidos: {result.received} | Total perdidos: {result.lost} "
    )
    print(speed_report(result.total_bytes, result.elapsed_ns))
    if result.verified is None:
        print("Integridade não verificada: houve perdas.\n")
    elif result.verified:
        print("Hash MD5 conferido: o arquivo está correto.\n")
    else:
        print("Hash MD5 conferido: o arquivo está corrompido.\n")
    return 0