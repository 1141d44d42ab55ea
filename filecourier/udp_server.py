"""UDP server that answers a file name with its MD5 digest and numbered packets."""

import os
import select
import socket
import sys

from filecourier.md5hash import compute_md5
from filecourier.packet import PAYLOAD_SIZE, Packet

MAX_REQUEST = 256
POLL_INTERVAL = 0.2


def send_file(sock, address, filename):
    """Send the digest, the data packets and the end packet to *address*.

    Returns the number of data packets sent.
    """
    with open(filename, "rb") as stream:
        sock.sendto(compute_md5(filename), address)
        number = 0
        for chunk in iter(lambda: stream.read(PAYLOAD_SIZE), b""):
            sock.sendto(Packet(number, chunk).encode(), address)
            number += 1
        sock.sendto(Packet(number).encode(), address)
    return number


class UdpFileServer:
    """Bound datagram socket that answers one request at a time."""

    def __init__(self, port, host=""):
        self.socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self.socket.bind((host, port))
        except OSError:
            self.socket.close()
            raise
        self._closed = False

    @property
    def address(self):
        """The (host, port) the server is bound to."""
        return self.socket.getsockname()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def serve_forever(self):
        """Answer requests until the server is closed."""
        while not self._closed:
            try:
                readable, _, _ = select.select([self.socket], [], [], POLL_INTERVAL)
            except (OSError, ValueError):
                if self._closed:
                    break
                raise
            if readable and not self._closed:
                self.handle_request()

    def handle_request(self):
        """Read one request and send the file; return True if it was sent."""
        try:
            request, address = self.socket.recvfrom(MAX_REQUEST)
        except OSError as exc:
            print(f"Erro ao receber nome do arquivo: {exc}", file=sys.stderr)
            return False
        filename = os.fsdecode(request.split(b"\0", 1)[0])
        print(f"Cliente solicitou: {filename}")
        try:
            count = send_file(self.socket, address, filename)
        except FileNotFoundError as exc:
            print(f"Arquivo não encontrado: {exc}", file=sys.stderr)
            return False
        except (OSError, ValueError) as exc:
            print(f"Erro ao enviar arquivo: {exc}", file=sys.stderr)
            return False
        print(f"Arquivo {filename} enviado com sucesso ({count} pacotes).")
        return True

    def close(self):
        """Stop serving and release the socket."""
        self._closed = True
        self.socket.close()


def main(argv=None):
    """Command entry point: udp_server <PORTA>."""
    args = sys.argv[1:] if argv is None else list(argv)
    usage = "Uso: udp_server <PORTA>"
    if len(args) != 1:
        print(usage, file=sys.stderr)
        return 1
    try:
        port = int(args[0])
    except ValueError:
        print(usage, file=sys.stderr)
        return 1

    try:
        server = UdpFileServer(port)
    except OSError as exc:
        print(f"Erro no bind: {exc}", file=sys.stderr)
        return 1

    print(f"Servidor UDP escutando na porta {port}...")
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0