"""TCP server that answers a file name with the file's MD5 digest and contents."""

import os
import socket
import sys

from filecourier.md5hash import compute_md5

BUFFER_SIZE = 4096
MAX_REQUEST = 256
BACKLOG = 5


def send_file(conn, filename):
    """Send the whole file over *conn* and return the number of bytes sent."""
    total = 0
    with open(filename, "rb") as stream:
        for chunk in iter(lambda: stream.read(BUFFER_SIZE), b""):
            conn.sendall(chunk)
            total += len(chunk)
    return total


class TcpFileServer:
    """Listening socket that serves one client at a time."""

    def __init__(self, port, host=""):
        self.socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self.socket.bind((host, port))
            self.socket.listen(BACKLOG)
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
        """Accept and handle clients until the server is closed."""
        while not self._closed:
            try:
                conn, address = self.socket.accept()
            except OSError as exc:
                if self._closed:
                    break
                print(f"Erro no accept: {exc}", file=sys.stderr)
                continue
            print(f"Conexão aceita de {address[0]}:{address[1]}")
            self.handle_client(conn, address)

    def handle_client(self, conn, address):
        """Read a file name from *conn*, send its digest and contents, close."""
        with conn:
            try:
                request = conn.recv(MAX_REQUEST - 1)
            except OSError as exc:
                print(f"Erro ao receber nome do arquivo: {exc}", file=sys.stderr)
                return
            if not request:
                print("Erro ao receber nome do arquivo", file=sys.stderr)
                return
            filename = os.fsdecode(request.split(b"\0", 1)[0])
            print(f"Cliente solicitou o arquivo: {filename}")

            try:
                conn.sendall(compute_md5(filename))
            except (OSError, ValueError) as exc:
                print(f"Erro ao enviar hash: {exc}", file=sys.stderr)

            try:
                send_file(conn, filename)
            except (OSError, ValueError) as exc:
                print(f"Erro ao enviar arquivo: {exc}", file=sys.stderr)
            else:
                print(f"Arquivo '{filename}' enviado com sucesso.")
        print(f"Conexão com {address[0]}:{address[1]} encerrada.")

    def close(self):
        """Stop serving and release the listening socket."""
        self._closed = True
        try:
            self.socket.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self.socket.close()


def main(argv=None):
    """Command entry point: tcp_server <PORTA>."""
    args = sys.argv[1:] if argv is None else list(argv)
    usage = "Uso: tcp_server <PORTA>"
    if len(args) != 1:
        print(usage, file=sys.stderr)
        return 1
    try:
        port = int(args[0])
    except ValueError:
        print(usage, file=sys.stderr)
        return 1

    try:
        server = TcpFileServer(port)
    except OSError as exc:
        print(f"Erro no bind: {exc}", file=sys.stderr)
        return 1

    print(f"Servidor TCP escutando na porta {port}...")
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0