# filecourier

Send a file from a server to a client over TCP or UDP. The client then checks
the copy it received against the server's MD5 digest and reports how the
transfer went.

## How it works

The client sends the server a file name. The server answers with the 16-byte
MD5 digest of that file and then sends the file itself.

- **TCP**: the server sends the file as one stream and closes the connection
  when it has sent the whole file. The client reads until the connection
  closes.
- **UDP**: the server sends the digest in one datagram. It then sends the file
  in numbered packets of up to 1392 data bytes each, and ends with an empty
  packet. The client waits up to a timeout (5 seconds by default) for each
  datagram. It keeps the first copy of each packet number and writes the
  packets it received in number order. It counts as lost any number below
  the highest one that never arrived.

The client stores the received file in a `Recebidos` directory as
`recebido_<name>`, where `<name>` is the last part of the requested path. It
stores the digest there as `hashRecebido.txt`. You can choose another
directory when using the library. The directory is created with owner-only
permissions if it does not exist.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Command-line use

Start a server on a port. It listens on all interfaces. It opens whatever
path the client sends, relative to the server's working directory. It serves
one client or request at a time until it is interrupted.

```
filecourier-tcp-server 8080
filecourier-udp-server 8080
```

Fetch a file. The address must be an IPv4 address.

```
filecourier-tcp-client 127.0.0.1 8080 Arquivos/4000b.txt
filecourier-udp-client 127.0.0.1 8080 Arquivos/4000b.txt
```

The client prints, in Portuguese:

- the download speed and the elapsed time,
- for UDP, whether the end packet arrived, and the expected, received and lost
  packet counts,
- whether the MD5 digest matches.

Over UDP, the digest is only checked when no packet was lost.

To make a file of random printable ASCII characters to test with:

```
filecourier-gentext 500000
```

This writes `500000b.txt` in the current directory. With no argument it
writes 1,000,000,000 bytes.

Every command exits with status 1 and a message on standard error when its
arguments are wrong or the transfer fails.

## Library use

```python
from filecourier import tcp_client, udp_client
from filecourier.md5hash import compute_md5, save_md5, verify_md5

result = tcp_client.fetch("127.0.0.1", 8080, "Arquivos/4000b.txt", "Recebidos")
print(result.total_bytes, result.elapsed_ns, result.verified)
print(tcp_client.speed_report(result.total_bytes, result.elapsed_ns))

udp = udp_client.fetch("127.0.0.1", 8080, "Arquivos/4000b.txt", "Recebidos", timeout=2.0)
print(udp.expected, udp.received, udp.lost, udp.finished, udp.verified)

digest = compute_md5("Recebidos/recebido_4000b.txt")
save_md5("copy.md5", digest)
assert verify_md5("copy.md5", "Recebidos/recebido_4000b.txt")
```

`tcp_client.fetch` returns a `DownloadResult`. `udp_client.fetch` returns a
`UdpDownloadResult`, whose `verified` is `None` when packets were lost. Both
raise `ValueError` for a host that is not an IPv4 address, and `OSError`
(including `ConnectionError`) when the transfer fails.

### Servers in your own program

`TcpFileServer(port, host="")` and `UdpFileServer(port, host="")` bind on
creation. Their `address` property gives the bound address. Call
`serve_forever()` to answer requests, or, for UDP, `handle_request()` to
answer a single one. Call `close()` to stop. Both servers can be used as
context managers.

The module-level `send_file` functions in `tcp_server` and `udp_server` do the
sending for one request.

### UDP packets

`filecourier.packet.Packet(number, data)` is one numbered chunk:

- `encode()` gives the wire form: a little-endian 32-bit number, a 32-bit data
  size, then the data.
- `Packet.decode(data)` parses a datagram and raises `ValueError` if it is
  malformed.
- `is_end()` tells whether it is the empty end-of-file marker.

## What it does not do

- No authentication or encryption. A server sends any file it can read.
- No retransmission over UDP. Lost packets stay lost and are left out of the
  saved file.
- The UDP client ignores packet numbers from 100000 up, so larger files
  arrive cut short.
- Servers handle one client at a time.