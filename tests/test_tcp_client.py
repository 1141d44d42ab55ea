import os
import socket
import threading
from pathlib import Path

import pytest

from filecourier.md5hash import compute_md5
from filecourier.tcp_client import (
    DownloadResult,
    build_paths,
    ensure_directory,
    fetch,
    main,
    speed_report,
)


def _serve_once(payload):
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]
    requests = []

    def run():
        conn, _ = listener.accept()
        with conn:
            requests.append(conn.recv(256))
            conn.sendall(payload)
        listener.close()

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return port, thread, requests


def test_build_paths_uses_base_name():
    save_path, hash_path = build_paths("dir/sub/data.txt", "out")
    assert save_path == Path("out") / "recebido_data.txt"
    assert hash_path == Path("out") / "hashRecebido.txt"


def test_build_paths_ignores_trailing_slash():
    save_path, _ = build_paths("dir/data.txt/", "out")
    assert save_path.name == "recebido_data.txt"


def test_ensure_directory_creates_and_is_idempotent(tmp_path):
    target = tmp_path / "Recebidos"
    assert ensure_directory(target) == target
    assert target.is_dir()
    assert ensure_directory(target) == target
    assert target.is_dir()


def test_speed_report_without_data():
    report = speed_report(0, 0)
    lines = report.splitlines()
    assert lines[0] == "Impossível calcular a velocidade."
    assert lines[1] == "Tempo total: 0 ns (0 ms, 0.00s)"


def test_speed_report_one_kilobyte_per_second():
    report = speed_report(1024, 1_000_000_000)
    assert report.splitlines() == [
        "Velocidade de download: 1.00 KB/s (0.00 MB/s)",
        "Tempo total: 1000000000 ns (1000 ms, 1.00s)",
    ]


def test_speed_report_without_elapsed_time_has_no_speed():
    report = speed_report(5000, 0)
    assert report.startswith("Impossível calcular a velocidade.")


def test_fetch_receives_and_verifies(tmp_path):
    source = tmp_path / "source.txt"
    content = b"hello world " * 1000
    source.write_bytes(content)
    port, thread, requests = _serve_once(compute_md5(source) + content)

    result = fetch("127.0.0.1", port, str(source), tmp_path / "out")
    thread.join(5)

    assert isinstance(result, DownloadResult)
    assert requests == [os.fsencode(str(source))]
    assert result.total_bytes == len(content)
    assert result.save_path == tmp_path / "out" / "recebido_source.txt"
    assert result.save_path.read_bytes() == content
    assert result.hash_path.read_bytes() == compute_md5(source)
    assert result.verified is True
    assert result.elapsed_ns >= 0


def test_fetch_reports_corruption(tmp_path):
    content = b"abcdef" * 100
    port, thread, _ = _serve_once(b"\x00" * 16 + content)
    result = fetch("127.0.0.1", port, "data.txt", tmp_path)
    thread.join(5)
    assert result.save_path.read_bytes() == content
    assert result.verified is False


def test_fetch_short_hash_raises_and_removes_hash_file(tmp_path):
    port, thread, _ = _serve_once(b"\x01\x02")
    with pytest.raises(ConnectionError):
        fetch("127.0.0.1", port, "data.txt", tmp_path)
    thread.join(5)
    assert not (tmp_path / "hashRecebido.txt").exists()


def test_fetch_rejects_invalid_address(tmp_path):
    with pytest.raises(ValueError):
        fetch("not-an-ip", 8080, "data.txt", tmp_path)


def test_main_wrong_argument_count():
    assert main(["127.0.0.1", "8080"]) == 1


def test_main_bad_port():
    assert main(["127.0.0.1", "abc", "file.txt"]) == 1


def test_main_downloads_into_default_directory(tmp_path, monkeypatch, capsys):
    source = tmp_path / "source.txt"
    content = b"data" * 50
    source.write_bytes(content)
    port, thread, _ = _serve_once(compute_md5(source) + content)
    monkeypatch.chdir(tmp_path)

    assert main(["127.0.0.1", str(port), str(source)]) == 0
    thread.join(5)

    out = capsys.readouterr().out
    assert "Hash MD5 conferido: o arquivo está correto." in out
    assert (tmp_path / "Recebidos" / "recebido_source.txt").read_bytes() == content