import pytest

from filecourier.packet import HEADER_SIZE, PAYLOAD_SIZE, Packet


def test_encode_wire_layout():
    assert Packet(1, b"ab").encode() == b"\x01\x00\x00\x00\x02\x00\x00\x00ab"


def test_full_packet_fills_datagram():
    full = Packet(0, bytes(PAYLOAD_SIZE)).encode()
    assert len(full) == 1400
    assert len(Packet(0, b"x").encode()) == HEADER_SIZE + 1
    assert HEADER_SIZE == 8


def test_round_trip():
    packet = Packet(70000, bytes(range(200)))
    assert Packet.decode(packet.encode()) == packet


def test_end_packet_round_trip():
    end = Packet(5)
    decoded = Packet.decode(end.encode())
    assert decoded.is_end()
    assert decoded.number == 5


def test_data_packet_is_not_end():
    assert not Packet(0, b"x").is_end()


def test_decode_ignores_trailing_padding():
    datagram = Packet(3).encode() + bytes(100)
    decoded = Packet.decode(datagram)
    assert decoded == Packet(3)


def test_decode_short_header_raises():
    with pytest.raises(ValueError):
        Packet.decode(b"\x01\x00\x00")


def test_decode_truncated_payload_raises():
    datagram = Packet(0, b"hello").encode()[:-1]
    with pytest.raises(ValueError):
        Packet.decode(datagram)


@pytest.mark.parametrize("number", [-1, 2**32])
def test_number_out_of_range_raises(number):
    with pytest.raises(ValueError):
        Packet(number, b"a")