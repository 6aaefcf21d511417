import struct
import zlib

import pytest


MESSAGE = b'This is where your secret message will be!'
MESSAGE_CRC = 2882656334


def make_chunk(chunk_type: bytes, data: bytes, crc=None) -> bytes:
    if crc is None:
        crc = zlib.crc32(chunk_type + data) & 0xffffffff

    return struct.pack('>I', len(data)) + chunk_type + data + struct.pack('>I', crc)


@pytest.fixture
def message() -> bytes:
    return MESSAGE


@pytest.fixture
def testing_chunk_bytes() -> bytes:
    """The serialized chunk of type RuSt containing the sample message."""
    return make_chunk(b'RuSt', MESSAGE, crc=MESSAGE_CRC)


@pytest.fixture
def minimal_png() -> bytes:
    """A 1x1 transparent PNG image."""
    signature = b'\x89PNG\r\n\x1a\n'

    # IHDR: 1x1 pixel, RGBA
    ihdr = make_chunk(b'IHDR', struct.pack('>IIBBBBB', 1, 1, 8, 6, 0, 0, 0))
    # filter byte + RGBA
    idat = make_chunk(b'IDAT', zlib.compress(b'\x00\x00\x00\x00\x00'))
    iend = make_chunk(b'IEND', b'')

    return signature + ihdr + idat + iend


@pytest.fixture
def png_path(tmp_path, minimal_png):
    path = tmp_path / 'sample.png'
    path.write_bytes(minimal_png)

    return path


@pytest.fixture
def chunk_bytes():
    """Build the raw bytes of a chunk, with the right crc if not indicated."""
    return make_chunk
