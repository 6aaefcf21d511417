'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html> and
is available a full test-suite with a lot of PNG images covering all
the possible cases at <http://www.schaik.com/pngsuite/>.

Here we stop at the container level: a file is a signature followed by chunks
and the content of a chunk is never interpreted, so that it's possible to add
and remove chunks of our own without touching the image itself.
'''
from typing import Iterable, Optional, Tuple

from ...core import Chunk
from ... import fields
from ...properties import Dependency
from ...common import crc
from ...exceptions import StowawayException, ChecksumMismatch, ChunkNotFound, NotUtf8, TooShort
from .chunk_type import ChunkType, ChunkTypeField
from .utils import get_chunk_by_type, describe_chunk


PNG_SIGNATURE = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'


class PNGHeader(Chunk):
    magic = fields.StringField(8, default=PNG_SIGNATURE, is_magic=True)


class PNGChunk(Chunk):
    '''This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each field is intended big-endian.

    A chunk is defined as critical or ancillary depending on the case of the
    starting letter of the type field.

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data, but not the length.

    # Critical chunks

     1. IHDR: contains image's width, height, bit depth, color type, compression method, filter method and interlace method
     2. PLTE: contains the palette data
     3. IDAT: contains the actual image data (compressed)
     4. IEND: is the terminator chunk
    '''
    data_length = fields.StructField('I')
    type        = ChunkTypeField()
    payload     = fields.StringField(Dependency('.data_length'))
    checksum    = crc.CRCField(['type', 'payload'])

    # length + type + crc
    MIN_SIZE = 12

    @classmethod
    def new(cls, chunk_type: ChunkType, data: bytes) -> "PNGChunk":
        chunk = cls()
        chunk.type.value = chunk_type
        chunk.payload.value = data
        chunk.checksum.value = chunk.checksum.calculate()
        chunk.relayout()

        return chunk

    @classmethod
    def from_bytes(cls, data: bytes) -> "PNGChunk":
        '''Build a chunk from the exact bytes it occupies: the slice is trusted
        for the boundaries, so the length written at the start is not used.'''
        data = bytes(data)

        if len(data) < cls.MIN_SIZE:
            raise TooShort(f'a chunk needs at least {cls.MIN_SIZE} bytes, got {len(data)}')

        chunk = cls()

        for field_name, raw in (
            ('type', data[4:8]),
            ('payload', data[8:-4]),
            ('checksum', data[-4:]),
        ):
            try:
                getattr(chunk, field_name).raw = raw
            except StowawayException as e:
                e.chain.append(field_name)
                raise

        chunk.validate()
        chunk.relayout()

        return chunk

    def validate(self):
        if not self.checksum.is_valid():
            raise ChecksumMismatch(
                f'stored crc 0x{self.checksum.value:08x} doesn\'t match the calculated 0x{self.checksum.calculate():08x}',
                chain=['checksum'],
            )

    def __eq__(self, other):
        if not isinstance(other, PNGChunk):
            return NotImplemented

        return (self.chunk_type(), self.data(), self.crc()) == (other.chunk_type(), other.data(), other.crc())

    def __str__(self):
        return self.data().decode('utf-8', errors='replace')

    def length(self) -> int:
        return len(self.payload.value)

    def chunk_type(self) -> ChunkType:
        return self.type.value

    def data(self) -> bytes:
        return self.payload.value

    def crc(self) -> int:
        return self.checksum.value

    def data_as_text(self) -> str:
        try:
            return self.data().decode('utf-8')
        except UnicodeDecodeError as e:
            raise NotUtf8(f'the payload of chunk \'{self.chunk_type()}\' is not valid UTF-8: {e.reason}')

    def serialize(self) -> bytes:
        return self.pack()


class PNGFile(Chunk):
    header  = PNGHeader()
    entries = fields.ArrayField(PNGChunk())

    @classmethod
    def parse(cls, data: bytes) -> "PNGFile":
        return cls(bytes(data))

    @classmethod
    def from_chunks(cls, chunks: Iterable[PNGChunk]) -> "PNGFile":
        png = cls()
        for chunk in chunks:
            png.append_chunk(chunk)

        return png

    def __len__(self):
        return len(self.entries)

    def __str__(self):
        return '\n'.join([describe_chunk(idx, chunk) for idx, chunk in enumerate(self.entries)])

    def signature(self) -> bytes:
        return self.header.magic.value

    def chunks(self) -> Tuple[PNGChunk, ...]:
        return tuple(self.entries.value)

    def append_chunk(self, chunk: PNGChunk) -> None:
        self.entries.append(chunk)

    def chunk_by_type(self, chunk_type: str) -> Optional[PNGChunk]:
        _, chunk = get_chunk_by_type(self.entries, chunk_type)

        return chunk

    def remove_chunk(self, chunk_type: str) -> PNGChunk:
        idx, _ = get_chunk_by_type(self.entries, chunk_type)

        if idx is None:
            raise ChunkNotFound(chunk_type)

        return self.entries.pop(idx)

    def serialize(self) -> bytes:
        return self.pack()
