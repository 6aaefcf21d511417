'''
# Chunk type codes

A chunk type is made of four ASCII letters: the case of each letter, that is
the fifth bit (0x20) of the byte, is a property of the chunk

 1. ancillary bit (first byte): uppercase means critical
 2. private bit (second byte): uppercase means public
 3. reserved bit (third byte): must be uppercase
 4. safe-to-copy bit (fourth byte): lowercase means safe to copy

See <http://www.libpng.org/pub/png/spec/1.2/PNG-Structure.html#Chunk-naming-conventions>.
'''
from bitstring import BitArray

from ... import fields
from ...exceptions import InvalidTypeCode


# position of the 0x20 bit inside a byte, counting from the most significant one
CASE_BIT = 2


class ChunkType(object):
    '''Immutable four letters code that identifies the kind of a chunk.

    Use parse_bytes() or parse_text() to build one.'''

    def __init__(self, data: bytes):
        data = bytes(data)

        if len(data) != 4:
            raise InvalidTypeCode(f'a chunk type must be 4 bytes long, got {len(data)}')

        if not data.isalpha():
            raise InvalidTypeCode(f'{data!r} contains something that is not an ASCII letter')

        self._data = data

    @classmethod
    def parse_bytes(cls, data: bytes) -> "ChunkType":
        return cls(data)

    @classmethod
    def parse_text(cls, text: str) -> "ChunkType":
        if len(text) != 4:
            raise InvalidTypeCode(f'a chunk type must be 4 characters long, got \'{text}\'')

        try:
            data = text.encode('ascii')
        except UnicodeEncodeError:
            raise InvalidTypeCode(f'\'{text}\' contains something that is not an ASCII letter')

        return cls(data)

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented

        return self._data == other._data

    def __hash__(self):
        return hash(self._data)

    def __str__(self):
        return self._data.decode('utf-8', errors='replace')

    def __repr__(self):
        return f'<{self.__class__.__name__}({self})>'

    def bytes(self) -> bytes:
        return self._data

    def _is_lowercase(self, idx: int) -> bool:
        return BitArray(self._data)[idx * 8 + CASE_BIT]

    def is_critical(self) -> bool:
        return not self._is_lowercase(0)

    def is_public(self) -> bool:
        return not self._is_lowercase(1)

    def is_reserved_bit_valid(self) -> bool:
        return not self._is_lowercase(2)

    def is_safe_to_copy(self) -> bool:
        return self._is_lowercase(3)

    def is_valid(self) -> bool:
        # the letters are already checked at construction
        return self._data.isalpha() and self.is_reserved_bit_valid()


class ChunkTypeField(fields.Field):
    '''Four bytes field holding a ChunkType as value (None when not set yet).'''

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value})>'

    def _set_value(self, value) -> None:
        if isinstance(value, str):
            value = ChunkType.parse_text(value)
        elif isinstance(value, (bytes, bytearray)):
            value = ChunkType.parse_bytes(value)
        elif value is not None and not isinstance(value, ChunkType):
            raise InvalidTypeCode(f'{value!r} cannot be used as a chunk type')

        self._value = value

    def _get_size(self):
        return 4

    def _get_raw(self) -> bytes:
        return self.value.bytes() if self.value is not None else b'\x00' * 4

    def _set_raw(self, raw) -> None:
        self.value = ChunkType.parse_bytes(raw)

    def unpack(self, stream):
        self.value = ChunkType.parse_bytes(stream.read_exactly(self.size))
