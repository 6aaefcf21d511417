"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable without need for relayouting.
"""
import logging
import struct

from .meta import FieldBase
from .properties import Dependency, ChunkPhase
from .streams import Stream
from .exceptions import StowawayException, BadSignature, TooShort


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, *args, name=None, father=None, default=None, offset=None, is_magic=False):
        super().__init__()
        self._phase = ChunkPhase.INIT
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.is_magic = is_magic

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_value(self):
        return self._value

    def _set_value(self, value) -> None:
        self._value = value

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    def _set_raw(self, value) -> None:
        raise NotImplementedError(f"method {self.__class__.__name__}._set_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
        fset=lambda self, value: self._set_raw(value),
    )

    def relayout(self, offset=0):
        self.logger.debug("relayouting %s", self.__class__.__name__)
        old_phase = self._phase
        self._phase = ChunkPhase.RELAYOUTING
        self.offset = offset

        self._phase = old_phase

        return self.size

    def _update_value(self):
        '''This is used to update the binary value before packing'''
        pass

    def pack(self, stream=None, relayout=True):
        '''Write the raw representation of this field into the stream (at its
        current position) and return the content of the stream.'''
        if relayout:
            self.relayout()

        self._phase = ChunkPhase.PACKING
        self._update_value()

        stream = Stream(b'') if stream is None else stream
        stream.write(self.raw)

        self._phase = ChunkPhase.DONE

        return stream.getvalue()

    def unpack(self, stream):
        raise NotImplementedError(f"method {self.__class__.__name__}.unpack() not implemented")


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes. The integers are always in network byte order.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def get_format(self):
        return '>%s' % self.format

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        return struct.pack(self.get_format(), self.value)

    def _set_raw(self, raw: bytes) -> None:
        self.value = self._unpack(raw)

    def _unpack(self, raw):
        try:
            value = struct.unpack(self.get_format(), raw)[0]
        except struct.error as e:
            raise TooShort(str(e))

        if self.is_magic and value != self.default:
            raise BadSignature(f'expected magic 0x{self.default:x}, found 0x{value:x}')

        return value

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING
        self.value = self._unpack(stream.read_exactly(self.size))
        self._phase = ChunkPhase.DONE


class StringField(Field):
    """Represent a contiguous chunk of bytes.

    The length can be an integer or a Dependency on another field: in the latter
    case setting the value writes back its length into the field we depend on.
    """

    def __init__(self, n=None, **kw):
        if n is None and kw.get('default') is None:
            raise ValueError(f"StringField must have 'n' or 'default' indicated!")

        self._length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return self.length

    @property
    def length(self) -> int:
        if isinstance(self._length, Dependency):
            if self.father is None:
                return len(self.value)

            return self._length.resolve(self)

        return self._length

    def value_from_default(self):
        if self.default is not None:
            return self.default

        return b'' if isinstance(self._length, Dependency) else b'\x00' * self._length

    def _get_size(self):
        return len(self.value)

    def _set_value(self, value) -> None:
        """The StringField has the size as a parameter and we must follow that indication
        unless it's a Dependency, in that case we are going to write back the length where necessary."""
        value = bytes(value)
        length = len(value)

        if isinstance(self._length, Dependency):
            if self.father is not None:
                self._length.resolve_and_set(self, length)
        elif length != self._length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self._length} bytes)')

        self._value = value

    def _get_raw(self):
        return self.value

    def _set_raw(self, raw) -> None:
        self.value = raw

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING
        if self.is_magic:
            # a magic must not complain about missing data but about being the wrong one
            value = stream.read(self.length)
            if value != self.default:
                raise BadSignature(f'expected magic {self.default!r}, found {value!r}')
        else:
            value = stream.read_exactly(self.length)

        self._value = value
        self._phase = ChunkPhase.DONE


class ArrayField(Field):
    '''Un/Pack an array of Chunks.

    The element passed as first argument is used as a prototype: every element
    is a copy of it. When unpacking, elements are read until the stream is over.

    This class must behave like a list in python, obviously cannot implement all the methods
    since, for example, slicing what should mean?
    '''

    def __init__(self, field_cls, **kw):
        self.field_cls = field_cls
        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        return list(self.default) if self.default is not None else []

    def clear(self):
        self.value.clear()

    def _get_raw(self):
        return b''.join([element.raw for element in self.value])

    def _get_size(self):
        size = 0
        for element in self.value:
            size += element.size

        return size

    def relayout(self, offset=0):
        super().relayout(offset=offset)
        size = 0
        for element in self.value:
            size += element.relayout(offset=offset + size)

        return size

    def pack(self, stream=None, relayout=True):
        if relayout:
            self.relayout()

        stream = Stream(b'') if stream is None else stream

        for element in self.value:
            element.pack(stream=stream, relayout=False)

        return stream.getvalue()

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING
        self.clear()

        idx = 0
        while not stream.at_end():
            element = self.instance_element()
            self.logger.debug('unpacking element #%d at offset %d' % (idx, stream.tell()))
            try:
                element.unpack(stream)
            except StowawayException as e:
                e.chain.append(str(idx))
                raise
            self.value.append(element)
            idx += 1

        self._phase = ChunkPhase.DONE

    def append(self, element):
        element.father = self
        self.value.append(element)

    def pop(self, index):
        element = self.value.pop(index)
        element.father = None

        return element
