import pytest

from stowaway.core import Chunk
from stowaway.exceptions import BadSignature, TooShort
from stowaway.fields import StructField, StringField, ArrayField
from stowaway.streams import Stream


def test_structfield_conversion_raw_value():
    """Check that the attributes "value" and "raw" are the analogous
    of the integers and bytes representation for a field."""
    field = StructField('I')

    assert field.size == 4
    assert field.raw == b'\x00\x00\x00\x00'
    assert field.value == 0

    field.value = 0xcafe

    assert field.value == 0xcafe
    assert field.raw == b'\x00\x00\xca\xfe'


def test_structfield_set_raw():
    field = StructField('I')

    field.raw = b'\x01\x02\x03\x04'

    assert field.value == 0x01020304
    assert field.raw == b'\x01\x02\x03\x04'


def test_structfield_magic():
    field = StructField('I', default=0xcafebabe, is_magic=True)

    field.raw = b'\xca\xfe\xba\xbe'

    with pytest.raises(BadSignature):
        field.raw = b'\xca\xfe\xba\xbf'


def test_structfield_unpack_short():
    field = StructField('I')

    with pytest.raises(TooShort):
        field.unpack(Stream(b'\x01\x02'))


def test_stringfield():
    field = StringField(0x10)

    assert field.size == 0x10
    assert len(field.raw) == field.size
    assert field.raw == b'\x00' * field.size

    with pytest.raises(ValueError):
        field.value = b'kebab'

    data = b''.join([bytes([_]) for _ in range(0x10)])

    field.value = data

    assert field.value == data
    assert field.raw == data


def test_stringfield_needs_length():
    with pytest.raises(ValueError):
        StringField()


def test_stringfield_magic():
    field = StringField(default=b'MAGIC', is_magic=True)

    field.unpack(Stream(b'MAGICand more'))
    assert field.value == b'MAGIC'

    # missing data is a wrong magic too
    with pytest.raises(BadSignature):
        field.unpack(Stream(b'MAG'))

    with pytest.raises(BadSignature):
        field.unpack(Stream(b'MAGIK'))


class Element(Chunk):
    a = StructField('H')


def test_arrayfield():
    array = ArrayField(Element())

    assert isinstance(array.value, list)
    assert len(array) == 0

    array.unpack(Stream(b'\x00\x01\x00\x02\x00\x03'))

    assert len(array) == 3
    assert [_.a.value for _ in array] == [1, 2, 3]
    assert array[0] is not array[1]
    assert array[0].father is array

    assert array.relayout(offset=8) == 6
    assert array[1].a.offset == 10

    element = array.pop(1)

    assert element.father is None
    assert [_.a.value for _ in array] == [1, 3]
    assert array.pack() == b'\x00\x01\x00\x03'

    array.clear()

    assert len(array) == 0


def test_arrayfield_truncated():
    array = ArrayField(Element())

    with pytest.raises(TooShort) as exc_info:
        array.unpack(Stream(b'\x00\x01\x00'))

    assert exc_info.value.chain == ['a', '1']
    assert str(exc_info.value).endswith('(at 1.a)')


def test_stream():
    stream = Stream(b'\x01\x02\x03\x04\x05')

    assert stream.read(1) == b'\x01'
    assert stream.read_exactly(2) == b'\x02\x03'
    assert not stream.at_end()
    assert stream.tell() == 3

    with pytest.raises(TooShort):
        stream.read_exactly(3)

    stream.seek(3)

    assert stream.read(5) == b'\x04\x05'
    assert stream.at_end()


def test_stream_wrong_object():
    with pytest.raises(ValueError):
        Stream(42)


def test_stream_getvalue():
    stream = Stream(b'')

    stream.write(b'\x01\x02')
    stream.seek(4)
    stream.write(b'\x05')

    assert stream.getvalue() == b'\x01\x02\x00\x00\x05'


def test_stream_does_not_open_paths(tmp_path):
    with pytest.raises(ValueError):
        Stream(str(tmp_path / 'data'))
