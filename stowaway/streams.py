import io

from .exceptions import TooShort


class Stream(object):
    '''This is a simple wrapper around bytes to uniform its properties:
    mainly we need to have a seek() method and reads that fail loudly
    when the data is over.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj
        self.history = []

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' cannot be used as a stream' % self.obj.__class__.__name__)

        init_method()

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self._type.__name__)

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        self.obj.seek(offset)

    def tell(self):
        return self.obj.tell()

    def read(self, n):
        '''Read at most n bytes.'''
        return self.obj.read(n)

    def read_exactly(self, n):
        '''Read exactly n bytes, raising TooShort otherwise.'''
        offset = self.obj.tell()
        data = self.obj.read(n)

        if len(data) != n:
            raise TooShort(f'expected {n} bytes at offset {offset}, got {len(data)}')

        return data

    def at_end(self):
        self.save()
        is_there_more = len(self.obj.read(1)) != 0
        self.restore()

        return not is_there_more

    def write(self, data):
        return self.obj.write(data)

    def getvalue(self):
        return self.obj.getvalue()

    def save(self):
        self.history.append(self.obj.tell())

    def restore(self):
        old_seek = self.history.pop()
        self.obj.seek(old_seek)
