class StowawayException(Exception):
    '''Base class to extend in order to throw exception in stowaway.

    Other than the message it takes a "chain" argument that represents the
    names of the layers the exception passed through (innermost first).
    '''

    def __init__(self, message='', chain=None):
        self.message = message
        self.chain = chain if chain is not None else []
        super().__init__(message)

    def __str__(self):
        if not self.chain:
            return self.message

        return '%s (at %s)' % (self.message, '.'.join(reversed(self.chain)))


class InvalidTypeCode(StowawayException):
    '''A chunk type contains something that is not an ASCII letter.'''
    pass


class TooShort(StowawayException):
    '''There are not enough bytes to unpack what was requested.'''
    pass


class ChecksumMismatch(StowawayException):
    pass


class BadSignature(StowawayException):
    '''The magic at the start of the data is not the expected one.'''
    pass


class ChunkNotFound(StowawayException):

    def __init__(self, chunk_type, chain=None):
        self.chunk_type = chunk_type
        super().__init__(f'no chunk with type \'{chunk_type}\'', chain=chain)


class NotUtf8(StowawayException):
    pass
