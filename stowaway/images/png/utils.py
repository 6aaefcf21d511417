import logging


logger = logging.getLogger(__name__)


def iter_chunks_by_type(chunks, name):
    '''Yield (index, chunk) for each chunk whose type is written as name.'''
    for idx, chunk in enumerate(chunks):
        if str(chunk.chunk_type()) == name:
            yield idx, chunk


def get_chunk_by_type(chunks, name):
    '''Return the first (index, chunk) with the given type or (None, None).'''
    logger.debug(f'looking for chunk of type \'{name}\'')
    return next(iter_chunks_by_type(chunks, name), (None, None))


def describe_chunk_type(chunk_type):
    return ' '.join([
        'critical' if chunk_type.is_critical() else 'ancillary',
        'public' if chunk_type.is_public() else 'private',
        'safe-to-copy' if chunk_type.is_safe_to_copy() else 'unsafe-to-copy',
    ] + ([] if chunk_type.is_reserved_bit_valid() else ['reserved-bit-set']))


def describe_chunk(idx, chunk):
    return f'[{idx:02d}] {chunk.chunk_type()} length={chunk.length()} crc=0x{chunk.crc():08x} ({describe_chunk_type(chunk.chunk_type())})'
