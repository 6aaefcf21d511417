'''
Command line front-end: encode, decode and remove messages and print the
chunks of a PNG file.

 $ stowaway encode image.png ruSt "a secret message"
 $ stowaway decode image.png ruSt
 $ stowaway remove image.png ruSt
 $ stowaway print image.png

Set the DEBUG environment variable to see what happens under the hood.
'''
import argparse
import logging
import os
import sys

from .exceptions import StowawayException, ChunkNotFound
from .images.png import PNGFile, PNGChunk
from .images.png.chunk_type import ChunkType


logger = logging.getLogger(__name__)


def read_file(path) -> bytes:
    with open(path, 'rb') as f:
        return f.read()


def write_file(path, data: bytes) -> None:
    with open(path, 'wb') as f:
        f.write(data)


def encode(path, chunk_type: str, message: str, output=None) -> PNGChunk:
    png = PNGFile.parse(read_file(path))

    chunk = PNGChunk.new(ChunkType.parse_text(chunk_type), message.encode('utf-8'))
    png.append_chunk(chunk)

    output = output or path
    logger.debug(f'writing {len(png)} chunks to \'{output}\'')
    write_file(output, png.serialize())

    return chunk


def decode(path, chunk_type: str) -> str:
    png = PNGFile.parse(read_file(path))

    chunk = png.chunk_by_type(chunk_type)

    if chunk is None:
        raise ChunkNotFound(chunk_type)

    return chunk.data_as_text()


def remove(path, chunk_type: str, output=None) -> PNGChunk:
    png = PNGFile.parse(read_file(path))

    chunk = png.remove_chunk(chunk_type)

    output = output or path
    logger.debug(f'writing {len(png)} chunks to \'{output}\'')
    write_file(output, png.serialize())

    return chunk


def print_chunks(path) -> str:
    png = PNGFile.parse(read_file(path))

    return str(png)


def get_parser():
    parser = argparse.ArgumentParser(
        prog='stowaway',
        description='Hide messages inside PNG files using chunks of their own.',
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    encode_parser = subparsers.add_parser('encode', help='append a chunk containing the message')
    encode_parser.add_argument('path')
    encode_parser.add_argument('chunk_type', help='four ASCII letters, e.g. ruSt')
    encode_parser.add_argument('message')
    encode_parser.add_argument('output', nargs='?', help='where to write the result (default: overwrite the input)')

    decode_parser = subparsers.add_parser('decode', help='print the message inside the first chunk of the given type')
    decode_parser.add_argument('path')
    decode_parser.add_argument('chunk_type')

    remove_parser = subparsers.add_parser('remove', help='remove the first chunk of the given type')
    remove_parser.add_argument('path')
    remove_parser.add_argument('chunk_type')
    remove_parser.add_argument('output', nargs='?', help='where to write the result (default: overwrite the input)')

    print_parser = subparsers.add_parser('print', help='list the chunks of the file')
    print_parser.add_argument('path')

    return parser


def main(argv=None) -> int:
    logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)

    args = get_parser().parse_args(argv)

    try:
        if args.command == 'encode':
            chunk = encode(args.path, args.chunk_type, args.message, args.output)
            print(f'added chunk \'{chunk.chunk_type()}\' with {chunk.length()} bytes')
        elif args.command == 'decode':
            print(decode(args.path, args.chunk_type))
        elif args.command == 'remove':
            chunk = remove(args.path, args.chunk_type, args.output)
            print(f'removed chunk \'{chunk.chunk_type()}\': {chunk}')
        elif args.command == 'print':
            print(print_chunks(args.path))
    except (StowawayException, OSError) as e:
        print(f'error: {e}', file=sys.stderr)
        return 1

    return 0
