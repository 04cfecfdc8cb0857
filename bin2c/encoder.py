"""
The encoder: streams bytes from a binary input and writes them out as a C
declaration.

Two entry points:
- encode(): works on streams the caller already opened
- encode_file(): resolves the configured paths (or the standard streams),
  opens them and calls encode()
"""

import sys
from contextlib import ExitStack
from typing import BinaryIO, Iterator, Optional, TextIO, Tuple

from .errors import ReadOpenFailed, WriteOpenFailed, printable_path
from .options import EncoderConfig, OutputFormat


CHUNK_SIZE = 64 * 1024


def iter_bytes(stream: BinaryIO, null_terminate: bool = False,
               chunk_size: int = CHUNK_SIZE) -> Iterator[int]:
    """Yield every byte of `stream` in order, plus a trailing 0 if asked."""
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        yield from chunk
    if null_terminate:
        yield 0


def with_lookahead(values: Iterator[int]) -> Iterator[Tuple[int, bool]]:
    """Pair each value with a flag telling whether it is the last one."""
    it = iter(values)
    try:
        current = next(it)
    except StopIteration:
        return
    for upcoming in it:
        yield current, False
        current = upcoming
    yield current, True


def _write_byte_array(data: Iterator[int], out: TextIO, config: EncoderConfig) -> int:
    name = config.variable_name
    qualifiers = config.storage_class + config.declaration_prefix
    width = config.line_width

    out.write(f"{qualifiers}{config.output_format.type_name} {name}[] = {{")

    count = 0
    for value, last in with_lookahead(data):
        if count == 0:
            out.write("\n\t")
        count += 1
        out.write("0x%02x" % value)
        if not last:
            out.write(",\n\t" if count % width == 0 else ",")
    if count:
        out.write("\n")

    out.write("};\n")
    out.write(f"{qualifiers}unsigned int {name}_len = {count};\n")
    return count


def _write_quoted_string(data: Iterator[int], out: TextIO, config: EncoderConfig) -> int:
    fmt = config.output_format
    qualifiers = config.storage_class + config.declaration_prefix
    opening = fmt.literal_prefix + '"'
    width = config.line_width

    out.write(f"{qualifiers}{fmt.type_name} *{config.variable_name} = \n\t{opening}")

    count = 0
    for value, last in with_lookahead(data):
        count += 1
        out.write("\\x%02x" % value)
        if count % width == 0 and not last:
            out.write(f'"\n\t{opening}')

    out.write('";\n')
    return count


_WRITERS = {
    OutputFormat.BYTE_ARRAY: _write_byte_array,
    OutputFormat.QUOTED_STRING: _write_quoted_string,
    OutputFormat.NSSTRING: _write_quoted_string,
}

def encode(input_stream: BinaryIO, output_stream: TextIO, config: EncoderConfig) -> int:
    """
    Write the declaration for everything readable from `input_stream`.

    Returns the number of encoded bytes, including the synthetic terminator
    when `config.null_terminate` is set. Neither stream is closed.
    """
    if config.input_path is not None:
        output_stream.write(f"// Imported from file '{printable_path(config.input_path)}'\n")

    data = iter_bytes(input_stream, config.null_terminate)
    return _WRITERS[config.output_format](data, output_stream, config)


def _open_input(path: str) -> BinaryIO:
    try:
        return open(path, 'rb')
    except OSError as e:
        raise ReadOpenFailed(path, e.strerror or str(e)) from e


def _open_output(path: str) -> TextIO:
    try:
        return open(path, 'w', encoding='utf-8', newline='\n')
    except OSError as e:
        raise WriteOpenFailed(path, e.strerror or str(e)) from e


def encode_file(config: EncoderConfig,
                stdin: Optional[BinaryIO] = None,
                stdout: Optional[TextIO] = None) -> int:
    """
    Encode using the paths in `config`, falling back to the standard streams.

    The input is opened before the output, so an unreadable input never
    truncates the output file. Files opened here are closed on every exit
    path; the standard streams are only flushed.
    """
    with ExitStack() as stack:
        if config.input_path is not None:
            source = stack.enter_context(_open_input(config.input_path))
        else:
            source = stdin if stdin is not None else sys.stdin.buffer

        if config.output_path is not None:
            target = stack.enter_context(_open_output(config.output_path))
        else:
            target = stdout if stdout is not None else sys.stdout

        count = encode(source, target, config)
        target.flush()
        return count
