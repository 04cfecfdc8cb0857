#!/usr/bin/env python3
"""
Command-line interface for bin2c.
Parses arguments, merges them with the config file and runs the encoder.

Usage:
    bin2c -i logo.png -o logo.h -a logo_png
    cat blob.bin | bin2c -a blob -l 16 -s
    bin2c -i shader.metal -a shader_src -t nsstring
"""

import argparse
import sys
from pathlib import Path

from . import __version__
from .config import ConfigManager
from .encoder import encode_file
from .errors import ConfigError, EncoderIOError, UsageError, printable_path
from .options import OutputFormat


EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_USAGE = 2


class UsageArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad arguments as UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def build_parser():
    """Create the argument parser."""
    parser = UsageArgumentParser(
        prog='bin2c',
        description='Convert a binary file to a C array or string literal',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog='''
Examples:
  %(prog)s -i logo.png -o logo.h -a logo_png      # unsigned char array + logo_png_len
  %(prog)s -i data.bin -a data -l 16 -s -0        # static, 16 bytes per line, null terminated
  %(prog)s -i font.ttf -a font -t string          # const char *font = "\\x..";
  %(prog)s -i script.js -a script -t nsstring     # const NSString *script = @"\\x..";
  cat blob | %(prog)s -a blob -p "constexpr"      # read stdin, custom prefix

Settings missing from the command line come from bin2c.yaml (see --generate-config).
        '''
    )

    parser.add_argument(
        '-i', '--input',
        metavar='PATH',
        help='Input file (default: standard input)'
    )

    parser.add_argument(
        '-o', '--output',
        metavar='PATH',
        help='Output file (default: standard output)'
    )

    parser.add_argument(
        '-a', '--array',
        metavar='NAME',
        help='Variable name of the generated declaration (required)'
    )

    parser.add_argument(
        '-l', '--line-width',
        type=int,
        metavar='N',
        help='Encoded bytes per line (default: 80)'
    )

    parser.add_argument(
        '-t', '--type',
        choices=[f.value for f in OutputFormat],
        help='Output format: char array (default), string or nsstring literal'
    )

    parser.add_argument(
        '-s', '--static',
        action='store_true',
        help='Prefix declarations with static'
    )

    parser.add_argument(
        '-0', '--null-terminate',
        action='store_true',
        dest='null_terminate',
        help='Append a trailing 0x00 byte (char format only)'
    )

    parser.add_argument(
        '-p', '--prefix',
        metavar='PREFIX',
        help='Text placed before the type (default: "const ")'
    )

    parser.add_argument(
        '-c', '--config',
        metavar='PATH',
        help='Path to configuration file (YAML)'
    )

    parser.add_argument(
        '--generate-config',
        nargs='?',
        const='',
        metavar='PATH',
        help='Write a default bin2c.yaml and exit'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Report what was encoded on standard error'
    )

    parser.add_argument(
        '-h', '--help',
        action='store_true',
        help='Show this help message and exit'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def main(argv=None):
    """Main entry point. Returns the process exit code."""
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    if args.help:
        parser.print_help(sys.stderr)
        return EXIT_USAGE

    config_manager = ConfigManager()

    if args.generate_config is not None:
        target = Path(args.generate_config) if args.generate_config else None
        try:
            path = config_manager.generate_default_config_file(target)
        except OSError as e:
            print(f"Error: Cannot write config file: {e}", file=sys.stderr)
            return EXIT_IO_ERROR
        print(f"Generated default config file: {path}", file=sys.stderr)
        return EXIT_OK

    if not args.array:
        parser.print_usage(sys.stderr)
        print("Error: the variable name (-a) is required", file=sys.stderr)
        return EXIT_USAGE

    try:
        config_manager.load_config(args.config)
        # CLI overrides config file
        config_manager.update_from_args(args)
        config = config_manager.build_encoder_config(args.array, args.input, args.output)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        count = encode_file(config)
    except EncoderIOError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_IO_ERROR
    except OSError as e:
        print(f"Error: I/O failure while encoding: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    if args.verbose:
        source = printable_path(config.input_path) if config.input_path else '<stdin>'
        target = printable_path(config.output_path) if config.output_path else '<stdout>'
        print(f"Encoded {count} bytes from {source} to {target}", file=sys.stderr)

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
