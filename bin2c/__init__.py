"""
bin2c - Convert binary files into C source literals.

This package turns any file (or standard input) into a declaration that can
be compiled straight into a program:
- `unsigned char` arrays with a matching `_len` variable
- `char *` quoted string constants
- Objective-C `NSString *` constants
"""

__version__ = "0.1.0"
__author__ = "Elias Bachaalany"
__email__ = "elias.bachaalany@gmail.com"

# Note: We don't import the encoder or CLI here; use bin2c.encoder and bin2c.cli

__all__ = [
    '__version__',
    '__author__',
    '__email__',
]
