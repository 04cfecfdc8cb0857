"""
Encoder options: the output format enumeration and the immutable
configuration value handed to the encoder.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .errors import ConfigError


DEFAULT_LINE_WIDTH = 80
DEFAULT_DECLARATION_PREFIX = 'const '


class OutputFormat(Enum):
    """Kinds of declarations the encoder can emit."""
    BYTE_ARRAY = 'char'
    QUOTED_STRING = 'string'
    NSSTRING = 'nsstring'

    @property
    def is_quoted(self) -> bool:
        return self is not OutputFormat.BYTE_ARRAY

    @property
    def type_name(self) -> str:
        """C type used in the declaration."""
        return {
            OutputFormat.BYTE_ARRAY: 'unsigned char',
            OutputFormat.QUOTED_STRING: 'char',
            OutputFormat.NSSTRING: 'NSString',
        }[self]

    @property
    def literal_prefix(self) -> str:
        """Marker placed before every opening quote (quoted formats only)."""
        return '@' if self is OutputFormat.NSSTRING else ''

    @classmethod
    def parse(cls, value: Any) -> 'OutputFormat':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ', '.join(f.value for f in cls)
            raise ConfigError(
                f"Invalid output format '{value}' (choose from {choices})",
                ConfigError.INVALID_FORMAT
            ) from None


def normalize_prefix(prefix: Optional[str]) -> str:
    """Return the declaration prefix, ensuring it ends with whitespace."""
    if prefix is None:
        return DEFAULT_DECLARATION_PREFIX
    if prefix and not prefix[-1].isspace():
        return prefix + ' '
    return prefix


def _flag(settings: Dict[str, Any], key: str) -> bool:
    value = settings.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(
            f"Setting '{key}' must be true or false, got {value!r}",
            ConfigError.INVALID_CONFIG_FILE
        )
    return value


@dataclass(frozen=True)
class EncoderConfig:
    """Everything the encoder needs to know for one run."""
    variable_name: str
    output_format: OutputFormat = OutputFormat.BYTE_ARRAY
    line_width: int = DEFAULT_LINE_WIDTH
    null_terminate: bool = False
    static_qualifier: bool = False
    declaration_prefix: str = DEFAULT_DECLARATION_PREFIX
    input_path: Optional[str] = None
    output_path: Optional[str] = None

    def __post_init__(self):
        # Frozen dataclass: normalized values go through object.__setattr__
        object.__setattr__(self, 'output_format', OutputFormat.parse(self.output_format))
        object.__setattr__(self, 'declaration_prefix', normalize_prefix(self.declaration_prefix))

        if not self.variable_name:
            raise ConfigError("Variable name must not be empty", ConfigError.INVALID_NAME)

        if isinstance(self.line_width, bool) or not isinstance(self.line_width, int) \
                or self.line_width <= 0:
            raise ConfigError(
                f"Line width must be a positive integer, got {self.line_width!r}",
                ConfigError.INVALID_LINE_WIDTH
            )

        if self.null_terminate and self.output_format.is_quoted:
            raise ConfigError(
                f"Null termination is only supported with the "
                f"'{OutputFormat.BYTE_ARRAY.value}' output format",
                ConfigError.INCOMPATIBLE_OPTION
            )

    @property
    def storage_class(self) -> str:
        return 'static ' if self.static_qualifier else ''

    @classmethod
    def from_dict(cls, settings: Dict[str, Any], **overrides) -> 'EncoderConfig':
        """Build a config from an `encoder` settings section plus overrides."""
        values = {
            'output_format': settings.get('output_format', OutputFormat.BYTE_ARRAY.value),
            'line_width': settings.get('line_width', DEFAULT_LINE_WIDTH),
            'null_terminate': _flag(settings, 'null_terminate'),
            'static_qualifier': _flag(settings, 'static'),
            'declaration_prefix': settings.get('declaration_prefix', DEFAULT_DECLARATION_PREFIX),
        }
        values.update(overrides)
        return cls(**values)
