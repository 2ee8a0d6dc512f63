"""
Configuration for coordinate display.

The preferred format is a value the caller passes in, never module state.
FormatOptions is what the formatter consumes; CoordinateConfig is the
file-backed form a host application loads at start-up.

Example YAML:

    coordinates:
      default_format: mgrs
      compact: false
      precision:
        dd: 5
        mgrs: 4
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional
import logging

import yaml

from geocoords.models import MAX_PRECISION, FormatKind

logger = logging.getLogger(__name__)

DEFAULT_PRECISION: dict[FormatKind, int] = {
    FormatKind.DD: 4,
    FormatKind.DMS: 1,
    FormatKind.DDM: 3,
    FormatKind.UTM: 0,
    FormatKind.MGRS: MAX_PRECISION,
}

MAX_DECIMALS = 10


def parse_format_kind(value: Any) -> FormatKind:
    """Parse a format identifier ('dd', 'DMS', FormatKind.UTM, ...) into FormatKind.

    Raises:
        ValueError: If value is not a known format
    """
    if isinstance(value, FormatKind):
        return value
    try:
        return FormatKind(str(value).strip().lower())
    except ValueError:
        valid_formats = [k.value for k in FormatKind]
        raise ValueError(
            f"Invalid coordinate format '{value}'. "
            f"Must be one of: {', '.join(valid_formats)}"
        ) from None


def _validate_precision(kind: FormatKind, precision: Any) -> int:
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise ValueError(
            f"Precision for '{kind.value}' must be an integer, got {type(precision).__name__}"
        )
    upper = MAX_PRECISION if kind is FormatKind.MGRS else MAX_DECIMALS
    if not 0 <= precision <= upper:
        raise ValueError(
            f"Precision for '{kind.value}' must be in range [0, {upper}], got {precision}"
        )
    return precision


@dataclass(frozen=True)
class FormatOptions:
    """Immutable formatting request.

    Attributes:
        kind: Target format
        compact: Drop spaces/commas between tokens
        precision: Format-specific precision, or None for the default
    """

    kind: FormatKind = FormatKind.DD
    compact: bool = False
    precision: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, 'kind', parse_format_kind(self.kind))
        if self.precision is not None:
            _validate_precision(self.kind, self.precision)


@dataclass(frozen=True)
class CoordinateConfig:
    """Display configuration loaded from YAML or built from a dict.

    Attributes:
        default_format: Format used when the caller does not name one
        compact: Default compact flag
        precision: Per-format precision overrides
    """

    default_format: FormatKind = FormatKind.DD
    compact: bool = False
    precision: dict[FormatKind, int] = field(default_factory=dict)

    def precision_for(self, kind: FormatKind) -> int:
        return self.precision.get(kind, DEFAULT_PRECISION[kind])

    def options(self, kind: Optional[FormatKind] = None) -> FormatOptions:
        """Build FormatOptions for kind (or the default format)."""
        kind = self.default_format if kind is None else parse_format_kind(kind)
        return FormatOptions(kind=kind, compact=self.compact, precision=self.precision_for(kind))

    @classmethod
    def from_dict(cls, config: dict) -> 'CoordinateConfig':
        """Create configuration from a dictionary.

        Args:
            config: Dictionary with optional keys 'default_format', 'compact'
                and 'precision' (mapping of format name to integer)

        Raises:
            ValueError: If any value is invalid
        """
        if not isinstance(config, dict):
            raise ValueError(f"Configuration must be a dictionary, got {type(config)}")

        default_format = parse_format_kind(config.get('default_format', FormatKind.DD.value))

        compact = config.get('compact', False)
        if not isinstance(compact, bool):
            raise ValueError(f"'compact' must be a boolean, got {type(compact)}")

        precision = {}
        raw_precision = config.get('precision') or {}
        if not isinstance(raw_precision, dict):
            raise ValueError(f"'precision' must be a mapping, got {type(raw_precision)}")
        for key, value in raw_precision.items():
            kind = parse_format_kind(key)
            precision[kind] = _validate_precision(kind, value)

        unknown = set(config) - {'default_format', 'compact', 'precision'}
        if unknown:
            logger.warning("Ignoring unknown coordinate config keys: %s", sorted(unknown))

        return cls(default_format=default_format, compact=compact, precision=precision)

    @classmethod
    def from_yaml(cls, path: str) -> 'CoordinateConfig':
        """Load configuration from the 'coordinates' section of a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is empty, malformed or has invalid values
        """
        config_path = Path(path)

        if not config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {path}\n"
                f"Please create a configuration file or use get_default_config()"
            )

        try:
            with open(config_path, 'r') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML configuration file: {e}") from e

        if not data:
            raise ValueError(
                f"Configuration file is empty: {path}\n"
                f"Expected a 'coordinates' section"
            )

        if 'coordinates' not in data:
            raise ValueError(
                f"Configuration file missing 'coordinates' section: {path}\n"
                f"Expected structure: coordinates:\n  default_format: ...\n  ..."
            )

        return cls.from_dict(data['coordinates'])

    def to_dict(self) -> dict:
        """Convert to a dictionary suitable for YAML serialization."""
        return {
            'default_format': self.default_format.value,
            'compact': self.compact,
            'precision': {kind.value: value for kind, value in self.precision.items()},
        }

    def to_yaml(self, path: str) -> None:
        """Write the configuration under a 'coordinates' section."""
        with open(path, 'w') as f:
            yaml.safe_dump({'coordinates': self.to_dict()}, f, default_flow_style=False)


def get_default_config() -> CoordinateConfig:
    """Default configuration: decimal degrees, spaced, default precisions."""
    return CoordinateConfig()
