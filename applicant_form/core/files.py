"""
File helpers shared by the upload validators: the extension to media type
registry, metric size conversion and human-readable size formatting.
"""

from typing import Dict, Iterable, List, Union

from .exceptions import ConfigurationError

# Extension -> accepted media types
MIME_TYPES_BY_EXTENSION: Dict[str, List[str]] = {
    ".pdf": ["application/pdf"],
    ".doc": ["application/msword"],
    ".docx": [
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    ],
    ".txt": ["text/plain"],
    ".png": ["image/png"],
    ".jpg": ["image/jpeg"],
    ".jpeg": ["image/jpeg"],
}

# Binary multiples, so 1 MB is 1024 * 1024 bytes
SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]
_UNIT_FACTORS = {unit: 1024**power for power, unit in enumerate(SIZE_UNITS)}


def convert_metrics_to_bytes(value: Union[int, float], unit: str) -> int:
    """
    Converts a size expressed in a metric unit to a whole number of bytes.

    Args:
        value: The amount, e.g. 10
        unit: One of B, KB, MB, GB, TB (case insensitive)

    Returns:
        The size in bytes

    Raises:
        ConfigurationError: If the unit is unknown or the value is negative
    """
    factor = _UNIT_FACTORS.get(unit.upper())
    if factor is None:
        raise ConfigurationError(
            f"Unknown size unit: {unit}", details={"allowed_units": SIZE_UNITS}
        )
    if value < 0:
        raise ConfigurationError("Size cannot be negative", details={"value": value})
    return int(value * factor)


def get_formatted_file_size(size_in_bytes: int) -> str:
    """Formats a byte count as e.g. "10 MB", "1.5 KB" or "0 B"."""
    size = float(size_in_bytes)
    unit = SIZE_UNITS[0]
    for unit in SIZE_UNITS:
        if size < 1024 or unit == SIZE_UNITS[-1]:
            break
        size /= 1024

    formatted = f"{size:.2f}".rstrip("0").rstrip(".")
    return f"{formatted} {unit}"


def get_mime_types(extensions: Iterable[str]) -> List[str]:
    """
    Returns the media types accepted for the given extensions, in order and
    without duplicates.

    Raises:
        ConfigurationError: If an extension is not in the registry
    """
    mime_types: List[str] = []
    for extension in extensions:
        known = MIME_TYPES_BY_EXTENSION.get(extension.lower())
        if known is None:
            raise ConfigurationError(f"Unsupported file extension: {extension}")
        for mime_type in known:
            if mime_type not in mime_types:
                mime_types.append(mime_type)
    return mime_types
