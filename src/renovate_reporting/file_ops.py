"""
File operations for report sinks.
"""

from pathlib import Path
from typing import Union

from .exceptions import FileAccessError


def write_system_file(path: Union[str, Path], content: str, encoding: str = "utf-8") -> Path:
    """
    Create or overwrite a file, creating parent directories as needed.

    Args:
        path: Destination file
        content: Text to write
        encoding: Text encoding

    Returns:
        The path written

    Raises:
        FileAccessError: On permission, disk or other OS errors
    """
    filepath = Path(path)
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(content, encoding=encoding)
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")
    return filepath
