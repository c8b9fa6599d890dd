"""Writing rendered documents to disk."""

import logging
from pathlib import Path
from typing import Optional, Union

from contractor_tracker.exceptions import ExportError

logger = logging.getLogger(__name__)


def write_document(
    data: bytes,
    filename: str,
    export_dir: Union[str, Path] = ".",
    output: Optional[Union[str, Path]] = None,
) -> Path:
    """
    Write document bytes to ``output`` or to ``export_dir/filename``.

    Args:
        data: Rendered document
        filename: Default file name
        export_dir: Directory used when no explicit output path is given
        output: Explicit output path

    Returns:
        Path of the written file

    Raises:
        ExportError: If the file cannot be written
    """
    path = Path(output) if output else Path(export_dir).expanduser() / filename

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise ExportError(
            f"Failed to write {path}: {e}",
            recovery_hint="Check that the export directory exists and is writable",
        ) from e

    logger.info(f"Wrote {len(data)} bytes to {path}")
    return path
