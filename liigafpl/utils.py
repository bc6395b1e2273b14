"""File I/O helpers for league data."""

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('liigafpl.utils')


def load_json(
    path: Path | str,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Read a JSON data file, optionally validating it with a pydantic model.

    Args:
        path: File to read
        schema: Pydantic model the top-level object must satisfy

    Returns:
        The decoded JSON, or a schema instance when schema is given

    Raises:
        FileNotFoundError: If the file is missing
        json.JSONDecodeError: If the file is not valid JSON
        ValueError: If schema validation fails

    Example:
        from liigafpl.schemas import PlayersFile
        catalog = load_json('data/players.json', schema=PlayersFile)
    """
    path = Path(path)
    logger.debug(f'Reading {path}')

    if not path.exists():
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
        raise json.JSONDecodeError(f'Invalid JSON in {path}: {e.msg}', e.doc, e.pos) from e

    if schema is None:
        return data

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'Schema validation failed for {path}: {e}')
        raise ValueError(f'Schema validation failed for {path}:\n{e}') from e


def save_json(path: Path | str, data: Any, indent: int = 2) -> None:
    """
    Write data to a JSON file, creating parent directories as needed.

    Pydantic models are dumped by alias so the file keeps the stored key names.

    Raises:
        TypeError: If data is not JSON-serializable
        OSError: If the file cannot be written
    """
    path = Path(path)
    logger.debug(f'Writing {path}')

    path.parent.mkdir(parents=True, exist_ok=True)
    json_data = data.model_dump(by_alias=True) if isinstance(data, BaseModel) else data

    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(json_data, f, indent=indent, ensure_ascii=False)
    except TypeError as e:
        logger.error(f'Data is not JSON-serializable: {e}')
        raise TypeError(f'Data is not JSON-serializable: {e}') from e
    except OSError as e:
        logger.error(f'Failed to write file {path}: {e}')
        raise
