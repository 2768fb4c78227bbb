"""Flat JSON file access for market news files and the top-news index."""
from pathlib import Path
from typing import Any, List, Union
import asyncio
import json
import logging

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def list_news_files(news_dir: PathLike) -> List[str]:
    """
    List market news file names in news_dir.

    Args:
        news_dir: Directory holding one <marketId>.json per market

    Returns:
        Sorted file names (not paths)

    Raises:
        FileNotFoundError: If news_dir does not exist
    """
    directory = Path(news_dir)
    if not directory.is_dir():
        raise FileNotFoundError(f"News directory not found: {directory}")

    return sorted(p.name for p in directory.iterdir() if p.name.endswith(".json") and p.is_file())


def _read(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _write(path: Path, data: Any) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(json.dumps(data, indent=2, ensure_ascii=False))


async def read_json(path: PathLike) -> Any:
    """Read and parse a JSON file without blocking the event loop."""
    return await asyncio.to_thread(_read, Path(path))


async def write_json(path: PathLike, data: Any) -> None:
    """Write data as 2-space indented JSON without blocking the event loop."""
    await asyncio.to_thread(_write, Path(path), data)
    logger.debug(f"Wrote {path}")
