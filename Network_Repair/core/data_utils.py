"""
File utilities for EPANET INP documents.
"""
from pathlib import Path
from typing import List, Optional, Union
from .config import INP_EXTENSION, OUTPUT_SUFFIX

PathLike = Union[str, Path]

_BOM = "\ufeff"


def decode_inp_bytes(raw: bytes) -> str:
    """Decode uploaded or on-disk INP bytes as UTF-8 text.

    Undecodable bytes are replaced rather than rejected; a leading BOM is dropped.
    """
    text = raw.decode("utf-8", errors="replace")
    if text.startswith(_BOM):
        text = text[len(_BOM):]
    return text


def load_inp_text(path: PathLike) -> str:
    """Read an INP file from disk."""
    return decode_inp_bytes(Path(path).read_bytes())


def write_inp_text(text: str, path: PathLike) -> Path:
    """Write a document to disk, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def list_inp_files(path: PathLike) -> List[Path]:
    """Resolve a file or directory argument to a sorted list of INP files.

    A file is returned as-is whatever its extension; a directory is scanned
    (non-recursively) for '*.inp' files, case-insensitive.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No such file or directory: {path}")
    if path.is_file():
        return [path]
    return sorted(p for p in path.iterdir() if p.is_file() and p.suffix.lower() == INP_EXTENSION)


def output_path_for(input_path: PathLike, output_dir: Optional[PathLike] = None,
                    suffix: str = OUTPUT_SUFFIX) -> Path:
    """Where the normalized copy of ``input_path`` is written.

    'net.inp' -> 'net_fixed.inp', next to the input unless ``output_dir`` is given.
    """
    input_path = Path(input_path)
    target_dir = Path(output_dir) if output_dir is not None else input_path.parent
    return target_dir / f"{input_path.stem}{suffix}{INP_EXTENSION}"
