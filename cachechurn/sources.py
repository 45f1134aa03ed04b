"""Discovery and decoding of CSV log dumps."""

import csv
import os
import sys
from pathlib import Path
from typing import Iterator, List

from .errors import SourceError


def find_csv_files(directory: str) -> List[Path]:
    """List ``.csv`` files directly inside ``directory``, sorted by name."""
    try:
        names = os.listdir(directory)
    except OSError as e:
        raise SourceError(f"Cannot read directory {directory}: {e}") from e
    paths = [Path(directory) / name for name in sorted(names)]
    return [p for p in paths if p.suffix == ".csv" and p.is_file()]


def read_blocks(path: Path) -> Iterator[str]:
    """Yield one text block per CSV record, its fields joined as-is.

    The first row is a header and is not yielded. A single field may hold a
    whole cache section, so the field size is not limited.
    """
    csv.field_size_limit(sys.maxsize)
    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        try:
            next(reader, None)
            for record in reader:
                yield "".join(record)
        except (csv.Error, UnicodeDecodeError) as e:
            raise SourceError(f"Cannot decode {path}: {e}") from e
