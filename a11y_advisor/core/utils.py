import re
import uuid
from pathlib import Path

_SCHEME = re.compile(r"^https?://", re.IGNORECASE)


def report_filename(url: str) -> str:
    """'https://a.com/x/y' -> 'a.com_x_y.json'"""
    return _SCHEME.sub("", url, count=1).replace("/", "_") + ".json"


def new_batch_dir(output_dir: Path) -> Path:
    """Fresh per-batch directory so concurrent batches never share report files."""
    batch_dir = output_dir / uuid.uuid4().hex
    batch_dir.mkdir(parents=True, exist_ok=False)
    return batch_dir
