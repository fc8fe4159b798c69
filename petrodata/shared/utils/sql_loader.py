from pathlib import Path
from typing import Dict


def load_sql(path: str) -> Dict[str, str]:
    """Load named queries from a ``-- name: <query>`` delimited SQL file."""
    blocks = Path(path).read_text(encoding="utf-8").split("-- name: ")
    return {
        b.split("\n", 1)[0].strip(): b.split("\n", 1)[1].strip()
        for b in blocks if b.strip()
    }
