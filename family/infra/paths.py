from pathlib import Path

from family.utilities.config import DATA_DIR as _DATA_DIR, STORE_FILE as _STORE_FILE

# Centralized paths for data files (single source of truth)
DATA_DIR: Path = _DATA_DIR.resolve()
STORE_FILE: Path = _STORE_FILE.resolve()
EXPORTS_DIR: Path = DATA_DIR / 'exports'

__all__ = ['DATA_DIR', 'STORE_FILE', 'EXPORTS_DIR']
