from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

BUNDLED_CATALOG = Path(__file__).resolve().parent.parent / "data" / "cars.json"


@dataclass(frozen=True)
class CatalogConfig:
    """
    Where the vehicle catalog is read from.

    ``CARMATCH_CATALOG_PATH`` may point at a JSON (list of records) or CSV
    file; the bundled demo catalog is used otherwise.
    """

    catalog_path: Path = Path(os.getenv("CARMATCH_CATALOG_PATH", str(BUNDLED_CATALOG)))


DEFAULT_CATALOG_CONFIG = CatalogConfig()
