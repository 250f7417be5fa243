from dataclasses import dataclass, field
from pathlib import Path

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class SeedConfig:
    """
    Configuration for catalog seeding.
    """

    sources: tuple[Path, ...] = field(
        default_factory=lambda: (_DATA_DIR / "sample_products.json",)
    )
    default_category: str = "General"
    default_stock: int = 100
    default_rating: float = 4.5
    default_image: str = "https://via.placeholder.com/400"


DEFAULT_SEED_CONFIG = SeedConfig()
