# geoindex/rtree/settings.py
import os

from pydantic import BaseModel, ConfigDict, Field

DEBUG_IDX = os.getenv("RTREE_DEBUG_INDEX", "0").lower() in ("1", "true", "yes")

DEFAULT_BRANCH_FACTOR = 16
DEFAULT_MIN_FILL = 0.4


def min_fill(M: int, ratio: float = DEFAULT_MIN_FILL) -> int:
    """Mínimo de entradas por grupo al partir un nodo de capacidad M."""
    return max(1, int(ratio * M))


class IndexSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    branch_factor: int = Field(DEFAULT_BRANCH_FACTOR, ge=2)
    min_fill_ratio: float = Field(DEFAULT_MIN_FILL, gt=0.0, le=0.5)
    debug: bool = DEBUG_IDX

    @property
    def min_fill(self) -> int:
        return min_fill(self.branch_factor, self.min_fill_ratio)

    def with_branch_factor(self, M: int) -> "IndexSettings":
        # model_copy no valida, por eso se reconstruye
        return IndexSettings(**{**self.model_dump(), "branch_factor": M})


def load_settings() -> IndexSettings:
    """Lee la configuración desde el entorno (RTREE_BRANCH_FACTOR, RTREE_MIN_FILL, RTREE_DEBUG_INDEX)."""
    return IndexSettings(
        branch_factor=os.getenv("RTREE_BRANCH_FACTOR", "") or DEFAULT_BRANCH_FACTOR,
        min_fill_ratio=os.getenv("RTREE_MIN_FILL", "") or DEFAULT_MIN_FILL,
        debug=DEBUG_IDX,
    )
