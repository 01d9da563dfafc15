"""Member × member affinity grid for heatmap rendering."""

from __future__ import annotations

from pydantic import BaseModel, Field

from lib_zodiac.engine.matrix import AffinityMatrix
from lib_zodiac.engine.scorer import CompatibilityLevel
from lib_zodiac.zodiac_types import Member


LEVEL_COLORS: dict[CompatibilityLevel, str] = {
    CompatibilityLevel.EXCELLENT: "#4CAF50",
    CompatibilityLevel.GOOD: "#8BC34A",
    CompatibilityLevel.MODERATE: "#FFC107",
    CompatibilityLevel.CHALLENGING: "#FF9800",
    CompatibilityLevel.DIFFICULT: "#F44336",
}


class HeatmapCell(BaseModel):
    value: int = Field(ge=0, le=100)
    level: CompatibilityLevel
    color: str


class AffinityHeatmap(BaseModel):
    row_labels: list[str]
    column_labels: list[str]
    matrix: list[list[HeatmapCell]]

    def values(self) -> list[list[int]]:
        """Plain score grid, e.g. for ``plotly`` ``z=``."""
        return [[cell.value for cell in row] for row in self.matrix]


def build_heatmap(members: list[Member], matrix: AffinityMatrix) -> AffinityHeatmap:
    """Square grid of sign-pair scores; the diagonal is the self-pair score."""
    labels = [f"{m.display_name} ({m.sign})" for m in members]
    rows: list[list[HeatmapCell]] = []
    for ma in members:
        row: list[HeatmapCell] = []
        for mb in members:
            entry = matrix.lookup(ma.sign, mb.sign)
            row.append(HeatmapCell(
                value=entry.overall_score,
                level=entry.level,
                color=LEVEL_COLORS[entry.level],
            ))
        rows.append(row)
    return AffinityHeatmap(row_labels=labels, column_labels=list(labels), matrix=rows)
