from __future__ import annotations

from pydantic import BaseModel

from .user import GoalsOut


class GoalsCalculation(GoalsOut):
    """Stateless calculation result plus the activity-based protein floor."""
    recommended_protein_g: float
    warnings: list[str] = []


class MacroSplitOut(BaseModel):
    carbs: float
    protein: float
    fat: float
