"""
core/units.py
────────────────────────────────────────────────────────────────────────
Imperial ⇄ metric helpers for onboarding forms that collect lb / ft-in.
The calculator itself only ever sees kg and cm.
"""

from __future__ import annotations

KG_PER_POUND = 0.45359237
POUNDS_PER_KG = 2.2046226218
CM_PER_INCH = 2.54


def pounds_to_kg(pounds: float) -> float:
    return pounds * KG_PER_POUND


def kg_to_pounds(kg: float) -> float:
    return kg * POUNDS_PER_KG


def feet_inches_to_cm(feet: int, inches: float = 0.0) -> float:
    return (feet * 12 + inches) * CM_PER_INCH


def cm_to_feet_inches(cm: float) -> tuple[int, float]:
    """Whole feet plus the remaining inches (fractional)."""
    total_in = cm / CM_PER_INCH
    feet = int(total_in // 12)
    return feet, total_in - feet * 12


ML_PER_FL_OZ = 29.5735


def fl_oz_to_ml(fl_oz: float) -> float:
    return fl_oz * ML_PER_FL_OZ
