"""
Blood pressure category classification.
"""
from enum import Enum


class Category(str, Enum):
    NORMAL = 'normal'
    ELEVATED = 'elevated'
    STAGE_1 = 'stage_1'
    STAGE_2 = 'stage_2'
    CRISIS = 'crisis'

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def collapsed_label(self) -> str:
        """Four-level view used by the command line; Stage 2 and Crisis share High-2."""
        return _COLLAPSED_LABELS[self]

    @property
    def css_class(self) -> str:
        return _CSS_CLASSES[self]


_LABELS = {
    Category.NORMAL: 'Normal',
    Category.ELEVATED: 'Elevated',
    Category.STAGE_1: 'Stage 1',
    Category.STAGE_2: 'Stage 2',
    Category.CRISIS: 'Crisis',
}

_COLLAPSED_LABELS = {
    Category.NORMAL: 'Normal',
    Category.ELEVATED: 'Elevated',
    Category.STAGE_1: 'High-1',
    Category.STAGE_2: 'High-2',
    Category.CRISIS: 'High-2',
}

_CSS_CLASSES = {
    Category.NORMAL: 'status-normal',
    Category.ELEVATED: 'status-elevated',
    Category.STAGE_1: 'status-high',
    Category.STAGE_2: 'status-danger',
    Category.CRISIS: 'status-danger',
}


def classify(systolic: int, diastolic: int) -> Category:
    """Classify a blood pressure reading into a category. First match wins."""
    if systolic >= 180 or diastolic >= 120:
        return Category.CRISIS
    if systolic >= 140 or diastolic >= 90:
        return Category.STAGE_2
    if 130 <= systolic < 140 or 80 <= diastolic < 90:
        return Category.STAGE_1
    if 120 <= systolic < 130 and diastolic < 80:
        return Category.ELEVATED
    if systolic < 120 and diastolic < 80:
        return Category.NORMAL
    return Category.NORMAL
