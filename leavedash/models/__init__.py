# Import all models here so Base.metadata knows about them
from leavedash.models.ui_preference import UIPreference

__all__ = [
    "UIPreference",
]
