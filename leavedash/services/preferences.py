"""
Process-wide UI preference store.

Preferences are plain strings keyed by name (``sidebar_state`` -> ``"true"``).
Callers load a value with a default and save it back explicitly; nothing is
cached between calls.
"""

from typing import Optional

from sqlalchemy.orm import Session

from leavedash.models.ui_preference import UIPreference

SIDEBAR_STATE = "sidebar_state"

# Sidebar starts closed until the user opens it once
DEFAULT_PREFERENCES = {
    SIDEBAR_STATE: "false",
}


def load_preference(db: Session, key: str, default: Optional[str] = None) -> Optional[str]:
    preference = db.query(UIPreference).filter(UIPreference.key == key).first()
    if preference is None:
        return default
    return preference.value


def save_preference(db: Session, key: str, value: str) -> UIPreference:
    preference = db.query(UIPreference).filter(UIPreference.key == key).first()
    if preference is None:
        preference = UIPreference(key=key, value=value)
        db.add(preference)
    else:
        preference.value = value

    db.commit()
    db.refresh(preference)
    return preference
