"""Display preferences (light/dark theme)."""
from family.infra.Key_Value_Store import KeyValueStore
from family.utilities.constants import STORAGE_KEYS, THEMES
from family.utilities.errors import ValidationError


class PreferenceRepository:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def get_theme(self) -> str:
        theme = self.store.get_json(STORAGE_KEYS["THEME"], "light")
        return theme if theme in THEMES else "light"

    def set_theme(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValidationError({"theme": f"Theme must be one of {', '.join(THEMES)}"})
        self.store.set_json(STORAGE_KEYS["THEME"], theme)
        return theme

    def toggle_theme(self) -> str:
        return self.set_theme("dark" if self.get_theme() == "light" else "light")
