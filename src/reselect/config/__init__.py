from .settings import ReselectSettings, get_settings

__all__ = [
    "ReselectSettings",
    "get_settings",
]
