from blog_api.configs.settings import (
    CONFIG_MAP,
    Argon2Params,
    Settings,
    pool_kwargs,
    settings,
)

__all__ = [
    "Argon2Params",
    "CONFIG_MAP",
    "Settings",
    "pool_kwargs",
    "settings",
]
