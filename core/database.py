"""
Single import surface for storage helpers used by the web layer.
"""
from core.db.schema import clear_all, init_db
from core.db.users import *  # noqa: F401,F403
from core.db.users import __all__ as _users_all
from core.db.wellness import *  # noqa: F401,F403
from core.db.wellness import __all__ as _wellness_all
from core.db.media import *  # noqa: F401,F403
from core.db.media import __all__ as _media_all

__all__ = ["init_db", "clear_all", *_users_all, *_wellness_all, *_media_all]
