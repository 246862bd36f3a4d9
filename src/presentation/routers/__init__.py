"""HTTP routers."""

from src.presentation.routers.auth import auth_router
from src.presentation.routers.me import me_router
from src.presentation.routers.pages import pages_router
from src.presentation.routers.system import system_router

__all__ = ["auth_router", "me_router", "pages_router", "system_router"]
