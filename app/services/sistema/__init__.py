from .backup_service import *  # noqa: F401,F403
