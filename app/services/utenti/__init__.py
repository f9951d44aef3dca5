from .utenti_service import *  # noqa: F401,F403
from .sessione import *  # noqa: F401,F403
