"""Shim package per i servizi legati alle transazioni."""
from .stato_service import *  # noqa: F401,F403
from .rate_service import *  # noqa: F401,F403
from .riepilogo_service import *  # noqa: F401,F403
from .transazioni_service import *  # noqa: F401,F403
from .vista_service import *  # noqa: F401,F403
