"""Package per le view delle transazioni."""
from .transazioni import transazioni_bp  # noqa: F401
from .dashboard import dashboard_bp  # noqa: F401
