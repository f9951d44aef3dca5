# I modelli concreti sono definiti nei singoli file
# per evitare import circolari con `app.db`.

# Import esplicito dei modelli per assicurare che siano registrati quando l'app importa
from app.models.Transazioni import Transazioni  # noqa: F401
from app.models.Clienti import Clienti  # noqa: F401
from app.models.Utenti import Utenti  # noqa: F401
