"""Entry point per l'applicazione.

Questo script avvia l'app Flask e può inizializzare il database se
la variabile d'ambiente `INIT_DB` è impostata (es. INIT_DB=1).
"""

import os
from app import create_app


def init_database():
    """Crea l'amministratore iniziale (password predefinita) se non esiste nessun utente.
    Eseguita solo quando INIT_DB=1 per evitare side-effect non voluti in produzione.
    """
    from app.services.utenti.utenti_service import UtentiService

    success, message, utente = UtentiService().assicura_admin()
    print(message if not success else f"Creato utente {utente['email']}")


def main():
    app = create_app()

    # Optional DB init (usare solo in fase di provisioning)
    if os.environ.get('INIT_DB') == '1':
        with app.app_context():
            init_database()

    app.run(host=app.config.get('HOST', '0.0.0.0'), port=app.config.get('PORT', 5001), debug=False)


if __name__ == '__main__':
    main()
