"""Script per la riconciliazione delle contas a pagar scadute:
- tutte le uscite PENDENTE senza data di pagamento e con scadenza passata
  diventano ATRASADO, con un solo aggiornamento in blocco
- la lista viene poi ricaricata tramite VistaTransazioni e viene stampato il
  totale delle uscite in ritardo

Uso: eseguire nello stesso ambiente dell'app Flask (usa create_app()).
Opzioni:
  --data YYYY-MM-DD : data da considerare come "oggi" (default: oggi nel fuso APP_TIMEZONE)
  --dry-run         : mostra le transazioni che verrebbero aggiornate senza scrivere
"""
import argparse
import sys
from app import create_app


def main(argv=None):
    parser = argparse.ArgumentParser(description='Segna come ATRASADO le contas a pagar scadute')
    parser.add_argument('--data', default=None, help='Data di riferimento YYYY-MM-DD (default: oggi)')
    parser.add_argument('--dry-run', action='store_true', help='Elenca le transazioni scadute senza aggiornarle')
    parser.add_argument('--config', default='default', help='Configurazione da usare (default, testing)')
    args = parser.parse_args(argv)

    app = create_app(args.config)
    with app.app_context():
        from app.services.transazioni.transazioni_service import TransazioneService
        from app.services.transazioni.vista_service import VistaTransazioni
        from app.defaults import SAIDA, ATRASADO
        from app.services.transazioni.stato_service import oggi_app, seleziona_scadute
        from app.utils import ValidationUtils
        from app.utils.formatting import format_currency, format_data

        try:
            oggi = ValidationUtils.validate_date(args.data) if args.data else oggi_app()
        except ValueError as e:
            print(f"Errore: {e}")
            return 2

        service = TransazioneService()
        if args.dry_run:
            success, righe = service.carica_transazioni()
            if not success:
                print(f"Errore nel caricamento delle transazioni: {righe}")
                return 1
            scadute = seleziona_scadute(righe, oggi)
            for r in scadute:
                print(f"  {format_data(r['date'])}  {format_currency(r['amount'])}  {r['description']}")
            print(f"{len(scadute)} transazioni verrebbero segnate come ATRASADO (oggi={oggi})")
            return 0

        vista = VistaTransazioni(service)
        success, message, numero = vista.aggiorna_scadute(oggi)
        print(message)
        if numero:
            # dopo una riconciliazione la vista è già stata ricaricata
            in_ritardo = [r for r in vista.per_tipo(SAIDA) if r['status'] == ATRASADO]
            totale = sum(r['amount'] for r in in_ritardo)
            print(f"Uscite in ritardo: {len(in_ritardo)} per {format_currency(totale)}")
        return 0 if success else 1


if __name__ == '__main__':
    sys.exit(main())
