"""
Valori di dominio separati dalla configurazione operativa.

Questo modulo contiene i vocabolari usati dall'app (tipi, stati, responsabili
dei pagamenti, etichette dei mesi) che non dovrebbero essere miscelati con
le impostazioni del runtime (DB, SECRET_KEY, flags, ecc.).
"""

# Tipi di transazione
ENTRADA = 'ENTRADA'
SAIDA = 'SAIDA'
TIPI_TRANSAZIONE = (ENTRADA, SAIDA)

# Stati del ciclo di vita
PAGO = 'PAGO'
PENDENTE = 'PENDENTE'
ATRASADO = 'ATRASADO'
AGUARDANDO = 'AGUARDANDO'

STATI_PER_TIPO = {
    ENTRADA: (AGUARDANDO, PAGO, ATRASADO),
    SAIDA: (PENDENTE, PAGO, ATRASADO),
}

# Responsabili dei pagamenti (solo SAIDA)
PAGATORI = ('Alex', 'André', 'Bruno', 'Karol')

# Clienti
STATI_CLIENTE = ('ATIVO', 'INATIVO', 'SUSPENSO')

# Utenti
RUOLI_UTENTE = ('ADMIN', 'VIEWER')
STATI_UTENTE = ('ATIVO', 'SUSPENSO')
PASSWORD_DEFAULT = '123'

# Etichette dei mesi per la dashboard (gennaio = indice 0)
MESI = ['JAN', 'FEV', 'MAR', 'ABR', 'MAI', 'JUN', 'JUL', 'AGO', 'SET', 'OUT', 'NOV', 'DEZ']

# Lunghezza massima della descrizione di una transazione (colonna String(200))
LUNGHEZZA_DESCRIZIONE = 200
