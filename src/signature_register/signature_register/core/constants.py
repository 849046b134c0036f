"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

DEFAULT_EMAIL_DOMAIN = "@cine-tv.edu.it"

# Key used by the original browser store; the local adapter keeps it as file name.
SIGNATURES_STORAGE_KEY = "collegio-docenti-signatures"

EXPORT_HEADER = ("Cognome", "Nome", "Email", "Data e Ora della Firma")
EXPORT_FILENAME_PREFIX = "firme_collegio_docenti"

DEFAULT_NOTICE_SECONDS = 5

# dd/mm/yy, HH:MM:SS (Italian short date + medium time)
TIMESTAMP_FORMAT = "%d/%m/%y, %H:%M:%S"
