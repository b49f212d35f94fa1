"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
MIN_PASSWORD_LENGTH = 6

MIN_PLANTAO_YEAR = 2020
MAX_PLANTAO_YEAR = 2100

GENERIC_ERROR_MESSAGE = "Erro interno do servidor"

# column sizes in database/schema.sql
MAX_TITLE_LENGTH = 200
MAX_LOCATION_LENGTH = 255
MAX_NAME_LENGTH = 160
MAX_EMAIL_LENGTH = 190
