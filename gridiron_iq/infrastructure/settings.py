import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./gridiron_iq.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Started attempts older than this are swept to "abandoned".
ATTEMPT_ABANDON_AFTER_MINUTES = int(os.getenv("ATTEMPT_ABANDON_AFTER_MINUTES", "1440"))

PROGRESS_HISTORY_LIMIT = 10
