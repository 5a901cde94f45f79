import os

from dotenv import load_dotenv

load_dotenv()

API_BASE = os.getenv("MEDIMATCH_API_URL", "http://127.0.0.1:8000").rstrip("/")
HTTP_TIMEOUT = float(os.getenv("MEDIMATCH_HTTP_TIMEOUT", "15"))
