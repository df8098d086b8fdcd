import os

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3000))
RELOAD = os.getenv("RELOAD", "false").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", None)

TLS_CERT_FILE = os.getenv("TLS_CERT_FILE", None)
TLS_KEY_FILE = os.getenv("TLS_KEY_FILE", None)
TLS_CA_FILES = [f.strip() for f in os.getenv("TLS_CA_FILES", "").split(",") if f.strip()]
TLS_ENABLED = bool(TLS_CERT_FILE and TLS_KEY_FILE)

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

ROOM_QUERY_PARAM = "room"

# Signal types on the wire
SIGNAL_MESSAGE = "message"
SIGNAL_CONNECTED = "connected"
SIGNAL_BAD_REQUEST = "bad request"

ROOM_EXISTS_DETAIL = "room has exist"
