import os
import socket
import tempfile
import uvicorn
from constants import HOST, LOG_FILE, LOG_LEVEL, PORT, RELOAD, TLS_CA_FILES, TLS_CERT_FILE, TLS_ENABLED, TLS_KEY_FILE
from logging_config import setup_logging

# Setup logging before importing app
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)

from logging_config import get_logger

logger = get_logger(__name__)


def listen_addresses(host: str) -> list[str]:
    """The configured host, plus every local interface address when bound to all of them."""
    addresses = [host]
    if host == "0.0.0.0":
        try:
            infos = socket.getaddrinfo(socket.gethostname(), None)
        except socket.gaierror as e:
            logger.debug(f"Could not resolve local addresses: {e}")
            infos = []
        for info in infos:
            ip = info[4][0]
            if ip not in addresses:
                addresses.append(ip)
    return addresses


def build_ca_bundle(ca_files: list[str]):
    """uvicorn takes a single CA file; concatenate several into one bundle."""
    if not ca_files:
        return None
    if len(ca_files) == 1:
        return ca_files[0]
    bundle = tempfile.NamedTemporaryFile("w", prefix="relay-ca-", suffix=".pem", delete=False)
    with bundle:
        for path in ca_files:
            with open(path) as f:
                bundle.write(f.read().rstrip("\n") + "\n")
    logger.debug(f"Combined {len(ca_files)} CA files into {bundle.name}")
    return bundle.name


def ssl_options() -> dict:
    if not TLS_ENABLED:
        return {}
    return {
        "ssl_certfile": TLS_CERT_FILE,
        "ssl_keyfile": TLS_KEY_FILE,
        "ssl_ca_certs": build_ca_bundle(TLS_CA_FILES),
    }


if __name__ == "__main__":
    scheme = "wss" if TLS_ENABLED else "ws"
    logger.info(f"Starting signal relay on {scheme}://{HOST}:{PORT} (pid {os.getpid()}), addresses: {listen_addresses(HOST)}")
    uvicorn.run("app:app", host=HOST, port=PORT, reload=RELOAD, log_level=LOG_LEVEL.lower(), **ssl_options())
