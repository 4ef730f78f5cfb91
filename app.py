import logging
import os
import socket

from table_browser.logging_config import configure_logging
from table_browser.ui.dash_app import create_dash_app

configure_logging()
logger = logging.getLogger("table_browser.app")

app = create_dash_app(os.getenv("TABLE_BROWSER_CONFIG", "config"))
server = app.server


def find_free_port(start_port: int, attempts: int = 100) -> int:
    """First port in [start_port, start_port + attempts) nobody is listening on."""
    for port in range(start_port, start_port + attempts):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            if s.connect_ex(("localhost", port)) != 0:
                return port
    return start_port


def main() -> None:
    preferred_port = int(os.getenv("PORT", "8050"))
    port = find_free_port(preferred_port)
    if port != preferred_port:
        logger.warning(
            "Preferred port taken, using next free one",
            extra={"preferred_port": preferred_port, "port": port},
        )

    app.run(host="0.0.0.0", port=port, debug=os.getenv("DEBUG", "0") == "1")


if __name__ == "__main__":
    main()
