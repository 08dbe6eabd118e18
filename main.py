"""
main.py

Flask backend for CodeDrop, an ephemeral file-sharing relay.

Dependencies:
  - Python packages: Flask, flask-restx, flask-cors

Notes:
  - Share state lives in process memory; a restart drops every share
  - API endpoints available at /api/ with Swagger docs at /api/docs
  - Uses application factory pattern for better testability
"""

import logging
import os

from app_factory import create_app
from codedrop.config.settings import AppConfig

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

config = AppConfig()
app = create_app(config)


def run() -> None:
    app.run(host=config.host, port=config.port, debug=config.debug, threaded=True)


if __name__ == "__main__":
    run()
