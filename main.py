"""Nightfall - entry point for running the game server."""

import sys
import traceback

from nightfall.config import ServerSettings
from nightfall.main import start_server

if __name__ == "__main__":
    settings = ServerSettings.from_env()
    print(f"=== main.py starting server on {settings.host}:{settings.port} ===", file=sys.stderr)
    try:
        start_server(settings)
        print("=== main.py server finished normally ===", file=sys.stderr)
    except Exception as e:
        print(f"=== main.py server crashed with error: {e} ===", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        sys.exit(1)
