"""Run the relay with uvicorn: `python -m livescribe`."""

from __future__ import annotations

import os

import uvicorn

from livescribe.runtime.settings import load_env_files
from livescribe.config.server import ENV_HOST, ENV_PORT, DEFAULT_HOST, DEFAULT_PORT


def main() -> None:
    load_env_files()
    host = (os.getenv(ENV_HOST) or "").strip() or DEFAULT_HOST
    try:
        port = int((os.getenv(ENV_PORT) or "").strip() or DEFAULT_PORT)
    except ValueError:
        port = DEFAULT_PORT
    uvicorn.run("livescribe.server:app", host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
