#!/usr/bin/env python3
"""Run the Configured Sinks web application."""
import argparse

import uvicorn

import config


def run_server(host: str, port: int, reload: bool):
    """Run the uvicorn server."""
    uvicorn.run(
        "app.main:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--host", default=config.WEB_HOST)
    parser.add_argument("--port", type=int, default=config.WEB_PORT)
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload")
    args = parser.parse_args()

    run_server(args.host, args.port, reload=not args.no_reload)
