#!/usr/bin/env python
# =============================================================================
# Application Runner
# =============================================================================
"""
Entry point script for running the JobPilot extraction service.

Host and port default to the API settings and can be overridden on the
command line.

Usage:
    python run.py
    python run.py --reload
    python run.py --host 0.0.0.0 --port 8000
"""

import argparse
import asyncio


async def run_server(host: str, port: int, reload: bool) -> None:
    """
    Run the uvicorn server.

    Args:
        host: Host to bind to.
        port: Port to bind to.
        reload: Enable auto-reload.
    """
    import uvicorn

    config = uvicorn.Config(
        "jobpilot.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    """
    Main entry point that parses arguments and starts uvicorn.
    """
    from jobpilot.config import get_settings

    settings = get_settings()

    # Parse command line arguments
    parser = argparse.ArgumentParser(description="Run the JobPilot extraction service")
    parser.add_argument("--host", default=settings.api_host, help="Host to bind to")
    parser.add_argument("--port", type=int, default=settings.api_port, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    args = parser.parse_args()

    asyncio.run(run_server(args.host, args.port, args.reload))


if __name__ == "__main__":
    main()
