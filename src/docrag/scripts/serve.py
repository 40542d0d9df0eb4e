"""Script to serve the DocRAG API."""

import argparse

import uvicorn

from docrag.config import get_settings


def main():
    """Run the API server."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Serve the DocRAG API")
    parser.add_argument("--host", default=settings.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="Listen port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    print(f"DocRAG on :{args.port}")

    uvicorn.run(
        "docrag.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
