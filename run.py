"""
Server startup script.
Run from project root: python run.py [--host HOST] [--port PORT]

PORT accepts "8080" or ":8080". Defaults come from HOST / PORT in the environment or .env.
"""
import argparse

import uvicorn

import config


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the user CRUD API server.")
    parser.add_argument("--host", default=config.HOST, help="bind address")
    parser.add_argument("--port", default=str(config.PORT), help="running port, e.g. 8080 or :8080")
    parser.add_argument("--reload", action="store_true", help="restart on code changes (development)")
    args = parser.parse_args(argv)
    try:
        args.port = int(str(args.port).lstrip(":"))
    except ValueError:
        parser.error(f"invalid port: {args.port!r}")
    return args


def main(argv=None) -> None:
    args = parse_args(argv)
    uvicorn.run(
        "userapi.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
