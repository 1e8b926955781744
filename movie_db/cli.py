"""
Command-line interface for the movie store.

Provides commands for:
- setup: Connect and create the unique title index
- status: Show movie and review counts
- serve: Run the REST API with uvicorn
"""

import argparse
import sys
from typing import Optional

from .config import Config
from .database import TITLE_INDEX, MovieStore
from .utils import format_number, print_header, print_status_table


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all commands."""
    parser = argparse.ArgumentParser(
        prog="movie_db",
        description="Movie Review API - manage the movie store and run the API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Setup (run first)
  python -m movie_db setup

  # Check status
  python -m movie_db status

  # Run the API on port 8080
  python -m movie_db serve --port 8080
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "setup",
        help="Create the indexes the API relies on",
    )

    subparsers.add_parser(
        "status",
        help="Show current database status",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the REST API",
    )
    serve_parser.add_argument(
        "--host",
        help="Host to bind (default: API_HOST or 0.0.0.0)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on (default: PORT or 3000)",
    )
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Reload on code changes (development only)",
    )

    return parser


def cmd_setup(store: MovieStore) -> int:
    """Run setup command."""
    print_header("Movie Store Setup")

    store.connect()
    store.ensure_indexes()

    print(f"\n  {TITLE_INDEX:<20} READY")
    print("\nSetup complete!")
    return 0


def cmd_status(store: MovieStore) -> int:
    """Run status command."""
    print_header("Movie Store Status")

    status = store.get_status()

    print_status_table(
        {
            "Movies": format_number(status["movies"]),
            "Reviews": format_number(status["reviews"]),
        },
        title="Database Status",
    )
    return 0


def cmd_serve(config: Config, args) -> int:
    """Run the API under uvicorn."""
    import uvicorn

    host = args.host or config.api_host
    port = args.port or config.api_port

    print_header("Movie Review API")
    print(f"Listening on http://{host}:{port}")
    print(f"API docs:    http://{host}:{port}/api-docs\n")

    uvicorn.run("api.main:app", host=host, port=port, reload=args.reload)
    return 0


def main(args: Optional[list] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 0

    # Load configuration
    try:
        config = Config.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}")
        print("\nMake sure your .env file contains:")
        print("  MONGODB_URI=mongodb://<host>:27017/<database>")
        return 1

    # Route to command handler
    try:
        if parsed_args.command == "setup":
            return cmd_setup(MovieStore(config))
        elif parsed_args.command == "status":
            return cmd_status(MovieStore(config))
        elif parsed_args.command == "serve":
            return cmd_serve(config, parsed_args)
        else:
            parser.print_help()
            return 0

    except KeyboardInterrupt:
        print("\n\nOperation cancelled.")
        return 130
    except Exception as e:
        print(f"\nError: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
