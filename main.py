#!/usr/bin/env python3
"""
canvasapi - Block-tree canvas documents

Command-line entry point. Imports Markdown files as canvases and inspects,
lists and deletes stored canvases.
"""

import logging
import sys
import argparse
from pathlib import Path

from canvasapi.config import config
from canvasapi.database import DatabaseManager
from canvasapi.errors import CanvasNotFound
from canvasapi.models import Canvas
from canvasapi.services import CanvasService


def setup_logging():
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )


def build_service(db: DatabaseManager) -> CanvasService:
    """Create a canvas service over an open database using configured settings."""
    return CanvasService(
        db,
        global_template_source_id=config.global_template_source_id,
        web_base_url=config.web_base_url,
        create_notify_delay=config.notification_create_delay
    )


def print_canvas(canvas: Canvas):
    """Print a short description of a canvas."""
    print(f"{canvas.id}  {canvas.title() or '(untitled)'}")
    summary = canvas.summary(config.summary_length)
    if summary:
        print(f"    {summary}")


def run_import(service: CanvasService, args) -> int:
    """Create a canvas from a Markdown file."""
    markdown_path = Path(args.file)
    if not markdown_path.is_file():
        print(f"File not found: {markdown_path}")
        return 1

    params = {
        "markdown": markdown_path.read_text(encoding="utf-8"),
        "is_template": args.is_template,
        "link_access": args.link_access
    }
    template = {"id": args.template, "type": "canvas"} if args.template else None

    result = service.create(params, creator_id=args.creator, team_id=args.team, template=template)
    if not result.ok:
        for field, messages in result.errors.items():
            print(f"{field}: {', '.join(messages)}")
        return 1

    print_canvas(result.canvas)
    return 0


def run_show(service: CanvasService, args) -> int:
    """Print a canvas document as JSON."""
    canvas = service.fetch(args.id, team_id=args.team)
    print(canvas.model_dump_json(by_alias=True, indent=2))
    return 0


def run_list(service: CanvasService, args) -> int:
    """List a user's canvases or templates."""
    canvases = service.list(args.creator, only_templates=args.templates)
    for canvas in canvases:
        print_canvas(canvas)
    logging.info(f"Listed {len(canvases)} canvases for {args.creator}")
    return 0


def run_delete(service: CanvasService, args) -> int:
    """Delete a canvas."""
    canvas = service.delete(args.id, team_id=args.team)
    if canvas is None:
        raise CanvasNotFound(args.id)
    print(f"Deleted {canvas.id}")
    return 0


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="canvasapi - Block-tree canvas documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py import notes.md --team T1 --creator U1            # Create a canvas from Markdown
  python main.py import notes.md --team T1 --creator U1 --template ID
  python main.py show ID --team T1                                 # Print the canvas document
  python main.py list --creator U1 --templates                     # List templates, including global ones
  python main.py delete ID --team T1
        """
    )

    parser.add_argument(
        "--database",
        type=str,
        default=None,
        help="Path to the DuckDB database (default: from config.yaml)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="canvasapi 0.1.0"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="Create a canvas from a Markdown file")
    import_parser.add_argument("file", help="Markdown file to import")
    import_parser.add_argument("--team", required=True, help="Team ID")
    import_parser.add_argument("--creator", required=True, help="Creator user ID")
    import_parser.add_argument("--template", help="ID of a template canvas to clone")
    import_parser.add_argument("--is-template", action="store_true", help="Mark the new canvas as a template")
    import_parser.add_argument(
        "--link-access",
        default="none",
        help="Link access: none, read or edit (default: none)"
    )
    import_parser.set_defaults(handler=run_import)

    show_parser = subparsers.add_parser("show", help="Print a canvas as JSON")
    show_parser.add_argument("id", help="Canvas ID")
    show_parser.add_argument("--team", required=True, help="Team ID")
    show_parser.set_defaults(handler=run_show)

    list_parser = subparsers.add_parser("list", help="List canvases created by a user")
    list_parser.add_argument("--creator", required=True, help="Creator user ID")
    list_parser.add_argument("--templates", action="store_true", help="Only list templates")
    list_parser.set_defaults(handler=run_list)

    delete_parser = subparsers.add_parser("delete", help="Delete a canvas")
    delete_parser.add_argument("id", help="Canvas ID")
    delete_parser.add_argument("--team", required=True, help="Team ID")
    delete_parser.set_defaults(handler=run_delete)

    return parser.parse_args(argv)


def main():
    """Main entry point."""
    args = parse_arguments()
    setup_logging()

    db_path = args.database or config.database_filename

    try:
        with DatabaseManager(db_path) as db:
            db.initialize_database()
            exit_code = args.handler(build_service(db), args)

    except CanvasNotFound as e:
        logging.error(str(e))
        print(e)
        sys.exit(1)

    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        print("\nInterrupted.")
        sys.exit(130)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
