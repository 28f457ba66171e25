"""
Command-line browser for NoteHub.

    notehub-browse recent
    notehub-browse search thermodynamics --branch Mechanical
    notehub-browse upload notes.pdf --branch Civil --subject "Fluid Mechanics" --topic Bernoulli
"""

import argparse
import os

from notehub.client.api import NotesClient
from notehub.client.views import home_view, render_home, render_search, search_view, upload_view


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="notehub-browse")
    parser.add_argument("--api", default=None, help="API base URL (default: API_BASE_URL)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("recent", help="List the most recent uploads")

    search = sub.add_parser("search", help="Search notes")
    search.add_argument("query")
    search.add_argument("--branch", default=None)

    upload = sub.add_parser("upload", help="Upload a PDF note")
    upload.add_argument("path")
    upload.add_argument("--branch", required=True)
    upload.add_argument("--subject", required=True)
    upload.add_argument("--topic", required=True)
    upload.add_argument("--description", default="")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    with NotesClient(base_url=args.api) as client:
        if args.command == "recent":
            print(render_home(home_view(client.recent_notes())))
            return 0

        if args.command == "search":
            print(render_search(search_view(args.query, client.search(args.query, args.branch))))
            return 0

        fields = {
            "branch": args.branch,
            "subject": args.subject,
            "topic": args.topic,
            "description": args.description,
        }
        with open(args.path, "rb") as fh:
            view = upload_view(lambda: client.upload(fields, os.path.basename(args.path), fh))
        print(view.message)
        return 1 if view.status == "error" else 0


if __name__ == "__main__":
    raise SystemExit(main())
