"""OneNote API command line. Use --help for usage."""

import argparse
import asyncio
import html
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from config import AppConfig, load_config
from core.errors import OneNoteError
from core.logging import setup_logging
from core.oauth2 import AuthFacade, AuthProvider, build_auth_facade
from onenote.api import OneNoteApi
from onenote.client import OneNoteClient
from onenote.envelope import ApiResponseEnvelope
from onenote.query import ODataQuery

# Project root directory (where .env file is located)
# __main__.py is at src/onenote/__main__.py, so root is 3 levels up
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Placeholder logger until setup_logging() is called in main()
logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m onenote",
        description="Call the OneNote REST API with Microsoft Account or Office 365 sign-in",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Who am I signed in as?
    python -m onenote whoami

    # List notebooks on Office 365, beta API
    python -m onenote --provider o365 --beta notebooks

    # Pages whose title contains "Meeting"
    python -m onenote pages --filter "contains(title,'Meeting')"

    # Create a page in a named section of the default notebook
    python -m onenote create-page --title "Hello" --section-name "Quick Notes"
        """,
    )

    parser.add_argument(
        "--provider",
        choices=[p.value for p in AuthProvider],
        default=None,
        help="Identity provider (default: from config)",
    )
    parser.add_argument(
        "--beta",
        action="store_true",
        help="Use the beta API route",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config.yaml (default: ONENOTE_CONFIG or bundled config)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Console logging level (default: WARNING)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("whoami", help="Sign in and print the user's display name")
    sub.add_parser("sign-out", help="Forget cached credentials")

    notebooks = sub.add_parser("notebooks", help="List notebooks")
    notebooks.add_argument("--filter", default=None, help="OData $filter expression")
    notebooks.add_argument("--expand", default=None, help="OData $expand expression")

    sections = sub.add_parser("sections", help="List sections")
    sections.add_argument("--notebook-id", default=None, help="Only sections in this notebook")
    sections.add_argument("--filter", default=None, help="OData $filter expression")

    pages = sub.add_parser("pages", help="List or search pages")
    pages.add_argument("--section-id", default=None, help="Only pages in this section")
    pages.add_argument("--filter", default=None, help="OData $filter expression")
    pages.add_argument("--search", default=None, help="Full-text search term")
    pages.add_argument("--top", type=int, default=None, help="Maximum number of pages")

    create_page = sub.add_parser("create-page", help="Create a simple page")
    create_page.add_argument("--title", required=True, help="Page title")
    create_page.add_argument("--body", default="", help="Page body text")
    target = create_page.add_mutually_exclusive_group()
    target.add_argument("--section-id", default=None, help="Target section id")
    target.add_argument("--section-name", default=None, help="Target section name")

    return parser.parse_args(argv)


def _page_html(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html><html><head>"
        f"<title>{html.escape(title)}</title>"
        f"</head><body><p>{html.escape(body)}</p></body></html>"
    )


def print_envelope(envelope: ApiResponseEnvelope) -> None:
    print(f"Status: {envelope.status_code}  Correlation id: {envelope.correlation_id or '-'}")
    if envelope.error is not None and envelope.status_code == 0:
        print(f"Error: {envelope.error}")
        return
    entity = envelope.entity
    if isinstance(entity, list):
        if not entity:
            print("(no items)")
        for item in entity:
            print(f"  {item}")
    elif entity is not None:
        print(f"  {entity}")
    elif envelope.body:
        print(envelope.body)


async def run_command(args: argparse.Namespace, config: AppConfig, facade: AuthFacade) -> int:
    provider = config.auth_provider

    if args.command == "whoami":
        token = await facade.get_auth_token(provider)
        if not token:
            result = await facade.get_auth_result(provider)
            print(f"Sign-in failed: {result.error}")
            return 1
        name = await facade.get_user_name(provider)
        print(name or "(signed in, name unavailable)")
        return 0

    if args.command == "sign-out":
        await facade.sign_out(provider)
        print(f"Signed out of {provider.value}")
        return 0

    async with OneNoteClient(
        facade,
        provider,
        config.api.api_route,
        timeout_seconds=config.api.timeout_seconds,
        retry=config.retry,
    ) as client:
        api = OneNoteApi(client)

        if args.command == "notebooks":
            envelope = await api.notebooks.list(ODataQuery(filter=args.filter, expand=args.expand))
        elif args.command == "sections":
            query = ODataQuery(filter=args.filter)
            if args.notebook_id:
                envelope = await api.sections.list_in_notebook(args.notebook_id, query)
            else:
                envelope = await api.sections.list(query)
        elif args.command == "pages":
            query = ODataQuery(filter=args.filter, top=args.top)
            if args.search:
                envelope = await api.pages.search(args.search, query)
            elif args.section_id:
                envelope = await api.pages.list_in_section(args.section_id, query)
            else:
                envelope = await api.pages.list(query)
        else:
            envelope = await api.pages.create(
                _page_html(args.title, args.body),
                section_id=args.section_id,
                section_name=args.section_name,
            )

    print_envelope(envelope)
    return 0 if envelope.ok else 1


def main(argv: list[str] | None = None) -> int:
    global logger

    load_dotenv(PROJECT_ROOT / ".env")
    args = parse_args(argv)

    overrides = {}
    if args.provider:
        overrides["auth_provider"] = args.provider
    if args.beta:
        overrides["api"] = {"use_beta": True}

    try:
        config = load_config(args.config, overrides=overrides or None)
    except OneNoteError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    log_options = dict(config.logging)
    if log_options.get("log_dir"):
        log_options["log_dir"] = Path(log_options["log_dir"])
    setup_logging(
        provider=config.auth_provider.value,
        console_level=getattr(logging, args.log_level),
        **log_options,
    )
    logger = logging.getLogger(__name__)

    facade = build_auth_facade(config)
    try:
        return asyncio.run(run_command(args, config, facade))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
