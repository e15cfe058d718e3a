"""
Command line front end for the BizMap client.

    python -m bizmap search-products laptop --lat -12.0464 --lng -77.0428 --max-price 2000
    python -m bizmap --token <access token> profile
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Callable, List, Optional

from pydantic import BaseModel

from bizmap.config import settings
from bizmap.models.location import GeoLocation
from bizmap.models.search import DEFAULT_RADIUS_METERS, NO_PRICE_BOUND, SearchFilter
from bizmap.services.bizmap_client import BizMapClient


def _to_jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json")
    if isinstance(result, list):
        return [_to_jsonable(item) for item in result]
    return result


def _search_filter(args: argparse.Namespace) -> SearchFilter:
    location = None
    if args.lat is not None and args.lng is not None:
        location = GeoLocation(args.lat, args.lng)
    return SearchFilter(
        query=args.query,
        location=location,
        radius_meters=args.radius,
        min_price=getattr(args, "min_price", NO_PRICE_BOUND),
        max_price=getattr(args, "max_price", NO_PRICE_BOUND),
        category=args.category,
        limit=args.limit,
        offset=args.offset,
    )


def _dispatch(client: BizMapClient, args: argparse.Namespace, on_success: Callable, on_error: Callable):
    command = args.command
    if command == "login":
        return client.login(args.username, args.password, on_success, on_error)
    if command == "profile":
        return client.get_profile(on_success, on_error)
    if command == "search-products":
        return client.search_products(_search_filter(args), on_success, on_error)
    if command == "search-businesses":
        return client.search_businesses(_search_filter(args), on_success, on_error)
    if command == "product":
        return client.get_product_by_id(args.id, on_success, on_error)
    if command == "business":
        return client.get_business_by_id(args.id, on_success, on_error)
    if command == "business-products":
        return client.get_business_products(args.id, on_success, on_error)
    if command == "history":
        return client.get_search_history(on_success, on_error, limit=args.limit)
    if command == "recommendations":
        return client.get_recommendations(on_success, on_error)
    if command == "clear-history":
        return client.clear_search_history(on_success, on_error)
    raise ValueError(f"Unknown command: {command}")


async def run(args: argparse.Namespace, transport=None) -> int:
    """Run one command and print its outcome. Returns the process exit code."""
    loop = asyncio.get_running_loop()
    outcome: asyncio.Future = loop.create_future()

    def on_success(result: Any = None) -> None:
        outcome.set_result((True, result))

    def on_error(status_code: int, message: str) -> None:
        outcome.set_result((False, (status_code, message)))

    async with BizMapClient(args.base_url or settings.base_url, transport=transport) as client:
        token = args.token or settings.auth_token
        if token:
            client.set_auth_token(token)

        _dispatch(client, args, on_success, on_error)
        ok, payload = await outcome

    if not ok:
        status_code, message = payload
        print(f"Error {status_code}: {message}", file=sys.stderr)
        return 1

    if payload is not None:
        print(json.dumps(_to_jsonable(payload), indent=2, ensure_ascii=False))
    return 0


def _add_search_arguments(parser: argparse.ArgumentParser, with_price: bool) -> None:
    parser.add_argument("query", help="Search text")
    parser.add_argument("--lat", type=float, default=None, help="Center latitude")
    parser.add_argument("--lng", type=float, default=None, help="Center longitude")
    parser.add_argument("--radius", type=int, default=DEFAULT_RADIUS_METERS, help="Radius in meters")
    parser.add_argument("--category", default=None)
    parser.add_argument("--limit", type=int, default=20)
    parser.add_argument("--offset", type=int, default=0)
    if with_price:
        parser.add_argument("--min-price", type=float, default=NO_PRICE_BOUND)
        parser.add_argument("--max-price", type=float, default=NO_PRICE_BOUND)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bizmap", description="BizMap API command line client")
    parser.add_argument("--base-url", default=None, help="Backend URL (default: BIZMAP_BASE_URL)")
    parser.add_argument("--token", default=None, help="Access token (default: BIZMAP_AUTH_TOKEN)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log HTTP traffic")

    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Log in and print the tokens")
    login.add_argument("username")
    login.add_argument("password")

    commands.add_parser("profile", help="Show the current user")
    _add_search_arguments(commands.add_parser("search-products", help="Search products"), with_price=True)
    _add_search_arguments(commands.add_parser("search-businesses", help="Search businesses"), with_price=False)

    for name, help_text in (
        ("product", "Show a product"),
        ("business", "Show a business"),
        ("business-products", "List the products of a business"),
    ):
        commands.add_parser(name, help=help_text).add_argument("id")

    history = commands.add_parser("history", help="Show the search history")
    history.add_argument("--limit", type=int, default=20)

    commands.add_parser("recommendations", help="Show recommendations")
    commands.add_parser("clear-history", help="Delete the search history")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if (getattr(args, "lat", None) is None) != (getattr(args, "lng", None) is None):
        parser.error("--lat and --lng must be given together")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
