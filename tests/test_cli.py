"""Tests for the command line front end."""
import json

import httpx
import pytest

from bizmap.__main__ import build_parser, parse_args, run
from tests.conftest import BASE_URL


def _parse(*argv: str):
    return build_parser().parse_args(["--base-url", BASE_URL, *argv])


def test_search_products_arguments():
    args = _parse("search-products", "laptop", "--lat", "-12.0464", "--lng", "-77.0428", "--max-price", "2000")

    assert args.command == "search-products"
    assert args.lat == -12.0464
    assert args.max_price == 2000.0
    assert args.min_price == -1.0
    assert args.radius == 5000


def test_search_businesses_has_no_price_options():
    with pytest.raises(SystemExit):
        _parse("search-businesses", "tecno", "--min-price", "3")


@pytest.mark.parametrize("coordinate", [["--lat", "-12.05"], ["--lng", "-77.04"]])
def test_single_coordinate_is_rejected(capsys, coordinate):
    with pytest.raises(SystemExit):
        parse_args(["search-products", "laptop", *coordinate])

    assert "--lat and --lng must be given together" in capsys.readouterr().err


def test_both_coordinates_are_accepted():
    args = parse_args(["search-businesses", "tecno", "--lat", "-12.05", "--lng", "-77.04"])

    assert (args.lat, args.lng) == (-12.05, -77.04)


@pytest.mark.asyncio
async def test_run_prints_payload(capsys, product_json):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=product_json)

    exit_code = await run(_parse("--token", "cli-token", "product", "p-1"), transport=httpx.MockTransport(handler))

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["business_id"] == "b-1"
    assert seen[0].headers["Authorization"] == "Bearer cli-token"
    assert seen[0].url.path == "/api/v1/products/p-1"


@pytest.mark.asyncio
async def test_run_reports_errors(capsys):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "not found"})

    exit_code = await run(_parse("business", "b-404"), transport=httpx.MockTransport(handler))

    assert exit_code == 1
    assert capsys.readouterr().err.strip() == "Error 404: not found"


@pytest.mark.asyncio
async def test_run_unit_operation_prints_nothing(capsys):
    exit_code = await run(
        _parse("clear-history"), transport=httpx.MockTransport(lambda request: httpx.Response(204))
    )

    assert exit_code == 0
    assert capsys.readouterr().out == ""
