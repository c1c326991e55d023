"""Command-line TrekSathi client.

Usage:
    python cli.py locate
    python cli.py places --location Pokhara --category hotel --min-rating 4
    python cli.py weather --lat 27.7172 --lon 85.3240
    python cli.py serve --port 8000
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent / ".env")

from domain.models import POPULAR_LOCATIONS, Coordinate
from services.geolocation import GeolocationResolver
from services.render_text import render_results, render_weather
from services.search_form import CATEGORIES, SearchFormController
from services.travel_api import TravelApiClient
from services.weather_forecast import WeatherController
from settings import settings

logger = logging.getLogger("treksathi")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TrekSathi travel guide for Nepal.")
    parser.add_argument("--api-base-url", default=None, help="Backend API base URL.")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("locate", help="Detect the current location.")

    places = sub.add_parser("places", help="Find nearby places.")
    places.add_argument(
        "--location",
        choices=[p.name for p in POPULAR_LOCATIONS],
        help="Use a popular location instead of detecting one.",
    )
    places.add_argument("--lat", type=float, help="Latitude (overrides detection).")
    places.add_argument("--lon", type=float, help="Longitude (overrides detection).")
    places.add_argument("--radius", type=float, default=None, help="Radius in km.")
    places.add_argument("--category", choices=CATEGORIES, default=None)
    places.add_argument("--min-rating", type=float, default=None)
    places.add_argument("--max-distance", type=float, default=None, help="Max distance in km.")

    weather = sub.add_parser("weather", help="Show the weather forecast.")
    weather.add_argument("--lat", type=float, help="Latitude (overrides detection).")
    weather.add_argument("--lon", type=float, help="Longitude (overrides detection).")

    serve = sub.add_parser("serve", help="Run the local session host.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def _starting_coordinate(args: argparse.Namespace, resolver: GeolocationResolver) -> Coordinate:
    if args.lat is not None and args.lon is not None:
        return Coordinate(args.lat, args.lon)
    return resolver.resolve().coordinate


def cmd_locate(resolver: GeolocationResolver) -> int:
    located = resolver.resolve()
    if located.info_error:
        print(located.info_error, file=sys.stderr)
    coord = located.coordinate
    print(f"{coord.latitude:.4f}, {coord.longitude:.4f} ({located.source.value})")
    return 0


def cmd_places(args: argparse.Namespace, client: TravelApiClient, resolver: GeolocationResolver) -> int:
    form = SearchFormController()
    if args.location:
        form.select_location(args.location)
    else:
        form.apply_coordinate(_starting_coordinate(args, resolver))

    edits = {
        "radiusInKm": args.radius,
        "category": args.category,
        "minRating": args.min_rating,
        "maxDistance": args.max_distance,
    }
    for name, value in edits.items():
        if value is not None:
            form.update_field(name, value)

    results = form.submit(client)
    if results is None:
        print(form.error, file=sys.stderr)
        return 1
    print(render_results(results))
    return 0


def cmd_weather(args: argparse.Namespace, client: TravelApiClient, resolver: GeolocationResolver) -> int:
    screen = WeatherController(_starting_coordinate(args, resolver))
    weather = screen.submit(client)
    if weather is None:
        print(screen.error, file=sys.stderr)
        return 1
    print(render_weather(weather))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("api.main:app", host=args.host, port=args.port)
    return 0


def main(
    argv: Optional[list[str]] = None,
    client: Optional[TravelApiClient] = None,
    resolver: Optional[GeolocationResolver] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "serve":
        return cmd_serve(args)

    client = client or TravelApiClient(base_url=args.api_base_url)
    resolver = resolver or GeolocationResolver()
    if args.command == "locate":
        return cmd_locate(resolver)
    if args.command == "places":
        return cmd_places(args, client, resolver)
    return cmd_weather(args, client, resolver)


if __name__ == "__main__":
    raise SystemExit(main())
