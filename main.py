"""CLI entry point for the provider matching engine."""

import argparse
import asyncio
import logging
import sys

import yaml

from src.core.config import Settings
from src.core.schemas import RecommendationFilters, RecommendationRequest, SimilarityRequest
from src.pipeline.recommender import recommend
from src.pipeline.similarity import find_similar_jobs
from src.scoring.rules import PRICE_BUCKETS
from src.sources.json_file import FileRecordSource


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML file (default: built-in settings)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Provider matching engine - rank providers and find similar postings",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- recommend subcommand ---
    rec_parser = subparsers.add_parser("recommend", help="Rank providers for a request")
    rec_parser.add_argument(
        "--candidates",
        required=True,
        help="Path to a JSON/YAML file of provider records",
    )
    rec_parser.add_argument("--service-id", required=True, help="Requested service id")
    rec_parser.add_argument("--service-name", required=True, help="Requested service name")
    rec_parser.add_argument("--event-type", required=True, help="Event type, e.g. wedding")
    rec_parser.add_argument("--location", help="Event location")
    rec_parser.add_argument("--budget", help="Budget in currency units")
    rec_parser.add_argument("--guest-count", help="Expected number of guests")
    rec_parser.add_argument("--event-date", help="Event date (YYYY-MM-DD)")
    rec_parser.add_argument("--filter-location", help="Keep providers whose location contains this")
    rec_parser.add_argument(
        "--filter-price-range",
        choices=sorted(PRICE_BUCKETS),
        help="Keep providers whose estimated cost falls in this bucket",
    )
    rec_parser.add_argument("--filter-rating", help="Minimum provider rating (0-5)")
    rec_parser.add_argument(
        "--filter-availability",
        choices=["available", "busy"],
        help="Keep only available or only busy providers",
    )
    rec_parser.add_argument(
        "--filter-verified",
        action="store_true",
        help="Keep only verified providers",
    )
    _add_common(rec_parser)

    # --- similar subcommand ---
    sim_parser = subparsers.add_parser("similar", help="Find postings similar to reference postings")
    sim_parser.add_argument(
        "--jobs",
        required=True,
        help="Path to a JSON/YAML file of job records (must include the references)",
    )
    sim_parser.add_argument(
        "--reference-id",
        action="append",
        default=[],
        dest="reference_ids",
        help="Reference job id (repeatable)",
    )
    sim_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of results (1-50, default: from settings)",
    )
    _add_common(sim_parser)

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def load_settings(path: str | None) -> Settings:
    if path is None:
        return Settings()
    return Settings.from_yaml(path)


def cmd_recommend(args: argparse.Namespace, settings: Settings) -> str:
    """Handle recommend subcommand; returns the JSON response."""
    request = RecommendationRequest(
        service_id=args.service_id,
        service_name=args.service_name,
        event_type=args.event_type,
        location=args.location,
        budget=args.budget,
        guest_count=args.guest_count,
        event_date=args.event_date,
        filters=RecommendationFilters(
            location=args.filter_location,
            price_range=args.filter_price_range,
            min_rating=args.filter_rating,
            availability=args.filter_availability,
            verified_only=args.filter_verified,
        ),
    )
    records = asyncio.run(FileRecordSource(args.candidates, "candidates").fetch())
    response = recommend(request, records, settings)
    return response.model_dump_json(by_alias=True, indent=2)


def cmd_similar(args: argparse.Namespace, settings: Settings) -> str:
    """Handle similar subcommand; returns the JSON response."""
    limit = args.limit if args.limit is not None else settings.similarity.default_limit
    request = SimilarityRequest(reference_job_ids=args.reference_ids, limit=limit)
    records = asyncio.run(FileRecordSource(args.jobs, "jobs").fetch())
    response = find_similar_jobs(request, records, settings)
    return response.model_dump_json(by_alias=True, indent=2)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    handler = cmd_recommend if args.command == "recommend" else cmd_similar
    try:
        output = handler(args, settings)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(output)


if __name__ == "__main__":
    main()
