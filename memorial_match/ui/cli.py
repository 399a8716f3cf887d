"""Command-line interface for memorial-match."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .. import __version__
from ..config import MatchConfig
from ..core.candidate import MemorialCandidate
from ..exceptions import MemorialMatchError
from ..matching import DuplicateFinder, DuplicateMatch, build_hash
from ..sources import SQLiteCandidatePool, get_candidate_pool


def configure_logging(level: str = "INFO", verbose: bool = False) -> None:
    """Set up console logging for the CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )


def print_matches(matches: List[DuplicateMatch]) -> None:
    """Print duplicate matches as a readable report.

    Args:
        matches: Matches returned by the finder
    """
    if not matches:
        print("No potential duplicates found.")
        return

    print("\n" + "=" * 60)
    print(f"POTENTIAL DUPLICATES ({len(matches)})")
    print("=" * 60)

    for i, match in enumerate(matches, 1):
        label = match.label
        print(f"{i}. {match.candidate}  [{match.candidate.id}]")
        print(f"   Confidence: {match.score:.2f} ({label.label})")
        for reason in match.reasons:
            print(f"   - {reason}")

    print("=" * 60 + "\n")


def check_command(args: argparse.Namespace, config: MatchConfig) -> int:
    """Execute the check command.

    Args:
        args: Parsed command-line arguments
        config: Active configuration

    Returns:
        Exit code (0 for success, 2 for invalid input)
    """
    candidate = MemorialCandidate(
        first_name=args.first_name,
        middle_name=args.middle_name,
        last_name=args.last_name,
        nickname=args.nickname,
        birth_date=args.birth_date,
        death_date=args.death_date,
        birth_place=args.birth_place,
        resting_place=args.resting_place,
    )
    threshold = config.default_threshold if args.threshold is None else args.threshold

    pool_source = SQLiteCandidatePool(args.db) if args.db else get_candidate_pool(config)
    finder = DuplicateFinder(config)

    try:
        with pool_source:
            pool = pool_source.fetch(candidate, limit=config.pool_limit)
            matches = finder.find_potential_duplicates(candidate, pool, threshold)
    except MemorialMatchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps({
            'matches': [m.to_dict() for m in matches],
            'total': len(matches),
            'canonicalHash': finder.key_builder.hash_candidate(candidate),
        }, indent=2))
    else:
        print_matches(matches)

    return 0


def hash_command(args: argparse.Namespace) -> int:
    """Execute the hash command."""
    print(build_hash(args.first_name, args.last_name, args.birth_date, args.death_date))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='memorial-match',
        description='Find potential duplicate memorials before creating a new one.',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands'
    )

    # Check command
    check_parser = subparsers.add_parser(
        'check',
        help='Check a person against existing memorials'
    )
    check_parser.add_argument('--first-name', required=True, help='First name')
    check_parser.add_argument('--last-name', required=True, help='Last name')
    check_parser.add_argument('--middle-name', help='Middle name')
    check_parser.add_argument('--nickname', help='Nickname')
    check_parser.add_argument('--birth-date', help='Birth date (YYYY-MM-DD)')
    check_parser.add_argument('--death-date', help='Death date (YYYY-MM-DD)')
    check_parser.add_argument('--birth-place', help='Place of birth')
    check_parser.add_argument('--resting-place', help='Resting place')
    check_parser.add_argument(
        '-t', '--threshold',
        type=float,
        help='Minimum confidence 0-1 (default: configured threshold, 0.5)'
    )
    check_parser.add_argument(
        '--db',
        help='SQLite memorial database (default: MEMORIAL_MATCH_DB or demo data)'
    )
    check_parser.add_argument(
        '--json',
        action='store_true',
        help='Print results as JSON'
    )

    # Hash command
    hash_parser = subparsers.add_parser(
        'hash',
        help='Print the canonical hash for a name and dates'
    )
    hash_parser.add_argument('first_name', help='First name')
    hash_parser.add_argument('last_name', help='Last name')
    hash_parser.add_argument('--birth-date', help='Birth date (YYYY-MM-DD)')
    hash_parser.add_argument('--death-date', help='Death date (YYYY-MM-DD)')

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        config = MatchConfig.from_env()
    except MemorialMatchError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    configure_logging(config.log_level, args.verbose)

    if args.command == 'check':
        return check_command(args, config)
    elif args.command == 'hash':
        return hash_command(args)

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
