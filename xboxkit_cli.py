#!/usr/bin/env python3
"""
XboxKit command line - browse Game Pass feeds and Microsoft Store products
from the terminal.
"""
import argparse
import sys
from typing import List, Optional

from colorama import init, Fore, Style

from gamepass_client import GamePassCatalog, NAMED_IDENTIFIERS, resolve_identifier
from marketplace_client import XboxMarketplace
from xboxkit import setup_logging
from xboxkit.config import ConfigError, load_config
from xboxkit.errors import XboxError
from xboxkit.services import get_localization

# Initialize colorama for cross-platform colored terminal output
init(autoreset=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='xboxkit',
        description='Query the Xbox Game Pass catalog and the Microsoft Store.',
    )
    parser.add_argument('--config', default='config.json',
                        help='Path to config file (default: config.json)')
    parser.add_argument('--language', help='Locale, e.g. en-US (overrides config)')
    parser.add_argument('--market', help='Market code, e.g. US (overrides config)')
    parser.add_argument('--log-level', help='DEBUG, INFO, WARNING, ERROR')

    sub = parser.add_subparsers(dest='command', required=True)

    p_coll = sub.add_parser('collection', help='List the games in a Game Pass feed')
    p_coll.add_argument('identifier',
                        help=f"Feed name ({', '.join(sorted(NAMED_IDENTIFIERS))}) or SIGL id")

    p_prod = sub.add_parser('products', help='Show store details for product ids')
    p_prod.add_argument('product_ids', nargs='+', help='Store product ids')

    p_search = sub.add_parser('search', help='Search the store for games')
    p_search.add_argument('query', help='Search text')

    sub.add_parser('markets', help='List supported markets')

    p_lang = sub.add_parser('languages', help='List supported languages')
    p_lang.add_argument('--in-market', dest='in_market',
                        help='Only languages used in this market')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"{Fore.RED}{e}")
        return 1
    setup_logging(args.log_level or config['log_level'])

    try:
        localization = get_localization()

        if args.command == 'markets':
            for market in localization.markets:
                print(f"{Fore.YELLOW}{market.iso_code}  {Fore.WHITE}{market.name}")
            return 0

        if args.command == 'languages':
            languages = (localization.languages_in(args.in_market)
                         if args.in_market else localization.languages)
            for lang in languages:
                print(f"{Fore.YELLOW}{lang.locale_code:<8}{Fore.WHITE}{lang.native_name}")
            return 0

        language = localization.language(args.language or config['language'])
        market = localization.market(args.market or config['market'])
        if language is None or market is None:
            print(f"{Fore.RED}Error: unsupported language or market "
                  f"({args.language or config['language']} / {args.market or config['market']})")
            print(f"{Fore.YELLOW}Run 'xboxkit markets' or 'xboxkit languages' for the supported values.")
            return 1

        timeout = config['api_timeout_seconds']
        if args.command == 'collection':
            _show_collection(GamePassCatalog(timeout=timeout),
                             resolve_identifier(args.identifier), language, market)
        elif args.command == 'products':
            _show_products(XboxMarketplace(timeout=timeout), args.product_ids, language, market)
        elif args.command == 'search':
            _show_search(XboxMarketplace(timeout=timeout), args.query, language, market)
        return 0
    except XboxError as e:
        print(f"{Fore.RED}Error: {e}")
        return 1
    except KeyboardInterrupt:
        print(f"\n{Fore.YELLOW}Interrupted by user. Goodbye!")
        return 130


def _show_collection(catalog, sigl_id, language, market) -> None:
    print(f"{Fore.CYAN}Fetching Game Pass feed {sigl_id}...")
    collection = catalog.fetch_game_collection(sigl_id, language, market)
    if collection.header:
        print(f"\n{Fore.GREEN}{'='*60}")
        print(f"{Fore.CYAN}{Style.BRIGHT}{collection.header.title}")
        print(f"{Fore.WHITE}{collection.header.description}")
        print(f"{Fore.GREEN}{'='*60}")
    for game_id in collection.game_ids:
        print(f"{Fore.WHITE}{game_id}")
    print(f"{Fore.GREEN}Total: {len(collection.game_ids)} games")


def _show_products(marketplace, product_ids, language, market) -> None:
    games = marketplace.fetch_product_information(product_ids, language, market)
    if not games:
        print(f"{Fore.YELLOW}No products found.")
        return
    for game in games:
        print(f"\n{Fore.CYAN}{Style.BRIGHT}{game.product_title} {Fore.WHITE}({game.product_id})")
        if game.publisher_name:
            print(f"{Fore.YELLOW}Publisher: {Fore.WHITE}{game.publisher_name}")
        if game.developer_name:
            print(f"{Fore.YELLOW}Developer: {Fore.WHITE}{game.developer_name}")
        if game.reviews and game.reviews.summary:
            print(f"{Fore.YELLOW}Reviews: {Fore.WHITE}{game.reviews.summary}")
        if game.short_description:
            print(f"{Fore.WHITE}{game.short_description}")


def _show_search(marketplace, query, language, market) -> None:
    suggestions = marketplace.search_suggestions(query, language, market)
    if not suggestions:
        print(f"{Fore.YELLOW}No results for '{query}'.")
        return
    for s in suggestions:
        print(f"{Fore.YELLOW}{s.product_id}  {Fore.WHITE}{s.title}")


if __name__ == "__main__":
    sys.exit(main())
