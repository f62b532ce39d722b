#!/usr/bin/env python3
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from webcontentlib.config import WebTestsConfiguration
from webcontentlib.document import HtmlDocument
from webcontentlib.errors import InvalidTestsConfiguration
from webcontentlib.html_helper import HtmlHelper


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Post-process a rendered DrD+ rules page.")
    parser.add_argument("html", help="Path to the HTML page to process.")
    parser.add_argument("--out", dest="output_path", default=None, help="Where to write the result. Defaults to stdout.")
    parser.add_argument("--current-host", default=None, help="Host the page is served from (e.g. pph.drdplus.info).")
    parser.add_argument("--local", action="store_true", help="Turn public drdplus.info links into local drdplus.loc ones.")
    parser.add_argument(
        "--expect-table",
        dest="expected_table_ids",
        action="append",
        default=None,
        help="Table ID the page has to contain. Can be repeated.",
    )
    parser.add_argument("--no-tables", action="store_true", help="The page is not expected to contain any tables.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase logging verbosity.")
    return parser.parse_args(argv)


def check_tables(helper: HtmlHelper, document: HtmlDocument, config: WebTestsConfiguration) -> List[str]:
    """Returns expected table IDs the document misses."""
    tables = helper.find_tables_with_ids(document)
    if not config.has_tables:
        return []
    return [t for t in config.some_expected_table_ids if helper.to_id(t) not in tables]


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    log_level = logging.WARNING
    if args.verbose == 1:
        log_level = logging.INFO
    elif args.verbose >= 2:
        log_level = logging.DEBUG
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    config = None
    if args.expected_table_ids or args.no_tables:
        try:
            config = WebTestsConfiguration.from_values(
                {"has_tables": not args.no_tables, "some_expected_table_ids": args.expected_table_ids}
            )
        except InvalidTestsConfiguration as e:
            logging.error("Invalid tests configuration: %s", e)
            return 1

    document = HtmlDocument(Path(args.html).read_text(encoding="utf-8"))
    helper = HtmlHelper(current_host=args.current_host)
    helper.process(document, local_links=args.local)

    if config is not None:
        missing = check_tables(helper, document, config)
        if missing:
            logging.error("Missing expected tables: %s", ", ".join(missing))
            return 1

    html = document.save_html()
    if args.output_path:
        out_path = Path(args.output_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(html, encoding="utf-8")
        logging.info("Written %s", out_path)
    else:
        sys.stdout.write(html)
    return 0


if __name__ == "__main__":
    sys.exit(main())
