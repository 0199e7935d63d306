"""
String table exporter.

Reads a localized string table file and writes its strings as CSV or JSON.
"""

import argparse
import logging
import os

import strtable
from strtable.export import parse_key_option


def parse_inputs():
    """Parse console arguments."""
    parser = argparse.ArgumentParser(
        prog="StringTableReader",
        description="Extracts the strings of a localized string table file.",
    )
    parser.add_argument("input_file", type=str, help="Input string table file.")
    parser.add_argument(
        "output_file",
        type=str,
        default="output/strings.csv",
        nargs="?",
        help="Output file name.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Write JSON instead of CSV.",
    )
    parser.add_argument(
        "--key",
        action="append",
        default=[],
        metavar="INDEX:KEY",
        help="Decryption key for one encrypted string. Can be repeated.",
    )
    parser.add_argument(
        "--keys",
        type=str,
        default=None,
        help="JSON file of decryption keys, as {\"keys\": {\"index\": key}}.",
    )
    parser.add_argument(
        "--info",
        action="store_true",
        help="Only print the language and number of strings.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug messages."
    )
    return parser


def main(args):
    """Main function to read everything."""
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    if not os.path.exists(args.input_file):
        raise FileNotFoundError(f"'{args.input_file}' does not exist.")

    if args.info:
        reader = strtable.Reader.from_file(args.input_file)
        encrypted = sum(1 for record in reader.records if record.encrypted)
        print(
            f"{args.input_file}: {len(reader)} strings "
            f"({encrypted} encrypted), language {reader.language.name.lower()}"
        )
        return

    keys = {}
    if args.keys:
        keys.update(strtable.read_keys_file(args.keys))
    for option in args.key:
        index, key = parse_key_option(option)
        keys[index] = key

    output_file = args.output_file
    if args.json and output_file.endswith(".csv"):
        output_file = output_file[:-len(".csv")] + ".json"
    strtable.extract_from_file(args.input_file, output_file, keys, as_json=args.json)


if __name__ == "__main__":
    main(parse_inputs().parse_args())
