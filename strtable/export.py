"""
Export strings from a string table file to another format (CSV or JSON).
"""
import csv
import json
import logging
import os

from .reader import Reader

logger = logging.getLogger(__name__)


def parse_key(value):
    """
    Read a decryption key given as an integer or a decimal/hex string.

    :param value: Key as int, "14399848955341" or "0xd18c2e2a64d"
    :return int: Key value
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid key: {value!r}")
    if isinstance(value, int):
        return value
    return int(str(value).strip(), 0)


def read_keys_file(keys_file):
    """
    Read decryption keys from a JSON file.

    The file format is ``{"keys": {"724": 14399848955341}}``, string indices
    mapping to integer or string keys.

    :param str keys_file: JSON file path
    :return dict[int, int]: Keys by string index
    """
    with open(keys_file, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict) or not isinstance(data.get("keys"), dict):
        raise ValueError(f"'{keys_file}' should contain a \"keys\" object.")
    return {int(index): parse_key(key) for index, key in data["keys"].items()}


def parse_key_option(option):
    """
    Parse a command line key option.

    :param str option: "INDEX:KEY"
    :return tuple[int, int]: String index and key
    """
    if ":" not in option:
        raise ValueError(f"Key option '{option}' should look like INDEX:KEY")
    index, key = option.split(":", 1)
    return int(index), parse_key(key)


def export_as_csv(data, output_file, source=""):
    """
    Export data in a CSV file with standard compatibility format.

    :param typing.Iterable data: Extracted strings as (index, string)
    :param str output_file: Output file path
    :param str source: Eventual file source
    :return int: Number of lines written
    """
    lines = 0
    with open(output_file, "w", newline="", encoding="utf-8") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(["location", "source", "target"])
        for index, string in data:
            writer.writerow([f"{index}@{source}", string, string])
            lines += 1
    print(f"Wrote {lines} lines of translation CSV as {output_file}")
    return lines


def export_as_json(data, output_file, source="", language=None):
    """
    Export data in a JSON file.

    :param typing.Iterable data: Extracted strings as (index, string)
    :param str output_file: Output file path
    :param str source: Eventual file source
    :param language: Language of the strings, if known
    :return int: Number of strings written
    """
    strings = [
        {"location": f"{index}@{source}", "source": string, "target": string}
        for index, string in data
    ]
    document = {"source": source, "strings": strings}
    if language is not None:
        document["language"] = language.name.lower()
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(document, f, ensure_ascii=False, indent=2)
    print(f"Wrote {len(strings)} strings as {output_file}")
    return len(strings)


def extract_from_file(input_file, output_file, keys=None, as_json=False):
    """
    Extract every decodable string of a string table file.

    :param str input_file: Input file path
    :param str output_file: Output file path
    :param dict[int, int] keys: Decryption keys by string index
    :param bool as_json: Write JSON instead of CSV
    :return Reader: The parsed file
    """
    reader = Reader.from_file(input_file)
    logger.info(
        "'%s': %d strings, language %s", input_file, len(reader), reader.language.name
    )
    data = reader.iter_strings(keys)

    folder_name = os.path.dirname(output_file)
    if folder_name and not os.path.exists(folder_name):
        os.makedirs(folder_name)
        print(f"Created new folder '{folder_name}'.")
    source = os.path.basename(input_file)
    if as_json:
        export_as_json(data, output_file, source, reader.language)
    else:
        export_as_csv(data, output_file, source)
    return reader
