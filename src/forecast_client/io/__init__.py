from .csv_codec import (  # noqa
    CsvDocument,
    CsvParseError,
    parse_csv,
    read_csv_file,
    serialize_csv,
    write_csv_file,
)

__all__ = [
    "CsvDocument",
    "CsvParseError",
    "parse_csv",
    "read_csv_file",
    "serialize_csv",
    "write_csv_file",
]
