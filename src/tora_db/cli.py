'''
Demonstration entry point: build a one column table, persist it, load it
back and print its only value.

'''
import argparse
import logging
from pathlib import Path

from tora_db._log import setup_logging
from tora_db.dtypes import Text, Type
from tora_db.engine import Db, OkSingle
from tora_db.errors import ToraDBError


log = logging.getLogger(__name__)


def run_demo(path: str | Path) -> OkSingle:
    db = Db()
    db.append_column('Name', Type.TEXT)
    db.append_row([Text('John')])

    written = db.write_to_file(path)
    log.info(f'wrote demo table to {written}')

    db = Db.read_from_file(written)
    log.info(f'reloaded table from {written}, rows: {db.row_count}')

    return db.fetch_value(0, 0)


def main(argv: list[str] | None = None) -> int:
    arg_parser = argparse.ArgumentParser(
        description='Write a small demo table to disk, read it back and print a value'
    )
    arg_parser.add_argument(
        'path',
        type=Path,
        nargs='?',
        default=Path('test.tdb'),
        help='Table file to write, relative paths resolve against TORA_DB_DATADIR',
    )
    arg_parser.add_argument(
        '-l', '--loglevel',
        type=str,
        default=None,
        help='Log level, defaults to TORA_DB_LOGLEVEL or info',
    )

    args = arg_parser.parse_args(argv)
    setup_logging(args.loglevel)

    try:
        resp = run_demo(args.path)

    except (ToraDBError, OSError) as e:
        log.error(f'demo failed: {e}')
        return 1

    print(resp)
    return 0
