import logging
import sys
import time
from typing import TextIO

from colorlog import ColoredFormatter

from tora_db._utils import get_loglevel


class UTCColoredFormatter(ColoredFormatter):
    '''
    A ColoredFormatter that uses UTC for timestamps
    and formats them in ISO8601 with a trailing 'Z'.

    '''

    converter = time.gmtime

    def formatTime(self, record, datefmt=None):
        if datefmt:
            return super().formatTime(record, datefmt)

        ct = self.converter(record.created)
        t = time.strftime('%Y-%m-%dT%H:%M:%S', ct)
        return f'{t}Z'


def setup_logging(
    loglevel: str | None = None,
    stream: TextIO | None = None,
) -> None:
    '''
    Route every tora_db logger through one colored handler on the root
    logger.

    `loglevel` falls back to `TORA_DB_LOGLEVEL` (default `info`), records
    go to `stream` or stderr. Colors are only emitted when the stream is a
    tty.

    '''
    loglevel = loglevel or get_loglevel()

    formatter = UTCColoredFormatter(
        '%(asctime)s %(log_color)s%(levelname)s%(reset)s %(name)s: %(message)s',
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'bold_red',
        },
        stream=stream or sys.stderr,
    )

    root = logging.getLogger()

    # avoid duplicates if called twice
    if root.handlers:
        root.handlers.clear()

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(loglevel.upper())
