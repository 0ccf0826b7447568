'''
Misc internal utilities, mostly environment driven configuration.

'''
import os
from pathlib import Path


default_loglevel: str = 'info'


def get_root_datadir() -> Path:
    '''
    Directory relative database paths resolve against, defaults to the
    current working directory.

    '''
    return Path(os.getenv('TORA_DB_DATADIR', Path.cwd()))


def get_loglevel() -> str:
    return os.getenv('TORA_DB_LOGLEVEL', default_loglevel)


def resolve_db_path(path: str | Path) -> Path:
    path = Path(path)
    if not path.is_absolute():
        path = get_root_datadir() / path

    return path
