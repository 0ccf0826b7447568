import pytest

from tora_db._testing import people_db


@pytest.fixture
def people():
    return people_db()


@pytest.fixture
def datadir(tmp_path, monkeypatch):
    monkeypatch.setenv('TORA_DB_DATADIR', str(tmp_path))
    return tmp_path
