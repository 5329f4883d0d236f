import datetime
import json
import os

import pytest

# Qt widgets must not need a display in tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from scientistmanager.model.scientist import Scientist
from scientistmanager.model.store import ScientistStore


SAMPLE_RECORDS = [
    {
        "id": "a1",
        "fullName": "Иван Петров",
        "faculty": "CS",
        "department": "Software Engineering",
        "degree": "PhD",
        "rank": "Professor",
        "rankDate": "2010-05-17T00:00:00",
    },
    {
        "id": "b2",
        "fullName": "Олена Коваль",
        "faculty": "Mathematics",
        "department": "Algebra",
        "degree": "DSc",
        "rank": "Associate Professor",
        "rankDate": "2015-09-01T00:00:00",
    },
    {
        "id": "c3",
        "fullName": "John Smith",
        "faculty": "Physics",
        "department": "Computer Science Lab",
        "degree": "MSc",
        "rank": "Lecturer",
        "rankDate": "2020-02-29T00:00:00",
    },
]


@pytest.fixture
def sample_json() -> str:
    return json.dumps(SAMPLE_RECORDS, ensure_ascii=False, indent=4)


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data" / "scientist.json"


@pytest.fixture
def store(sample_json, data_file) -> ScientistStore:
    """A store loaded with the sample records and backed by a temp file."""
    s = ScientistStore()
    s.load(sample_json, data_file)
    return s


@pytest.fixture
def make_scientist():
    def _make(name: str = "New Person", **kwargs) -> Scientist:
        values = dict(
            full_name=name,
            faculty="Biology",
            department="Genetics",
            degree="PhD",
            rank="Researcher",
            rank_date=datetime.date(2022, 1, 10),
        )
        values.update(kwargs)
        return Scientist(**values)
    return _make


@pytest.fixture
def broken_path(tmp_path):
    """A path that cannot be written because its parent is a regular file."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    return blocker / "scientist.json"


@pytest.fixture
def qapp():
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app
