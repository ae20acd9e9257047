"""Tests for frame formatting and JSONL export."""

import json

import pytest

from galton.board.session import BoardSession, FixedClock
from galton.board.tags import EntityTag
from galton.data.exporter import export_session, export_to_dict
from galton.data.formats import format_entity, format_frame


@pytest.fixture
def session():
    with BoardSession(clock=FixedClock(1 / 60.0), seed=3) as s:
        yield s


class TestFormats:

    def test_frame_counts(self, session):
        session.tick()
        frame = format_frame(session.scene, 1)
        assert frame["frame"] == 1
        assert frame["counts"][EntityTag.BALL.value] == 1
        assert frame["counts"][EntityTag.FROZEN.value] == 1
        assert frame["counts"][EntityTag.GRAVITY_SOURCE.value] == 1
        assert len(frame["entities"]) == sum(frame["counts"].values())

    def test_entity_shapes(self, session):
        records = [format_entity(e) for e in session.scene.entities]
        kinds = {r["tag"]: r["shape"]["type"] for r in records}
        assert kinds[EntityTag.OBSTACLE.value] in ("circle", "polygon")
        floor = format_entity(session.floor)
        assert floor["shape"]["type"] == "polygon"
        assert len(floor["shape"]["vertices"]) == 4

    def test_frame_is_json_safe(self, session):
        session.run(3)
        json.dumps(format_frame(session.scene, 3))


class TestExport:

    def test_export_to_dict(self, session):
        records = export_to_dict(session, 10)
        assert len(records) == 11
        assert records[0]["seed"] == 3
        assert [r["frame"] for r in records[1:]] == list(range(1, 11))

    def test_export_session(self, session, tmp_path):
        path = tmp_path / "run.jsonl"
        export_session(session, 5, str(path))
        lines = path.read_text().splitlines()
        assert len(lines) == 6
        header = json.loads(lines[0])
        assert header["board"]["rows"] == 11
        assert json.loads(lines[-1])["frame"] == 5
