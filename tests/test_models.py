"""Tests for data models."""

import json

import pytest
from pydantic import ValidationError

from kanban_mvp.models import (
    STATUS_ORDER,
    Board,
    BoardConfig,
    ColumnConfig,
    ExportDocument,
    KanbanConfig,
    Notice,
    NoticeKind,
    StoredPayload,
    Task,
    TaskDraft,
    TaskStatus,
)


def make_task(task_id: str, status: str = "todo", title: str | None = None) -> Task:
    return Task(
        id=task_id,
        title=title or task_id.upper(),
        status=status,
        created_at=1000,
        updated_at=2000,
    )


class TestTask:
    """Tests for the Task model."""

    def test_populate_by_field_name(self):
        """Tasks can be built with snake_case names."""
        task = make_task("a")
        assert task.created_at == 1000
        assert task.updated_at == 2000

    def test_populate_by_alias(self):
        """Tasks can be built from the camelCase wire form."""
        task = Task.model_validate(
            {"id": "a", "title": "A", "status": "done", "createdAt": 1, "updatedAt": 2}
        )
        assert task.status == "done"
        assert task.created_at == 1

    def test_status_is_stored_as_value(self):
        """Enum statuses are stored as plain strings."""
        task = make_task("a", status=TaskStatus.IN_PROGRESS)
        assert task.status == "inprogress"
        assert isinstance(task.status, str)

    def test_to_record_uses_wire_names(self):
        """to_record produces the stored document shape."""
        assert make_task("a").to_record() == {
            "id": "a",
            "title": "A",
            "description": "",
            "status": "todo",
            "createdAt": 1000,
            "updatedAt": 2000,
        }

    def test_invalid_status_rejected(self):
        with pytest.raises(ValidationError):
            make_task("a", status="archived")

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            Task(id="a", title="", created_at=1, updated_at=1)


class TestTaskDraft:
    """Tests for form submissions."""

    def test_defaults(self):
        draft = TaskDraft(title="A")
        assert draft.description == ""
        assert draft.status == "todo"
        assert draft.id is None


class TestStatusOrder:
    """Tests for the fixed status order."""

    def test_order(self):
        assert [s.value for s in STATUS_ORDER] == ["todo", "inprogress", "done"]


class TestBoard:
    """Tests for the Board grouping model."""

    def test_from_tasks_groups_by_status(self):
        """Tasks land in their status column."""
        board = Board.from_tasks(
            [make_task("a", "todo"), make_task("b", "done"), make_task("c", "inprogress")]
        )

        assert [t.id for t in board.todo] == ["a"]
        assert [t.id for t in board.in_progress] == ["c"]
        assert [t.id for t in board.done] == ["b"]

    def test_grouping_keeps_relative_order(self):
        """Order within a column follows board order."""
        board = Board.from_tasks(
            [make_task("a"), make_task("x", "done"), make_task("b"), make_task("c")]
        )
        assert [t.id for t in board.todo] == ["a", "b", "c"]

    def test_empty_board_has_all_columns(self):
        board = Board.from_tasks([])
        assert board.counts() == {"todo": 0, "inprogress": 0, "done": 0}

    def test_get_column_unknown(self):
        assert Board.from_tasks([]).get_column("archived") == []

    def test_visible_columns_use_configured_titles(self):
        """Visible columns carry the titles from the config."""
        config = BoardConfig(
            columns=[
                ColumnConfig(id="todo", title="Backlog"),
                ColumnConfig(id="inprogress", title="Doing"),
                ColumnConfig(id="done", title="Shipped"),
            ]
        )
        board = Board.from_tasks([make_task("a", "inprogress")])

        columns = board.get_visible_columns(config)

        assert [(status, title) for status, title, _ in columns] == [
            ("todo", "Backlog"),
            ("inprogress", "Doing"),
            ("done", "Shipped"),
        ]
        assert [t.id for t in columns[1][2]] == ["a"]

    def test_visible_columns_default_titles(self):
        columns = Board.from_tasks([]).get_visible_columns()
        assert [title for _, title, _ in columns] == ["To do", "In progress", "Done"]


class TestBoardConfig:
    """Tests for column configuration."""

    def test_default(self):
        config = BoardConfig.default()
        assert [c.id for c in config.columns] == ["todo", "inprogress", "done"]
        assert config.title_for("inprogress") == "In progress"

    def test_title_for_unknown_status(self):
        assert BoardConfig.default().title_for("nope") == "nope"

    def test_get_column(self):
        config = BoardConfig.default()
        assert config.get_column("done").title == "Done"
        assert config.get_column("archived") is None

    def test_rejects_missing_column(self):
        """All three statuses are required."""
        with pytest.raises(ValidationError):
            BoardConfig(
                columns=[ColumnConfig(id="todo", title="A"), ColumnConfig(id="done", title="B")]
            )

    def test_rejects_reordered_columns(self):
        """The status order cannot be changed."""
        with pytest.raises(ValidationError):
            BoardConfig(
                columns=[
                    ColumnConfig(id="done", title="A"),
                    ColumnConfig(id="inprogress", title="B"),
                    ColumnConfig(id="todo", title="C"),
                ]
            )

    def test_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            ColumnConfig(id="archived", title="Archive")

    def test_rejects_empty_title(self):
        with pytest.raises(ValidationError):
            ColumnConfig(id="todo", title="")


class TestKanbanConfig:
    """Tests for the root config model."""

    def test_defaults(self):
        config = KanbanConfig.default()
        assert config.version == 1
        assert config.undo_timeout == 5.0
        assert len(config.board.columns) == 3

    @pytest.mark.parametrize("timeout", [0, -1])
    def test_undo_timeout_must_be_positive(self, timeout):
        with pytest.raises(ValidationError):
            KanbanConfig(undo_timeout=timeout)

    def test_from_dict(self):
        """Nested dicts (as loaded from YAML) are accepted."""
        config = KanbanConfig(
            **{
                "undo_timeout": 2,
                "board": {
                    "columns": [
                        {"id": "todo", "title": "Later"},
                        {"id": "inprogress", "title": "Now"},
                        {"id": "done", "title": "Done"},
                    ]
                },
            }
        )
        assert config.undo_timeout == 2.0
        assert config.board.title_for("todo") == "Later"


class TestPayloads:
    """Tests for the stored and exported envelopes."""

    def test_stored_payload_json(self):
        """The store document uses v, savedAt and tasks."""
        payload = StoredPayload(saved_at=42, tasks=[make_task("a")])

        document = json.loads(payload.to_json())

        assert document["v"] == 1
        assert document["savedAt"] == 42
        assert document["tasks"][0]["createdAt"] == 1000
        assert "saved_at" not in document

    def test_export_document_json(self):
        """The export document uses exportedAt and is indented."""
        text = ExportDocument(exported_at=7, tasks=[make_task("a")]).to_json()

        document = json.loads(text)

        assert document["v"] == 1
        assert document["exportedAt"] == 7
        assert document["tasks"][0]["id"] == "a"
        assert "\n" in text


class TestNotice:
    """Tests for user notices."""

    def test_default_severity(self):
        notice = Notice(kind=NoticeKind.RESTORED, message="Restored")
        assert notice.severity == "information"
        assert not notice.is_failure

    def test_failure(self):
        notice = Notice(kind=NoticeKind.READ_FAILURE, message="x", severity="error")
        assert notice.is_failure
