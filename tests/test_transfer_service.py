"""Tests for JSON import and export."""

import json
from pathlib import Path

import pytest

from kanban_mvp.errors import ImportEmptyError, ImportParseError
from kanban_mvp.models import NoticeKind, Task
from kanban_mvp.repositories import MemorySlot
from kanban_mvp.services import (
    EXPORT_FILENAME,
    STORAGE_KEY,
    BoardState,
    NoticeLog,
    StoreService,
    SyncCoordinator,
    TransferService,
    always_confirm,
    never_confirm,
    read_document,
)


def make_task(task_id: str, title: str, status: str = "todo", description: str = "") -> Task:
    return Task(
        id=task_id,
        title=title,
        description=description,
        status=status,
        created_at=100,
        updated_at=200,
    )


def unencodable_task() -> Task:
    """A task built without validation that holds a lone surrogate."""
    return Task.model_construct(
        id="a", title="ok", description="x\udc00", status="todo", created_at=1, updated_at=1
    )


@pytest.fixture
def notices() -> NoticeLog:
    return NoticeLog()


@pytest.fixture
def slot() -> MemorySlot:
    return MemorySlot()


@pytest.fixture
def board() -> BoardState:
    return BoardState(
        [
            make_task("a", "Write report", "inprogress", "Q3 numbers"),
            make_task("b", "Buy milk"),
            make_task("c", "Ship it", "done"),
        ]
    )


def make_transfer(board, slot, notices, confirm=always_confirm):
    sync = SyncCoordinator(board, StoreService(slot, notices), notices)
    transfer = TransferService(board, sync, notices, confirm, clock=lambda: 999)
    return transfer, sync


class TestReadDocument:
    """Tests for parsing import documents."""

    def test_bare_array(self):
        tasks = read_document('[{"id": "a", "title": "A"}]')
        assert [t.id for t in tasks] == ["a"]

    def test_envelope(self):
        tasks = read_document('{"v": 1, "exportedAt": 1, "tasks": [{"title": "A"}], "x": 2}')
        assert [t.title for t in tasks] == ["A"]

    def test_invalid_json(self):
        with pytest.raises(ImportParseError):
            read_document("{nope")

    @pytest.mark.parametrize(
        "text", ["[]", '{"tasks": []}', '[{"title": ""}, 5]', '{"v": 1}', '"text"']
    )
    def test_no_valid_tasks(self, text):
        with pytest.raises(ImportEmptyError):
            read_document(text)

    def test_deeply_nested_json(self):
        """Nesting past the parser's limit is a parse error."""
        with pytest.raises(ImportParseError):
            read_document("[" * 100_000 + "]" * 100_000)

    def test_surrogate_records(self):
        """Lone surrogate escapes drop the title and clean the other fields."""
        tasks = read_document(
            '[{"id": "a", "title": "X\\ud800"},'
            ' {"id": "b\\udc00", "title": "Y", "description": "d\\udfff"}]'
        )

        assert [t.title for t in tasks] == ["Y"]
        assert tasks[0].id != "b\udc00"
        assert tasks[0].description == ""

    def test_duplicate_ids(self):
        """Duplicate ids in a document get distinct ids."""
        tasks = read_document('[{"id": "a", "title": "X"}, {"id": "a", "title": "Y"}]')

        assert [t.title for t in tasks] == ["X", "Y"]
        assert tasks[0].id != tasks[1].id


class TestExport:
    """Tests for exporting."""

    def test_export_document(self, board, slot, notices):
        transfer, _ = make_transfer(board, slot, notices)

        document = json.loads(transfer.export_text())

        assert document["v"] == 1
        assert document["exportedAt"] == 999
        assert [t["id"] for t in document["tasks"]] == ["a", "b", "c"]
        assert document["tasks"][0] == {
            "id": "a",
            "title": "Write report",
            "description": "Q3 numbers",
            "status": "inprogress",
            "createdAt": 100,
            "updatedAt": 200,
        }

    def test_export_does_not_mutate_board(self, board, slot, notices):
        before = board.get_snapshot()
        transfer, _ = make_transfer(board, slot, notices)

        transfer.export_text()

        assert board.get_snapshot() == before

    def test_export_to_file(self, board, slot, notices, tmp_path: Path):
        transfer, _ = make_transfer(board, slot, notices)
        target = tmp_path / "out" / "board.json"

        written = transfer.export_to(target)

        assert written == target
        assert len(json.loads(target.read_text())["tasks"]) == 3
        assert [n.kind for n in notices.notices] == [NoticeKind.EXPORTED]

    def test_export_to_directory(self, board, slot, notices, tmp_path: Path):
        """Exporting into a directory uses the default file name."""
        transfer, _ = make_transfer(board, slot, notices)

        written = transfer.export_to(tmp_path)

        assert written == tmp_path / EXPORT_FILENAME
        assert written.name == "kanban-tasks.json"
        assert written.exists()

    def test_export_write_failure(self, board, slot, notices, tmp_path: Path):
        """An unwritable target is reported, not raised."""
        blocker = tmp_path / "blocker"
        blocker.write_text("file")
        transfer, _ = make_transfer(board, slot, notices)

        assert transfer.export_to(blocker / "sub" / "out.json") is None
        assert [n.kind for n in notices.notices] == [NoticeKind.WRITE_FAILURE]

    def test_export_cleans_surrogates(self, slot, notices, tmp_path: Path):
        """Non-encodable text on the board is cleaned before it is written."""
        board = BoardState([unencodable_task()])
        transfer, _ = make_transfer(board, slot, notices)

        written = transfer.export_to(tmp_path / "out.json")

        assert written is not None
        (task,) = json.loads(written.read_text(encoding="utf-8"))["tasks"]
        assert task["description"] == ""

    def test_export_serialization_failure(self, slot, notices, tmp_path: Path, monkeypatch):
        """A document that cannot be serialized is reported and nothing is written."""
        monkeypatch.setattr(
            "kanban_mvp.services.transfer_service.normalize_many", lambda tasks: list(tasks)
        )
        board = BoardState([unencodable_task()])
        transfer, _ = make_transfer(board, slot, notices)

        assert transfer.export_to(tmp_path / "out.json") is None
        assert not (tmp_path / "out.json").exists()
        assert [n.kind for n in notices.notices] == [NoticeKind.WRITE_FAILURE]


class TestImport:
    """Tests for importing."""

    @pytest.mark.asyncio
    async def test_round_trip(self, board, slot, notices):
        """Export then import reproduces the collection."""
        transfer, sync = make_transfer(board, slot, notices)
        original = board.get_snapshot()
        text = transfer.export_text()
        board.replace_all([])

        assert await transfer.import_text(text) is True
        await sync.close()

        assert board.get_snapshot() == original

    @pytest.mark.asyncio
    async def test_import_replaces_and_persists(self, board, slot, notices):
        """Import replaces the board wholesale and writes it to the store."""
        transfer, sync = make_transfer(board, slot, notices)

        assert await transfer.import_text('[{"id": "z", "title": "Only"}]') is True
        await sync.close()

        assert board.ids() == {"z"}
        stored = json.loads(slot.read(STORAGE_KEY))["tasks"]
        assert [t["id"] for t in stored] == ["z"]
        imported = notices.of_kind(NoticeKind.IMPORTED)
        assert [n.message for n in imported] == ["Imported 1 tasks."]

    @pytest.mark.asyncio
    async def test_import_duplicate_ids(self, board, slot, notices):
        transfer, sync = make_transfer(board, slot, notices)

        await transfer.import_text('[{"id": "a", "title": "X"}, {"id": "a", "title": "Y"}]')
        await sync.close()

        tasks = board.get_snapshot()
        assert [t.title for t in tasks] == ["X", "Y"]
        assert len({t.id for t in tasks}) == 2

    @pytest.mark.asyncio
    async def test_parse_failure_aborts(self, board, slot, notices):
        before = board.get_snapshot()
        transfer, sync = make_transfer(board, slot, notices)

        assert await transfer.import_text("not json") is False
        await sync.close()

        assert board.get_snapshot() == before
        assert slot.read(STORAGE_KEY) is None
        assert [n.kind for n in notices.notices] == [NoticeKind.IMPORT_PARSE_FAILURE]

    @pytest.mark.asyncio
    async def test_deeply_nested_import_aborts(self, board, slot, notices):
        before = board.get_snapshot()
        transfer, sync = make_transfer(board, slot, notices)

        assert await transfer.import_text("[" * 100_000 + "]" * 100_000) is False
        await sync.close()

        assert board.get_snapshot() == before
        assert [n.kind for n in notices.notices] == [NoticeKind.IMPORT_PARSE_FAILURE]

    @pytest.mark.asyncio
    async def test_import_skips_surrogate_title(self, board, slot, notices):
        transfer, sync = make_transfer(board, slot, notices)

        assert await transfer.import_text('[{"id": "z", "title": "Z"}, {"title": "X\\ud800"}]')
        await sync.close()

        assert board.ids() == {"z"}
        assert [t["id"] for t in json.loads(slot.read(STORAGE_KEY))["tasks"]] == ["z"]

    @pytest.mark.asyncio
    async def test_surrogate_only_import_is_empty(self, board, slot, notices):
        transfer, sync = make_transfer(board, slot, notices)

        assert await transfer.import_text('[{"title": "\\udc00"}]') is False
        await sync.close()

        assert [n.kind for n in notices.notices] == [NoticeKind.IMPORT_EMPTY_FAILURE]

    @pytest.mark.asyncio
    async def test_empty_failure_aborts(self, board, slot, notices):
        before = board.get_snapshot()
        transfer, sync = make_transfer(board, slot, notices)

        assert await transfer.import_text('{"tasks": [{"title": "  "}]}') is False
        await sync.close()

        assert board.get_snapshot() == before
        assert [n.kind for n in notices.notices] == [NoticeKind.IMPORT_EMPTY_FAILURE]

    @pytest.mark.asyncio
    async def test_declined_import(self, board, slot, notices):
        """Without confirmation nothing changes."""
        before = board.get_snapshot()
        transfer, sync = make_transfer(board, slot, notices, confirm=never_confirm)

        assert await transfer.import_text('[{"title": "New"}]') is False
        await sync.close()

        assert board.get_snapshot() == before
        assert slot.read(STORAGE_KEY) is None
        assert notices.notices == []

    @pytest.mark.asyncio
    async def test_confirm_prompt(self, board, slot, notices):
        messages = []

        async def confirm(message: str) -> bool:
            messages.append(message)
            return True

        transfer, sync = make_transfer(board, slot, notices, confirm=confirm)
        await transfer.import_text('[{"title": "A"}, {"title": "B"}]')
        await sync.close()

        assert messages == ["Import 2 tasks and replace the current board?"]

    @pytest.mark.asyncio
    async def test_import_discards_pending_deletion(self, board, slot, notices):
        """An undo after an import cannot resurrect a pre-import task."""
        transfer, sync = make_transfer(board, slot, notices)

        await sync.delete("b")
        await transfer.import_text('[{"id": "z", "title": "Z"}]')

        assert not sync.can_undo
        assert await sync.undo() is False
        await sync.close()
        assert board.ids() == {"z"}

    @pytest.mark.asyncio
    async def test_import_file(self, board, slot, notices, tmp_path: Path):
        path = tmp_path / "in.json"
        path.write_text(json.dumps({"tasks": [{"id": "f", "title": "From file"}]}))
        transfer, sync = make_transfer(board, slot, notices)

        assert await transfer.import_file(path) is True
        await sync.close()

        assert board.ids() == {"f"}

    @pytest.mark.asyncio
    async def test_import_missing_file(self, board, slot, notices, tmp_path: Path):
        transfer, sync = make_transfer(board, slot, notices)

        assert await transfer.import_file(tmp_path / "missing.json") is False
        await sync.close()

        assert len(board) == 3
        assert [n.kind for n in notices.notices] == [NoticeKind.IMPORT_PARSE_FAILURE]

    @pytest.mark.asyncio
    async def test_import_without_sync(self, board, notices):
        """The gateway works without a coordinator (nothing persisted)."""
        transfer = TransferService(board, notifier=notices)

        assert await transfer.import_text('[{"id": "z", "title": "Z"}]') is True
        assert board.ids() == {"z"}
