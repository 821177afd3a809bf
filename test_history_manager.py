from history_manager import HistoryManager


def test_load_creates_missing_file(tmp_path):
    path = tmp_path / "history.log"
    mgr = HistoryManager(str(path))
    assert mgr.load() == []
    assert path.exists()


def test_load_keeps_most_recent_entries(tmp_path):
    path = tmp_path / "history.log"
    path.write_text("w\n\nq\nt One\nt Two\n")
    mgr = HistoryManager(str(path), max_items=2)
    assert mgr.load() == ["t One", "t Two"]


def test_append_trims_and_persist_appends(tmp_path):
    path = tmp_path / "history.log"
    mgr = HistoryManager(str(path), max_items=2)
    mgr.load()
    for entry in ("w", "q", "x"):
        mgr.append(entry)
        mgr.persist(entry)
    assert mgr.items == ["q", "x"]
    assert path.read_text() == "w\nq\nx\n"


def test_empty_entries_are_ignored(tmp_path):
    path = tmp_path / "history.log"
    mgr = HistoryManager(str(path))
    mgr.load()
    mgr.append("")
    mgr.persist("")
    assert mgr.items == []
    assert path.read_text() == ""
