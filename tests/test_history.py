"""
History store tests
"""

from doc_assist_ai.models import (
    Highlight,
    HighlightCategory,
    HistoryItem,
    LocationInfo,
    OfficialDocInfo,
)
from doc_assist_ai.history import HistoryStore


def make_item(**overrides) -> HistoryItem:
    fields = {
        "file_name": "bill.pdf",
        "target_language": "Tamil",
        "text": "மின் கட்டணம்",
        "summary": "Pay the electricity bill",
        "action_items": ["Pay by 10th"],
    }
    fields.update(overrides)
    return HistoryItem(**fields)


class TestHistoryStore:
    """Append-only history"""

    def test_add_and_get(self, store):
        item = make_item(
            location=LocationInfo("Anna Salai, Chennai", 13.06, 80.25, "https://maps.example/x"),
            official_info=OfficialDocInfo(go_number="G.O. 5", department="Energy"),
            highlights=[Highlight("மின்", HighlightCategory.VOCABULARY)],
        )

        store.add(item)

        assert store.get(item.id) == item

    def test_minimal_item(self, store):
        item = make_item(summary="", action_items=[])
        store.add(item)

        loaded = store.get(item.id)

        assert loaded.location is None
        assert loaded.official_info is None
        assert loaded.highlights == []
        assert loaded.action_items == []

    def test_get_missing(self, store):
        assert store.get("does-not-exist") is None

    def test_list_newest_first(self, store):
        items = [make_item(file_name=f"doc{i}.png") for i in range(3)]
        for item in items:
            store.add(item)

        listed = store.list()

        assert [i.file_name for i in listed] == ["doc2.png", "doc1.png", "doc0.png"]
        assert len(store.list(limit=2)) == 2
        assert store.count() == 3

    def test_update_highlights(self, store):
        item = make_item()
        store.add(item)
        highlight = Highlight("Pay by 10th", HighlightCategory.ACTION)

        store.update_highlights(item.id, [highlight])

        assert store.get(item.id).highlights == [highlight]

    def test_persists_across_connections(self, tmp_path):
        path = tmp_path / "nested" / "history.duckdb"
        item = make_item()

        first = HistoryStore(path)
        first.add(item)
        first.close()

        second = HistoryStore(path)
        try:
            assert second.get(item.id) == item
        finally:
            second.close()


class TestEventLog:
    """Audit log entries"""

    def test_log_and_filter(self, store):
        store.log("INFO", "translate", "Translating bill.pdf", {"language": "Tamil"})
        store.log("ERROR", "speech", "Failed to generate speech.")

        logs = store.get_logs()
        assert [entry["stage"] for entry in logs] == ["speech", "translate"]
        assert logs[1]["context"] == {"language": "Tamil"}
        assert logs[0]["context"] is None

        errors = store.get_logs(level="ERROR")
        assert len(errors) == 1
        assert errors[0]["run_id"] == store.run_id
        assert store.get_logs(stage="translate")[0]["message"] == "Translating bill.pdf"
