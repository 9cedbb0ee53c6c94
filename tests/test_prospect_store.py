# tests/test_prospect_store.py
from funnelscope.store import prospects as store


def test_create_get_update_delete(data_dir, webinar_row):
    row = store.create_prospect(webinar_row, user_id="u1")
    pid = row["id"]
    assert row["status"] == "new"
    assert row["user_id"] == "u1"
    assert row["created_at"] == row["updated_at"]
    assert (data_dir / "prospects.json").exists()

    assert store.get_prospect(pid)["business_name"] == "Rao Fitness Academy"

    updated = store.update_prospect(pid, {"status": "contacted", "id": "hijack", "user_id": "u2"})
    assert updated["status"] == "contacted"
    assert updated["id"] == pid
    assert updated["user_id"] == "u1"

    assert store.delete_prospect(pid) is True
    assert store.get_prospect(pid) is None
    assert store.delete_prospect(pid) is False


def test_missing_ids(data_dir):
    assert store.get_prospect("nope") is None
    assert store.update_prospect("nope", {"status": "won"}) is None
    assert store.save_projection_inputs("nope", {"projected_daily_spend": 1}) is None


def test_list_filters_by_owner(data_dir, webinar_row):
    store.create_prospect(webinar_row, user_id="u1")
    store.create_prospect({**webinar_row, "name": "Vikram"}, user_id="u2")
    assert len(store.list_prospects()) == 2
    assert [r["name"] for r in store.list_prospects(user_id="u2")] == ["Vikram"]


def test_search_by_name_business_and_status(data_dir, webinar_row):
    store.create_prospect(webinar_row)
    store.create_prospect({"name": "Meera Iyer", "business_name": "Iyer Dance Studio", "status": "won"})

    assert [r["name"] for r in store.search_prospects("fitness")] == ["Asha Rao"]
    assert [r["name"] for r in store.search_prospects("IYER")] == ["Meera Iyer"]
    assert [r["name"] for r in store.search_prospects(None, "won")] == ["Meera Iyer"]
    assert len(store.search_prospects("", "all")) == 2
    assert store.search_prospects("rao", "won") == []


def test_save_projection_inputs_only_touches_projection_fields(data_dir, webinar_row):
    pid = store.create_prospect(webinar_row)["id"]
    row = store.save_projection_inputs(pid, {
        "projected_daily_spend": 10000,
        "scaling_increment_percent": 25,
        "current_daily_spend": 1,
        "name": "changed",
    })
    assert row["projected_daily_spend"] == 10000
    assert row["scaling_increment_percent"] == 25
    assert row["current_daily_spend"] == 4000
    assert row["name"] == "Asha Rao"


def test_corrupt_store_reads_as_empty(data_dir):
    (data_dir / "prospects.json").write_text("{not json", encoding="utf-8")
    assert store.list_prospects() == []
