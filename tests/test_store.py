import json
from datetime import date

from src.steady.models import Habit
from src.steady.period import Period
from src.steady.stats import StatsAggregator
from src.steady.storage import LocalStorage
from src.steady.store import STORAGE_KEY, THEME_KEY, HabitStore, ThemePreference, seed_habits
from src.steady.streaks import compute_streak

PERIOD = Period(days=31, today=date(2026, 10, 17))


def _storage(tmp_path):
    return LocalStorage(tmp_path / "storage.json")


def _entry(habit_id, **overrides):
    payload = {
        "id": habit_id,
        "name": f"habit {habit_id}",
        "category": "Work",
        "goal": 10,
        "streak": 3,
        "history": [False] * 31,
    }
    payload.update(overrides)
    return payload


def test_storage_round_trips_items(tmp_path):
    storage = _storage(tmp_path)
    assert storage.get_item("missing") is None
    storage.set_item("a", "1")
    storage.set_item("b", "two")
    storage.set_item("a", "3")
    reopened = LocalStorage(tmp_path / "storage.json")
    assert reopened.get_item("a") == "3"
    assert reopened.get_item("b") == "two"
    assert not (tmp_path / "storage.json.tmp").exists()


def test_storage_ignores_corrupt_file(tmp_path):
    (tmp_path / "storage.json").write_text("{not json", encoding="utf-8")
    storage = _storage(tmp_path)
    assert storage.get_item(STORAGE_KEY) is None
    storage.set_item("k", "v")
    assert storage.get_item("k") == "v"


def test_first_run_uses_seed_set(tmp_path):
    store = HabitStore(_storage(tmp_path), PERIOD)
    assert [h.name for h in store.habits] == [
        "Morning Workout",
        "Reading (30 mins)",
        "Drink 2L Water",
        "Code Project",
        "Meditation",
    ]
    for habit in store.habits:
        assert len(habit.history) == 31
        assert habit.streak == compute_streak(habit.history, PERIOD.today_index)
    assert len({h.id for h in store.habits}) == 5


def test_seed_is_repeatable_with_fixed_seed():
    first = seed_habits(PERIOD, seed="7")
    second = seed_habits(PERIOD, seed="7")
    assert [h.history for h in first] == [h.history for h in second]


def test_saved_habits_load_as_stored(tmp_path):
    storage = _storage(tmp_path)
    history = [True] * 31
    storage.set_item(STORAGE_KEY, json.dumps([_entry(11, streak=99, history=history)]))
    store = HabitStore(storage, PERIOD)
    assert len(store.habits) == 1
    habit = store.habits[0]
    assert habit == Habit(id=11, name="habit 11", category="Work", goal=10, streak=99, history=history)


def test_save_overwrites_whole_collection(tmp_path):
    storage = _storage(tmp_path)
    store = HabitStore(storage, PERIOD)
    store.save(store.habits[:2])
    reloaded = HabitStore(storage, PERIOD)
    assert [h.id for h in reloaded.habits] == [1, 2]
    assert reloaded.habits[0].history == store.habits[0].history


def test_empty_saved_collection_is_kept(tmp_path):
    storage = _storage(tmp_path)
    storage.set_item(STORAGE_KEY, "[]")
    assert HabitStore(storage, PERIOD).habits == []


def test_malformed_data_falls_back_to_seed(tmp_path):
    bad_payloads = [
        "{broken",
        json.dumps({"habits": []}),
        json.dumps(["not an object"]),
        json.dumps([{"id": 1, "name": "no history"}]),
        json.dumps([_entry(1, history=[True, "yes"] + [False] * 29)]),
        json.dumps([_entry(1, history=[True] * 30)]),
        json.dumps([_entry(1), _entry(1)]),
    ]
    for raw in bad_payloads:
        storage = _storage(tmp_path)
        storage.set_item(STORAGE_KEY, raw)
        store = HabitStore(storage, PERIOD)
        assert len(store.habits) == 5, raw
        assert store.habits[0].name == "Morning Workout"


def test_get_by_id(tmp_path):
    store = HabitStore(_storage(tmp_path), PERIOD)
    assert store.get(3).name == "Drink 2L Water"
    assert store.get(12345) is None


def test_theme_preference(tmp_path):
    storage = _storage(tmp_path)
    theme = ThemePreference(storage)
    assert not theme.is_dark()
    assert theme.toggle() == "dark"
    assert storage.get_item(THEME_KEY) == "dark"
    assert ThemePreference(_storage(tmp_path)).is_dark()
    assert theme.toggle() == "light"
    assert not theme.is_dark()
    storage.set_item(THEME_KEY, "sepia")
    assert not theme.is_dark()


def test_storage_warns_about_non_string_values(tmp_path, caplog):
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({STORAGE_KEY: [_entry(1)], THEME_KEY: "dark"}), encoding="utf-8")
    storage = LocalStorage(path)
    with caplog.at_level("WARNING", logger="src.steady.storage"):
        assert storage.get_item(STORAGE_KEY) is None
        assert storage.get_item(THEME_KEY) == "dark"
    assert STORAGE_KEY in caplog.text


def test_stored_goal_falls_back_to_default(tmp_path):
    entries = [_entry(1), _entry(2, goal=0), _entry(3, goal=-4), _entry(4, goal=None), _entry(5, goal="12 days")]
    del entries[0]["goal"]
    storage = _storage(tmp_path)
    storage.set_item(STORAGE_KEY, json.dumps(entries))
    store = HabitStore(storage, PERIOD)
    assert [h.goal for h in store.habits] == [20, 20, 20, 20, 12]
    assert store.habits[0].streak == 3
    assert all(StatsAggregator.goal_progress(h)[2] == 0 for h in store.habits)
