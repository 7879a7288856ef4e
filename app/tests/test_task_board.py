import pytest

from app.client.api import TaskAPIError
from app.client.task_board import TaskBoard, apply_filter, normalize_task
from app.utils.notifications import Notifier


class StubAPI:
    """Scriptable stand-in for TaskAPI; queue a TaskAPIError to make a call fail."""

    def __init__(self, tasks=None):
        self.tasks = tasks or []
        self.failures = {}
        self.calls = []

    def fail(self, operation, message="boom"):
        self.failures[operation] = TaskAPIError(message)

    def _maybe_fail(self, operation):
        if operation in self.failures:
            raise self.failures.pop(operation)

    def get_all_tasks(self):
        self.calls.append(("list",))
        self._maybe_fail("list")
        return [dict(task) for task in self.tasks]

    def create_task(self, data):
        self.calls.append(("create", data))
        self._maybe_fail("create")
        return {"id": 99, "completed": 0, "createdAt": "2024-02-01T00:00:00", "dueDate": None, **data}

    def update_task(self, task_id, data):
        self.calls.append(("update", task_id, data))
        self._maybe_fail("update")
        current = next(task for task in self.tasks if task["id"] == task_id)
        return {**current, **data}

    def delete_task(self, task_id):
        self.calls.append(("delete", task_id))
        self._maybe_fail("delete")
        return next(task for task in self.tasks if task["id"] == task_id)


SCENARIO = [
    {"id": 1, "title": "A", "completed": False, "createdAt": "2024-01-01"},
    {"id": 2, "title": "B", "completed": True, "createdAt": "2024-01-03"},
]


@pytest.fixture()
def stub():
    return StubAPI([dict(task) for task in SCENARIO])


@pytest.fixture()
def stub_board(stub):
    return TaskBoard(api=stub, notifier=Notifier())


def titles(tasks):
    return [task["title"] for task in tasks]


@pytest.mark.parametrize("value, expected", [
    (1, True),
    ("true", True),
    (None, False),
    (True, True),
    (False, False),
    (0, False),
])
def test_normalize_completed_on_display(value, expected):
    assert normalize_task({"id": 1, "completed": value})["completed"] is expected


def test_missing_completed_normalizes_false():
    assert normalize_task({"id": 1})["completed"] is False


class TestLoad:
    def test_starts_in_initial_loading(self, stub_board):
        assert stub_board.is_initial_loading is True
        assert stub_board.is_ready is False

    def test_filter_and_counts_scenario(self, stub_board):
        stub_board.load_tasks()
        stub_board.set_filter("incomplete")

        assert stub_board.is_ready
        assert titles(stub_board.filtered_tasks) == ["A"]
        assert stub_board.task_counts == {"all": 2, "completed": 1, "incomplete": 1}

    def test_all_filter_sorts_newest_first(self, stub_board):
        stub_board.load_tasks()
        assert titles(stub_board.filtered_tasks) == ["B", "A"]

    def test_failure_notifies_and_becomes_ready(self, stub, stub_board):
        stub.fail("list")
        stub_board.load_tasks()

        assert stub_board.is_ready
        assert stub_board.tasks == []
        assert stub_board.notifier.last.level == "error"
        assert stub_board.notifier.last.message == "Failed to load tasks"


class TestCreate:
    def test_prepends_and_notifies(self, stub_board):
        stub_board.load_tasks()
        created = stub_board.create_task({"title": "X", "description": "Y"})

        assert created["completed"] is False
        assert stub_board.tasks[0]["id"] == 99
        assert titles(stub_board.filtered_tasks)[0] == "X"
        assert stub_board.notifier.last.message == "Task created successfully!"
        assert stub_board.is_loading is False

    def test_loading_flag_set_during_call(self, stub, stub_board):
        seen = []
        original = stub.create_task

        def watching(data):
            seen.append(stub_board.is_loading)
            return original(data)

        stub.create_task = watching
        stub_board.create_task({"title": "X", "description": "Y"})

        assert seen == [True]
        assert stub_board.is_loading is False

    def test_failure_leaves_collection(self, stub, stub_board):
        stub_board.load_tasks()
        stub.fail("create")

        assert stub_board.create_task({"title": "X", "description": "Y"}) is None
        assert len(stub_board.tasks) == 2
        assert stub_board.notifier.last.message == "Failed to create task"
        assert stub_board.is_loading is False


class TestUpdate:
    @pytest.mark.parametrize("data, message", [
        ({"completed": True}, "Task completed!"),
        ({"completed": False}, "Task marked as incomplete"),
        ({"title": "Renamed"}, "Task updated successfully!"),
    ])
    def test_message_depends_on_completed(self, stub_board, data, message):
        stub_board.load_tasks()
        stub_board.update_task(1, data)
        assert stub_board.notifier.last.message == message

    def test_replaces_in_place(self, stub_board):
        stub_board.load_tasks()
        stub_board.update_task(1, {"completed": "yes"})

        assert [task["id"] for task in stub_board.tasks] == [1, 2]
        assert stub_board.tasks[0]["completed"] is True
        assert stub_board.task_counts == {"all": 2, "completed": 2, "incomplete": 0}

    def test_failure_keeps_state(self, stub, stub_board):
        stub_board.load_tasks()
        before = list(stub_board.tasks)
        stub.fail("update")

        assert stub_board.update_task(1, {"completed": True}) is None
        assert stub_board.tasks == before
        assert stub_board.notifier.last.message == "Failed to update task"


class TestDelete:
    def test_removes_by_id(self, stub_board):
        stub_board.load_tasks()

        assert stub_board.delete_task(2) is True
        assert titles(stub_board.tasks) == ["A"]
        assert stub_board.notifier.last.message == "Task deleted successfully!"

    def test_failure_keeps_item(self, stub, stub_board):
        stub_board.load_tasks()
        stub.fail("delete", "Task not found")

        assert stub_board.delete_task(2) is False
        assert titles(stub_board.tasks) == ["A", "B"]
        assert stub_board.notifier.last.message == "Failed to delete task"


def test_ties_keep_relative_order():
    tasks = [
        {"id": 1, "title": "first", "completed": False, "createdAt": "2024-01-01T10:00:00"},
        {"id": 2, "title": "second", "completed": False, "createdAt": "2024-01-01T10:00:00"},
        {"id": 3, "title": "newest", "completed": False, "createdAt": "2024-01-02T10:00:00"},
    ]
    assert titles(apply_filter(tasks, "all")) == ["newest", "first", "second"]


def test_unknown_filter_rejected(stub_board):
    with pytest.raises(ValueError):
        stub_board.set_filter("archived")


def test_notifier_callback_receives_toasts(stub):
    received = []
    board = TaskBoard(api=stub, notifier=Notifier(on_toast=received.append))
    board.load_tasks()
    board.delete_task(1)

    assert [toast.message for toast in received] == ["Task deleted successfully!"]


def test_create_then_list_against_app(board):
    board.load_tasks()
    board.create_task({"title": "Older", "description": "first"})
    board.create_task({"title": "X", "description": "Y"})

    fresh = TaskBoard(api=board.api, notifier=Notifier())
    fresh.load_tasks()

    assert titles(fresh.filtered_tasks)[0] == "X"
    assert fresh.filtered_tasks[0]["dueDate"] is None
    assert fresh.notifier.toasts == []
