"""
Tests for the dashboard's in-memory task list.
"""

from unittest.mock import MagicMock

import panel as pn
import pytest
import requests

from taskboard_dashboard.board import TaskBoard
from taskboard_dashboard.client import TaskServiceClient
from taskboard_dashboard import layout
from factories import make_task


@pytest.fixture
def service():
    return MagicMock(spec=TaskServiceClient)


@pytest.fixture
def board(service):
    service.get_tasks.return_value = [
        make_task(id=2, title="Newest"),
        make_task(id=1, title="Oldest", is_completed=True),
    ]
    board = TaskBoard(client=service)
    board.load()
    return board


class TestLoad:

    def test_load(self, board):
        assert [t.id for t in board.tasks] == [2, 1]

    def test_load_failure_keeps_state(self, board, service):
        service.get_tasks.side_effect = requests.ConnectionError("refused")

        assert board.load() is False
        assert [t.id for t in board.tasks] == [2, 1]

    def test_boards_do_not_share_tasks(self, board, service):
        other = TaskBoard(client=service)
        assert other.tasks == []
        assert len(board.tasks) == 2


class TestViews:

    def test_pending_and_completed(self, board):
        assert [t.id for t in board.pending_tasks] == [2]
        assert [t.id for t in board.completed_tasks] == [1]

    def test_views_follow_updates(self, board, service):
        service.update_task.return_value = make_task(id=2, title="Newest", is_completed=True)

        board.toggle(board.tasks[0])

        assert board.pending_tasks == []
        assert len(board.completed_tasks) == 2


class TestMutations:

    def test_create_appends(self, board, service):
        service.create_task.return_value = make_task(id=3, title="Created")

        task = board.create("Created")

        assert task.id == 3
        assert [t.id for t in board.tasks] == [2, 1, 3]
        service.create_task.assert_called_once_with("Created", description=None, is_completed=False)
        assert board.is_loading is False

    def test_create_failure_keeps_state(self, board, service):
        service.create_task.side_effect = requests.ConnectionError("refused")

        assert board.create("Lost") is None
        assert [t.id for t in board.tasks] == [2, 1]
        assert board.is_loading is False

    def test_update_replaces(self, board, service):
        service.update_task.return_value = make_task(id=1, title="Renamed", is_completed=True)

        board.update(1, title="Renamed")

        assert [t.title for t in board.tasks] == ["Newest", "Renamed"]
        service.update_task.assert_called_once_with(1, title="Renamed")

    def test_update_absent_keeps_state(self, board, service):
        service.update_task.return_value = None

        assert board.update(1, title="Gone") is None
        assert [t.title for t in board.tasks] == ["Newest", "Oldest"]

    def test_toggle(self, board, service):
        service.update_task.return_value = make_task(id=1, title="Oldest", is_completed=False)

        board.toggle(board.tasks[1])

        service.update_task.assert_called_once_with(1, is_completed=False)
        assert board.tasks[1].is_completed is False

    def test_toggle_failure_keeps_state(self, board, service):
        service.update_task.side_effect = requests.Timeout("slow")

        assert board.toggle(board.tasks[0]) is None
        assert board.tasks[0].is_completed is False

    def test_delete_filters(self, board, service):
        service.delete_task.return_value = True

        assert board.delete(2) is True
        assert [t.id for t in board.tasks] == [1]

    def test_delete_nothing_matched(self, board, service):
        service.delete_task.return_value = False

        assert board.delete(99) is False
        assert len(board.tasks) == 2

    def test_delete_failure_keeps_state(self, board, service):
        service.delete_task.side_effect = requests.HTTPError("500")

        assert board.delete(2) is False
        assert len(board.tasks) == 2


class TestEditing:

    def test_save_edit(self, board, service):
        service.update_task.return_value = make_task(id=2, title="Edited", description=None)
        board.start_editing(board.tasks[0])

        board.save_edit("Edited", None, False)

        service.update_task.assert_called_once_with(2, title="Edited", description=None, is_completed=False)
        assert board.tasks[0].title == "Edited"
        assert board.editing is None

    def test_save_without_editing(self, board, service):
        assert board.save_edit("Nothing", None, False) is None
        service.update_task.assert_not_called()

    def test_cancel(self, board):
        board.start_editing(board.tasks[0])
        board.stop_editing()
        assert board.editing is None


    def test_save_failure_keeps_form_open(self, board, service):
        service.update_task.side_effect = requests.ConnectionError("refused")
        board.start_editing(board.tasks[0])

        assert board.save_edit("Edited", None, False) is None

        assert board.editing is not None
        assert board.editing.id == 2
        assert board.tasks[0].title == "Newest"
        assert board.is_loading is False

    def test_save_for_missing_task_closes_form(self, board, service):
        service.update_task.return_value = None
        board.start_editing(board.tasks[0])

        assert board.save_edit("Edited", None, False) is None
        assert board.editing is None


class TestDeleteConfirmation:

    def test_request_does_not_delete(self, board, service):
        board.request_delete(board.tasks[0])

        assert board.confirming_delete.id == 2
        service.delete_task.assert_not_called()
        assert len(board.tasks) == 2

    def test_cancel(self, board, service):
        board.request_delete(board.tasks[0])
        board.cancel_delete()

        assert board.confirming_delete is None
        service.delete_task.assert_not_called()

    def test_confirm(self, board, service):
        service.delete_task.return_value = True
        board.request_delete(board.tasks[0])

        assert board.confirm_delete() is True

        service.delete_task.assert_called_once_with(2)
        assert [t.id for t in board.tasks] == [1]
        assert board.confirming_delete is None

    def test_confirm_failure_keeps_confirmation(self, board, service):
        service.delete_task.side_effect = requests.ConnectionError("refused")
        board.request_delete(board.tasks[0])

        assert board.confirm_delete() is False

        assert board.confirming_delete.id == 2
        assert len(board.tasks) == 2

    def test_confirm_without_request(self, board, service):
        assert board.confirm_delete() is False
        service.delete_task.assert_not_called()

    def test_loading_while_deleting(self, board, service):
        seen = []
        service.delete_task.side_effect = lambda task_id: seen.append(board.is_loading) or True

        board.delete(2)

        assert seen == [True]
        assert board.is_loading is False


class TestLayout:

    def test_description_or_none(self):
        assert layout.description_or_none("") is None
        assert layout.description_or_none(None) is None
        assert layout.description_or_none("text") == "text"

    def test_format_task_dates(self):
        task = make_task()
        assert layout.format_task_dates(task) == "Created: 2024-06-15 • Updated: 2024-06-15"

    def test_empty_task_list(self, service):
        board = TaskBoard(client=service)
        column = layout.task_list(board, [])
        assert len(column.objects) == 1
        assert "No tasks yet" in column.objects[0].object

    def test_task_list_has_one_row_per_task(self, board):
        column = layout.task_list(board, board.tasks)
        assert len(column.objects) == 2

    def test_stats_row(self, board):
        row = layout.stats_row(board.tasks, board.pending_tasks, board.completed_tasks)
        assert [indicator.value for indicator in row.objects] == [2, 1, 1]

    def test_html_title_rendered_as_text(self):
        task = make_task(title='<img src=x onerror="alert(1)">', description="<b>desc</b>")

        title = layout.title_html(task)
        description = layout.description_html(task)

        assert "<img" not in title
        assert "&lt;img src=x onerror=&quot;alert(1)&quot;&gt;" in title
        assert "<b>" not in description
        assert "&lt;b&gt;desc&lt;/b&gt;" in description

    def test_markdown_characters_rendered_literally(self):
        assert layout.title_html(make_task(title="a**b")) == "<strong>a**b</strong>"
        assert "~~done_task~~" in layout.title_html(make_task(title="~~done_task~~", is_completed=True))

    def test_task_row_does_not_render_user_text_as_markup(self, board):
        task = make_task(id=5, title='<script>alert(1)</script>', description="**bold**")
        row = layout.task_row(board, task)

        html_objects = [pane.object for pane in row.select(pn.pane.HTML)]
        assert not any("<script>" in obj for obj in html_objects)
        assert any("&lt;script&gt;" in obj for obj in html_objects)
        assert any("**bold**" in obj for obj in html_objects)
        assert not any(task.title in (pane.object or "") for pane in row.select(pn.pane.Markdown))

    def test_edit_form_title_escaped(self, board):
        card = layout.edit_form(board, make_task(title="<i>x</i>"))
        assert card.title == "Edit task: &lt;i&gt;x&lt;/i&gt;"

    def test_delete_button_asks_for_confirmation(self, board, service):
        task = board.tasks[0]
        row = layout.task_row(board, task)
        delete_button = row.select(pn.widgets.Button)[-1]

        delete_button.clicks += 1

        assert board.confirming_delete == task
        service.delete_task.assert_not_called()

    def test_delete_confirmation_escapes_title(self, board):
        card = layout.delete_confirmation(board, make_task(title="<img src=x>"))
        message = card.select(pn.pane.HTML)[0].object
        assert "&lt;img src=x&gt;" in message
        assert "<img" not in message
