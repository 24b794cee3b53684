# Panel components of the task dashboard
#
# User-entered text (titles, descriptions) is always escaped and shown
# through HTML panes, never through Markdown.
from html import escape

import panel as pn

from taskboard_dashboard.board import TaskBoard


def description_or_none(value: str | None) -> str | None:
    """An empty description field means no description."""
    return value or None


def title_html(task) -> str:
    text = escape(task.title)
    if task.is_completed:
        return f'<s style="color:#6b7280">{text}</s>'
    return f'<strong>{text}</strong>'


def description_html(task) -> str:
    color = "#9ca3af" if task.is_completed else "#4b5563"
    return f'<p style="white-space:pre-wrap;color:{color}">{escape(task.description)}</p>'


def format_task_dates(task) -> str:
    return (
        f"Created: {task.created_at:%Y-%m-%d} • "
        f"Updated: {task.updated_at:%Y-%m-%d}"
    )


def status_badge(task) -> pn.pane.HTML:
    if task.is_completed:
        label, colors = "Done", "background:#dcfce7;color:#166534"
    else:
        label, colors = "Pending", "background:#ffedd5;color:#9a3412"
    return pn.pane.HTML(
        f'<span style="{colors};border-radius:8px;padding:2px 8px;font-size:12px">{label}</span>'
    )


# region Statistics

def stats_row(tasks, pending, completed) -> pn.Row:
    return pn.Row(
        pn.indicators.Number(name="Total tasks", value=len(tasks), default_color="#2563eb"),
        pn.indicators.Number(name="Pending", value=len(pending), default_color="#ea580c"),
        pn.indicators.Number(name="Completed", value=len(completed), default_color="#16a34a"),
    )

# endregion


# region Create form

def create_form(board: TaskBoard) -> pn.Card:
    title_input = pn.widgets.TextInput(name="Task title", placeholder="Enter a task title...")
    description_input = pn.widgets.TextAreaInput(
        name="Description (optional)", placeholder="Add a description...", rows=3
    )
    completed_checkbox = pn.widgets.Checkbox(name="Mark as completed")
    save_button = pn.widgets.Button(
        name="Save task", button_type="primary", icon="plus",
        disabled=board.param.is_loading,
    )

    def on_save(event):
        if not title_input.value:
            return
        task = board.create(
            title_input.value,
            description=description_or_none(description_input.value),
            is_completed=completed_checkbox.value,
        )
        if task is not None:
            title_input.value = ""
            description_input.value = ""
            completed_checkbox.value = False

    save_button.on_click(on_save)

    return pn.Card(
        title_input, description_input, completed_checkbox, save_button,
        title="New task", collapsed=False,
    )

# endregion


# region Edit form

def edit_form(board: TaskBoard, task) -> pn.Card:
    title_input = pn.widgets.TextInput(name="Task title", value=task.title)
    description_input = pn.widgets.TextAreaInput(
        name="Description", value=task.description or "", rows=3
    )
    completed_checkbox = pn.widgets.Checkbox(name="Mark as completed", value=task.is_completed)
    save_button = pn.widgets.Button(name="Save changes", button_type="primary")
    cancel_button = pn.widgets.Button(name="Cancel", button_type="light")

    def on_save(event):
        if not title_input.value:
            return
        board.save_edit(
            title_input.value,
            description_or_none(description_input.value),
            completed_checkbox.value,
        )

    save_button.on_click(on_save)
    cancel_button.on_click(lambda event: board.stop_editing())

    return pn.Card(
        title_input, description_input, completed_checkbox,
        pn.Row(cancel_button, save_button),
        title=f"Edit task: {escape(task.title)}",
    )

# endregion


# region Delete confirmation

def delete_confirmation(board: TaskBoard, task) -> pn.Card:
    cancel_button = pn.widgets.Button(name="Cancel", button_type="light")
    confirm_button = pn.widgets.Button(name="Yes, delete", button_type="danger",
                                       disabled=board.param.is_loading)

    cancel_button.on_click(lambda event: board.cancel_delete())
    confirm_button.on_click(lambda event: board.confirm_delete())

    return pn.Card(
        pn.pane.HTML(
            f"<p>Are you sure you want to delete the task \"{escape(task.title)}\"? "
            "This action cannot be undone.</p>"
        ),
        pn.Row(cancel_button, confirm_button),
        title="Delete task", header_background="#fee2e2",
    )

# endregion


# region Task list

def task_row(board: TaskBoard, task) -> pn.Card:
    toggle_button = pn.widgets.Button(
        name="", icon="circle-check" if task.is_completed else "circle",
        button_type="success" if task.is_completed else "light", width=40,
    )
    toggle_button.on_click(lambda event: board.toggle(task))

    edit_button = pn.widgets.Button(name="", icon="edit", button_type="primary",
                                    button_style="outline", width=40)
    edit_button.on_click(lambda event: board.start_editing(task))

    delete_button = pn.widgets.Button(name="", icon="trash", button_type="danger",
                                      button_style="outline", width=40)
    delete_button.on_click(lambda event: board.request_delete(task))

    details = [pn.Row(pn.pane.HTML(title_html(task)), status_badge(task))]
    if task.description:
        details.append(pn.pane.HTML(description_html(task)))
    details.append(pn.pane.Markdown(format_task_dates(task), styles={"font-size": "11px"}))

    return pn.Card(
        pn.Row(toggle_button, pn.Column(*details), edit_button, delete_button),
        hide_header=True, sizing_mode="stretch_width",
    )


def task_list(board: TaskBoard, tasks) -> pn.Column:
    if not tasks:
        return pn.Column(pn.pane.Markdown(
            "### No tasks yet\nStart by adding your first task!",
            styles={"text-align": "center"},
        ))
    return pn.Column(*[task_row(board, task) for task in tasks], sizing_mode="stretch_width")

# endregion


def build_dashboard(board: TaskBoard):
    """Assemble the dashboard for one board; re-renders when its tasks change."""

    def render_stats(tasks):
        return stats_row(tasks, board.pending_tasks, board.completed_tasks)

    def render_editor(editing):
        return edit_form(board, editing) if editing is not None else pn.Spacer(height=0)

    def render_delete_confirmation(task):
        return delete_confirmation(board, task) if task is not None else pn.Spacer(height=0)

    return pn.template.BootstrapTemplate(
        title="Task Management",
        main=[
            pn.pane.Markdown("Manage your tasks easily and efficiently."),
            pn.panel(pn.bind(render_stats, board.param.tasks)),
            create_form(board),
            pn.panel(pn.bind(render_editor, board.param.editing)),
            pn.panel(pn.bind(render_delete_confirmation, board.param.confirming_delete)),
            pn.panel(pn.bind(task_list, board, board.param.tasks)),
        ],
    )
