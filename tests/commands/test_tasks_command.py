"""Tests for the tasks commands."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from pomotrack_cli.commands.tasks import app
from pomotrack_cli.models.core import Task
from pomotrack_cli.services.api.client import APIError
from pomotrack_cli.services.task_service import TaskService

runner = CliRunner()


@pytest.fixture(autouse=True)
def client(mocker, fake_client):
    mocker.patch("pomotrack_cli.commands.tasks.get_client", return_value=fake_client)
    return fake_client


def test_list_tasks_json(patch_methods) -> None:
    patch_methods(
        TaskService,
        list_tasks=[Task(id="t1", name="Write"), Task(id="t2", name="Read")],
    )

    result = runner.invoke(app, ["list", "--output", "json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert [t["name"] for t in data] == ["Write", "Read"]


def test_list_tasks_table_empty(patch_methods) -> None:
    patch_methods(TaskService, list_tasks=[])

    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0
    assert "No items found" in result.stdout


def test_add_task(patch_methods) -> None:
    mocks = patch_methods(TaskService, create_task=Task(id="t1", name="Write"))

    result = runner.invoke(app, ["add", "Write", "-d", "chapter 1"])

    assert result.exit_code == 0
    assert "Task created" in result.stdout
    mocks["create_task"].assert_awaited_once_with("Write", "chapter 1")


def test_add_blank_task_is_invalid_argument(fake_client) -> None:
    result = runner.invoke(app, ["add", "   "])

    assert result.exit_code == 2
    assert "Task name is required" in result.stdout


def test_edit_keeps_unchanged_fields(patch_methods) -> None:
    mocks = patch_methods(
        TaskService,
        get_task=Task(id="t1", name="Write", description="old"),
        update_task=Task(id="t1", name="Rewrite", description="old"),
    )

    result = runner.invoke(app, ["edit", "t1", "--name", "Rewrite"])

    assert result.exit_code == 0
    mocks["update_task"].assert_awaited_once_with("t1", "Rewrite", "old")


def test_edit_missing_task_exits_not_found(patch_methods) -> None:
    patch_methods(TaskService, get_task=APIError("Task not found", 404))

    result = runner.invoke(app, ["edit", "nope", "--name", "X"])

    assert result.exit_code == 5
    assert "Task not found" in result.stdout


def test_delete_with_yes(patch_methods) -> None:
    mocks = patch_methods(TaskService, delete_task=None)

    result = runner.invoke(app, ["delete", "t1", "--yes"])

    assert result.exit_code == 0
    mocks["delete_task"].assert_awaited_once_with("t1")


def test_delete_cancelled(patch_methods) -> None:
    mocks = patch_methods(TaskService, delete_task=None)

    result = runner.invoke(app, ["delete", "t1"], input="n\n")

    assert result.exit_code == 0
    mocks["delete_task"].assert_not_awaited()
