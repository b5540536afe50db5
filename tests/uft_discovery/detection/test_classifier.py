"""Tests for marker-based classification."""

from pathlib import Path

import pytest

from uft_discovery.detection.classifier import (
    classify_directory,
    is_resource_file,
    is_test_main_file,
    list_entries,
    owning_test_folder,
)
from uft_discovery.detection.models import TestKind


class TestClassifyDirectory:
    def test_api_marker(self, workspace, touch):
        touch(workspace, "script.st")
        touch(workspace, "notes.txt")
        assert classify_directory(list_entries(workspace)) == TestKind.API

    def test_gui_marker(self, workspace, touch):
        touch(workspace, "Test.tsp")
        assert classify_directory(list_entries(workspace)) == TestKind.GUI

    def test_no_marker(self, workspace, touch):
        touch(workspace, "data.xlsx")
        (workspace / "Sub").mkdir()
        assert classify_directory(list_entries(workspace)) == TestKind.NONE

    def test_marker_is_case_insensitive(self, workspace, touch):
        touch(workspace, "SCRIPT.ST")
        assert classify_directory(list_entries(workspace)) == TestKind.API

    def test_directory_named_like_marker_is_ignored(self, workspace):
        (workspace / "folder.st").mkdir()
        assert classify_directory(list_entries(workspace)) == TestKind.NONE

    def test_marker_in_subdirectory_does_not_count(self, workspace, touch):
        touch(workspace, "Sub/script.st")
        assert classify_directory(list_entries(workspace)) == TestKind.NONE

    def test_first_marker_in_name_order_decides(self, workspace, touch):
        touch(workspace, "a.tsp")
        touch(workspace, "b.st")
        assert classify_directory(list_entries(workspace)) == TestKind.GUI

    def test_empty_listing(self):
        assert classify_directory([]) == TestKind.NONE


def test_list_entries_of_missing_directory(tmp_path):
    assert list_entries(tmp_path / "missing") == []


@pytest.mark.parametrize(
    "name,expected",
    [
        ("data.xlsx", True),
        ("DATA.XLS", True),
        ("Tests/Login/table.Xlsx", True),
        ("data.csv", False),
        ("xlsx", False),
    ],
)
def test_is_resource_file(name, expected):
    assert is_resource_file(name) is expected


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Tests/A/script.st", True),
        ("Tests/A/Test.TSP", True),
        ("Tests/A/Action1/Script.mts", False),
        ("data.xlsx", False),
    ],
)
def test_is_test_main_file(name, expected):
    assert is_test_main_file(name) is expected


def test_owning_test_folder():
    assert owning_test_folder(Path("/ws/Tests/A/script.st")) == Path("/ws/Tests/A")
    assert owning_test_folder(Path("/ws/Tests/A/data.xlsx")) is None
