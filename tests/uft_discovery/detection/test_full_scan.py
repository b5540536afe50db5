"""Tests for the full workspace scan."""

from uft_discovery.detection.models import DetectionResult, Status, TestKind
from uft_discovery.detection.scanner import FullTreeScanner
from uft_discovery.scm.records import MoveInfo


class TestFullTreeScanner:
    """FullTreeScanner classifies every test folder and loose data table."""

    def test_single_api_test(self, workspace, touch):
        touch(workspace, "Tests/LoginTest/script.st")

        result = FullTreeScanner(workspace).scan()

        assert len(result.tests) == 1
        test = result.tests[0]
        assert test.package == "Tests"
        assert test.name == "LoginTest"
        assert test.uft_test_type == TestKind.API
        assert test.status == Status.NEW
        assert test.executable is True
        assert result.resource_files == []

    def test_gui_test(self, workspace, touch):
        touch(workspace, "Suite/Gui/Checkout/Test.tsp")

        result = FullTreeScanner(workspace).scan()

        assert [(t.package, t.name, t.uft_test_type) for t in result.tests] == [
            ("Suite\\Gui", "Checkout", TestKind.GUI)
        ]

    def test_does_not_descend_into_test_folder(self, workspace, touch):
        """Subfolders and data tables of a test folder belong to the test."""
        touch(workspace, "Tests/A/script.st")
        touch(workspace, "Tests/A/data.xlsx")
        touch(workspace, "Tests/A/Sub/other.st")
        touch(workspace, "Tests/A/Sub/more.xls")

        result = FullTreeScanner(workspace).scan()

        assert [t.full_path for t in result.tests] == ["Tests\\A"]
        assert result.resource_files == []

    def test_loose_data_tables(self, workspace, touch):
        touch(workspace, "Data/shared.xlsx")
        touch(workspace, "Data/Nested/more.XLS")
        touch(workspace, "Data/readme.txt")

        result = FullTreeScanner(workspace).scan()

        assert result.tests == []
        assert {r.relative_path for r in result.resource_files} == {
            "Data\\shared.xlsx",
            "Data\\Nested\\more.XLS",
        }
        assert all(r.status == Status.NEW for r in result.resource_files)

    def test_plain_folders_never_become_tests(self, workspace, touch):
        touch(workspace, "Tests/Group/Inner/script.st")
        touch(workspace, "Tests/Group/readme.txt")

        result = FullTreeScanner(workspace).scan()

        assert [t.full_path for t in result.tests] == ["Tests\\Group\\Inner"]

    def test_test_folder_directly_under_root(self, workspace, touch):
        touch(workspace, "LoginTest/Test.tsp")

        result = FullTreeScanner(workspace).scan()

        assert result.tests[0].package == ""
        assert result.tests[0].name == "LoginTest"

    def test_workspace_root_is_a_test(self, workspace, touch):
        touch(workspace, "script.st")
        touch(workspace, "Sub/data.xlsx")

        result = FullTreeScanner(workspace).scan()

        assert [(t.package, t.name) for t in result.tests] == [("", workspace.name)]
        assert result.resource_files == []

    def test_skips_scm_metadata(self, workspace, touch):
        touch(workspace, ".git/objects/script.st")
        touch(workspace, ".svn/pristine/data.xlsx")

        result = FullTreeScanner(workspace).scan()

        assert not result.has_changes()

    def test_reads_api_test_description(self, workspace, touch):
        touch(
            workspace,
            "Tests/LoginTest/LoginTest.st",
            "<?xml version='1.0'?><Test><Name>Login</Name>"
            "<Description> Logs a user in </Description></Test>",
        )

        result = FullTreeScanner(workspace).scan()

        assert result.tests[0].description == "Logs a user in"

    def test_malformed_marker_has_no_description(self, workspace, touch):
        touch(workspace, "Tests/LoginTest/LoginTest.st", "not xml <<")

        result = FullTreeScanner(workspace).scan()

        assert result.tests[0].description is None


def test_scan_folder_carries_move_only_on_top_level_test(workspace, touch):
    touch(workspace, "Tests/A/script.st")
    scanner = FullTreeScanner(workspace)
    result = DetectionResult()

    scanner.scan_folder(
        workspace / "Tests" / "A",
        result,
        Status.MODIFIED,
        move=MoveInfo("Tests/Old/script.st", "Tests/A/script.st"),
    )

    assert result.tests[0].status == Status.MODIFIED
    assert result.tests[0].change_set_src == "Tests/Old/script.st"
    assert result.tests[0].change_set_dst == "Tests/A/script.st"


def test_scan_folder_nested_entities_have_no_move(workspace, touch):
    touch(workspace, "Group/A/script.st")
    touch(workspace, "Group/data.xlsx")
    scanner = FullTreeScanner(workspace)
    result = DetectionResult()

    scanner.scan_folder(workspace / "Group", result, Status.NEW, move=MoveInfo("x", "y"))

    assert result.tests[0].change_set_src is None
    assert result.resource_files[0].change_set_src is None
