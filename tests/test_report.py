"""
Report Formatting Tests
"""

import json

from code_control.models import DiffResult
from code_control.report import CHANGES_DETECTED, NO_CHANGES, format_diff, format_written, regions_to_json


class TestFormatDiff:
    def test_no_changes(self):
        assert format_diff(DiffResult()) == [NO_CHANGES]

    def test_removed_then_added_with_one_based_lines(self, make_region):
        removed = make_region(path="src/index.js", start=(2, 0), end=(2, 14))
        added = make_region(path="src/index.js", start=(3, 0), end=(5, 1))

        lines = format_diff(DiffResult(removed=[removed], added=[added]))

        assert lines == [
            CHANGES_DETECTED,
            "\t- src/index.js;3:3",
            "\t+ src/index.js;4:6",
        ]

    def test_only_additions(self, make_region):
        lines = format_diff(DiffResult(added=[make_region(path="a.js", start=(0, 0), end=(0, 3))]))

        assert lines == [CHANGES_DETECTED, "\t+ a.js;1:1"]


class TestFormatWritten:
    def test_plural(self):
        assert format_written(".control-log", 2) == ".control-log generated (2 regions)."

    def test_singular(self):
        assert format_written("out.log", 1) == "out.log generated (1 region)."


class TestRegionsToJson:
    def test_fields(self, make_region):
        data = json.loads(regions_to_json([make_region()]))

        assert data == [
            {
                "path": "src/index.js",
                "annotation": "// control T-1",
                "content": "doSomething();",
                "start": {"row": 1, "column": 0},
                "end": {"row": 1, "column": 14},
            }
        ]

    def test_unicode_kept_verbatim(self, make_region):
        assert "héllo" in regions_to_json([make_region(content="'héllo'")])

    def test_empty(self):
        assert json.loads(regions_to_json([])) == []
