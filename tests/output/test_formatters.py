"""Tests for the format_result dispatcher and OutputSettings."""

import json

from roomctl.output.formatters import OutputSettings, format_result
from roomctl.services.result import ServiceResult


def _show() -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="show",
        data={
            "prefix": "IC",
            "count": 2,
            "posts": ["IC01 – PC1 (Ana Ruiz)", "IC02 – PC2 (Bea Soto)"],
        },
    )


def _err() -> ServiceResult:
    return ServiceResult.failure("migrate", "NOTHING_TO_IMPORT", "Nothing to import from x.txt")


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResultJSON:
    def test_json_mode_returns_valid_json(self) -> None:
        data = json.loads(format_result(_show(), settings=OutputSettings(json_output=True)))
        assert data["ok"] is True
        assert data["op"] == "show"
        assert data["data"]["count"] == 2

    def test_json_mode_error(self) -> None:
        data = json.loads(format_result(_err(), settings=OutputSettings(json_output=True)))
        assert data["ok"] is False
        assert data["error"]["code"] == "NOTHING_TO_IMPORT"

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(_show(), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["op"] == "show"


class TestFormatResultQuiet:
    def test_quiet_lists_posts(self) -> None:
        output = format_result(_show(), settings=OutputSettings(quiet=True))
        assert output.splitlines() == ["IC01 – PC1 (Ana Ruiz)", "IC02 – PC2 (Bea Soto)"]

    def test_quiet_ok(self) -> None:
        result = ServiceResult(ok=True, op="clear", data={"deleted": 3, "prefix": None})
        assert format_result(result, settings=OutputSettings(quiet=True)) == "OK: clear"

    def test_quiet_error(self) -> None:
        output = format_result(_err(), settings=OutputSettings(quiet=True))
        assert output == "ERROR: migrate — Nothing to import from x.txt"


class TestFormatResultRich:
    def test_default_is_rich(self) -> None:
        output = format_result(_show())
        assert output.splitlines()[0] == "IC* – 2 posts"
