"""比例行构建测试。"""
import locale

import pytest

from alarm_distribution.rows import STATE_NAMES, build_rows, format_proportion
from alarm_distribution.schemas import StateDistributionResponse

EXPECTED_ORDER = [
    "Critical", "Major", "Masked", "Minor", "Normal",
    "No template", "Timeout", "Unknown", "Warning",
]


class TestBuildRows:
    def test_order_and_count(self):
        rows = build_rows(StateDistributionResponse())
        assert [r.state for r in rows] == EXPECTED_ORDER
        assert list(STATE_NAMES) == EXPECTED_ORDER

    def test_all_zero(self):
        rows = build_rows(StateDistributionResponse())
        assert all(r.proportion == 0.0 for r in rows)
        assert all(r.display == "0.00%" for r in rows)

    def test_critical_and_normal(self, sample_states):
        rows = {r.state: r for r in build_rows(sample_states)}
        assert rows["Critical"].proportion == 0.25
        assert rows["Critical"].display == "25.00%"
        assert rows["Normal"].proportion == 0.75
        assert rows["Normal"].display == "75.00%"
        others = [r for name, r in rows.items() if name not in ("Critical", "Normal")]
        assert all(r.proportion == 0.0 for r in others)

    def test_each_field_maps_to_its_row(self):
        fields = list(StateDistributionResponse.model_fields)
        states = StateDistributionResponse(**{f: i + 1 for i, f in enumerate(fields)})
        rows = build_rows(states)
        assert [r.proportion for r in rows] == pytest.approx([(i + 1) / 100 for i in range(9)])

    def test_proportions_sum_to_one(self):
        states = StateDistributionResponse(
            percentage_critical=12.5, percentage_major=7.25, percentage_masked=0.1,
            percentage_minor=3.15, percentage_normal=60, percentage_no_template=1,
            percentage_timeout=5, percentage_unknown=10, percentage_warning=1,
        )
        total = sum(r.proportion for r in build_rows(states))
        assert total == pytest.approx(1.0, abs=1e-9)

    def test_cells(self, sample_states):
        row = build_rows(sample_states)[0]
        assert row.cells() == [
            {"value": "Critical"},
            {"value": 0.25, "display_value": "25.00%"},
        ]


class TestFormatProportion:
    def test_half(self):
        assert format_proportion(0.5) == "50.00%"

    def test_rounding(self):
        assert format_proportion(0.123456) == "12.35%"

    def test_full(self):
        assert format_proportion(1.0) == "100.00%"


def _fake_localeconv(decimal_point, thousands_sep):
    conv = locale.localeconv()
    conv.update({
        "decimal_point": decimal_point,
        "thousands_sep": thousands_sep,
        "grouping": [3, 3, 0],
    })
    return lambda: conv


class TestLocaleDisplay:
    def test_comma_decimal_point(self, monkeypatch):
        monkeypatch.setattr(locale, "localeconv", _fake_localeconv(",", "."))
        assert format_proportion(0.123456) == "12,35%"

    def test_digit_grouping(self, monkeypatch):
        monkeypatch.setattr(locale, "localeconv", _fake_localeconv(",", "."))
        assert format_proportion(12345.678) == "1.234.567,80%"

    def test_rows_follow_locale(self, monkeypatch, sample_states):
        monkeypatch.setattr(locale, "localeconv", _fake_localeconv(",", "."))
        rows = {r.state: r for r in build_rows(sample_states)}
        assert rows["Critical"].display == "25,00%"
        assert rows["Critical"].proportion == 0.25

    def test_installed_comma_locale(self):
        for name in ("de_DE.UTF-8", "de_DE.utf8", "nl_NL.UTF-8", "fr_FR.UTF-8"):
            try:
                locale.setlocale(locale.LC_NUMERIC, name)
                break
            except locale.Error:
                continue
        else:
            pytest.skip("no comma-decimal locale installed")
        assert format_proportion(0.5) == "50,00%"
