"""Tests for importing calibration tables from CSV and Excel."""

from __future__ import annotations

import pandas as pd
import pytest

from navisound_app.config.reference_vessel import REFERENCE_TANKS
from navisound_app.models import TankKind
from navisound_app.services.calibration_import import TankTables, apply_calibration, parse_calibration_file
from navisound_app.services.calibration_tables import CalibrationTableError


def _frame(rows):
    return pd.DataFrame(rows, columns=["Tank", "Table", "Sounding", "Even", "-1.0", "1.0"])


@pytest.fixture
def calibration_csv(tmp_path):
    path = tmp_path / "calibration.csv"
    _frame(
        [
            ["1P", "sounding", 1.0, 100.0, 90.0, 110.0],
            ["1P", "sounding", 0.0, 0.0, 0.0, 0.0],
            ["1P", "heel", 1.0, None, -2.0, 2.0],
            ["1P", "heel", "abc", None, -2.0, 2.0],
            ["DOP", "sounding", 0.5, 10.0, 9.0, 11.0],
        ]
    ).to_csv(path, index=False)
    return path


class TestParseCsv:
    def test_groups_by_tank(self, calibration_csv):
        tables = parse_calibration_file(calibration_csv)
        assert set(tables) == {"1P", "DOP"}

    def test_sounding_rows_sorted(self, calibration_csv):
        table = parse_calibration_file(calibration_csv)["1P"].sounding_table
        assert [r.sounding_m for r in table] == [0.0, 1.0]
        assert table[1].volumes == {0.0: 100.0, -1.0: 90.0, 1.0: 110.0}

    def test_heel_rows_in_metres(self, calibration_csv):
        heel = parse_calibration_file(calibration_csv)["1P"].heel_table
        # The "abc" sounding row is skipped
        assert len(heel) == 1
        assert heel[0].corrections[-1.0] == pytest.approx(-0.02)
        assert heel[0].corrections[1.0] == pytest.approx(0.02)
        assert heel[0].corrections[0.0] == 0.0

    def test_tank_without_heel_rows(self, calibration_csv):
        assert parse_calibration_file(calibration_csv)["DOP"].heel_table == ()

    def test_duplicate_sounding_rejected(self, tmp_path):
        path = tmp_path / "dup.csv"
        _frame(
            [
                ["1P", "sounding", 1.0, 100.0, 90.0, 110.0],
                ["1P", "sounding", 1.0, 101.0, 91.0, 111.0],
            ]
        ).to_csv(path, index=False)
        with pytest.raises(CalibrationTableError, match="1P"):
            parse_calibration_file(path)

    def test_csv_needs_tank_column(self, tmp_path):
        path = tmp_path / "no_tank.csv"
        pd.DataFrame([["sounding", 1.0, 100.0]], columns=["Table", "Sounding", "Even"]).to_csv(path, index=False)
        with pytest.raises(ValueError, match="Tank"):
            parse_calibration_file(path)

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "bad.csv"
        pd.DataFrame([["1P", 1.0]], columns=["Tank", "Volume"]).to_csv(path, index=False)
        with pytest.raises(ValueError, match="missing columns"):
            parse_calibration_file(path)


class TestParseExcel:
    def test_sheet_per_tank(self, tmp_path):
        path = tmp_path / "calibration.xlsx"
        columns = ["Table", "Sounding (m)", "Even", "-1.0", "1.0"]
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            pd.DataFrame(
                [["sounding", 0.0, 0.0, 0.0, 0.0], ["sounding", 2.0, 250.0, 230.0, 270.0]],
                columns=columns,
            ).to_excel(writer, sheet_name="2S", index=False)
            pd.DataFrame(
                [["heel", 1.0, None, -4.0, 4.0]],
                columns=columns,
            ).to_excel(writer, sheet_name="DOS", index=False)
        tables = parse_calibration_file(path)
        assert set(tables) == {"2S", "DOS"}
        assert tables["2S"].sounding_table[1].volumes[1.0] == 270.0
        assert tables["DOS"].heel_table[0].corrections[1.0] == pytest.approx(0.04)

    def test_tank_split_over_heel_and_sounding_sheets(self, tmp_path):
        path = tmp_path / "calibration.xlsx"
        columns = ["Tank", "Table", "Sounding", "Even", "-1.0", "1.0"]
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            pd.DataFrame(
                [["1P", "heel", 0.0, None, -1.0, 1.0], ["1P", "heel", 1.0, None, -2.0, 2.0]],
                columns=columns,
            ).to_excel(writer, sheet_name="Heel", index=False)
            pd.DataFrame(
                [["1P", "sounding", 1.0, 100.0, 90.0, 110.0], ["1P", "sounding", 0.0, 0.0, 0.0, 0.0]],
                columns=columns,
            ).to_excel(writer, sheet_name="Sounding", index=False)
        tables = parse_calibration_file(path)
        assert set(tables) == {"1P"}
        assert [r.sounding_m for r in tables["1P"].heel_table] == [0.0, 1.0]
        assert [r.sounding_m for r in tables["1P"].sounding_table] == [0.0, 1.0]

    def test_same_sounding_on_two_sheets_rejected(self, tmp_path):
        path = tmp_path / "calibration.xlsx"
        columns = ["Tank", "Table", "Sounding", "Even", "1.0"]
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            pd.DataFrame([["2S", "sounding", 1.0, 10.0, 11.0]], columns=columns).to_excel(
                writer, sheet_name="A", index=False
            )
            pd.DataFrame([["2S", "sounding", 1.0, 12.0, 13.0]], columns=columns).to_excel(
                writer, sheet_name="B", index=False
            )
        with pytest.raises(CalibrationTableError, match="2S"):
            parse_calibration_file(path)


class TestParseErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_calibration_file(tmp_path / "missing.xlsx")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "tables.txt"
        path.write_text("Tank,Table\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Unsupported"):
            parse_calibration_file(path)


class TestApplyCalibration:
    def test_attaches_tables_to_sounded_tanks(self, calibration_csv):
        tanks = apply_calibration(REFERENCE_TANKS, parse_calibration_file(calibration_csv))
        by_id = {t.id: t for t in tanks}
        assert len(by_id["1P"].sounding_table) == 2
        assert len(by_id["1P"].heel_table) == 1
        assert by_id["1S"].sounding_table == ()
        assert len(tanks) == len(REFERENCE_TANKS)

    def test_manual_tanks_untouched(self):
        tables = {"SETT": TankTables(sounding_table=())}
        tanks = apply_calibration(REFERENCE_TANKS, tables)
        sett = next(t for t in tanks if t.id == "SETT")
        assert sett.kind is TankKind.MANUAL_GAUGE
        assert sett == next(t for t in REFERENCE_TANKS if t.id == "SETT")
