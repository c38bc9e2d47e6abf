from __future__ import annotations

import json

from budgetsim.__main__ import main


def test_sample_output(capsys):
    code = main(["--days", "2"])

    assert code == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "2023-02-24:"
    assert out[1] == "Account 0 (Bank), current value £1000.00"
    assert out[2] == "Account 1 (Savings), current value £500.04"
    assert out[5] == "2023-02-25:"
    assert out[6] == "Account 0 (Bank), current value £2500.00"


def test_spec_file_output(tmp_path, capsys):
    path = tmp_path / "spec.json"
    path.write_text(
        json.dumps(
            {
                "start": "2024-01-01",
                "accounts": [
                    {"id": 0, "name": "Current", "initialValue": "£10.00"},
                    {"id": 1, "name": "Pot", "initialValue": "£0.00"},
                ],
                "transactions": [
                    {"value": "£1", "source": 0, "sink": 1, "start": "2024-01-01", "interval": "daily"},
                ],
            }
        ),
        encoding="utf-8",
    )

    code = main([str(path), "--days", "3"])

    assert code == 0
    out = capsys.readouterr().out.splitlines()
    assert out[-3:] == [
        "2024-01-04:",
        "Account 0 (Current), current value £7.00",
        "Account 1 (Pot), current value £3.00",
    ]


def test_missing_spec_returns_two(tmp_path, capsys):
    code = main([str(tmp_path / "nope.json")])

    assert code == 2
    assert capsys.readouterr().err.startswith("ERROR: cannot read")


def test_negative_days_returns_two(capsys):
    assert main(["--days", "-1"]) == 2
