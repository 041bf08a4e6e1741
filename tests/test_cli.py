import json

from codepulse import cli

FILLER = "// filler\n" * 6


def make_project(root, files):
    for relative, text in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


def test_cli_generates_json_report(tmp_path, capsys):
    project = make_project(
        tmp_path / "project",
        {
            "src/api.js": 'const API_KEY = "sk_live_abcdefgh";\n' + FILLER,
            "src/loops.js": "for (i=0;i<n;i++) { for (j=0;j<n;j++) {} }\n" + FILLER,
        },
    )
    output_path = tmp_path / "artifacts" / "codepulse.json"

    exit_code = cli.main([str(project), "--out", str(output_path)])

    captured = capsys.readouterr()
    assert "CodePulse Summary: project" in captured.out
    assert exit_code == 2  # secrets present
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["healthScore"] == 100 - 15 - 8
    assert data["totalFiles"] == 2
    assert data["securityIssues"][0]["file"] == "src/api.js"
    assert data["performanceIssues"][0]["type"] == "Nested Loops"
    assert data["circularDeps"] == 0
    assert data["scanProgress"] == 100


def test_cli_passes_on_clean_project(tmp_path, capsys):
    project = make_project(tmp_path / "clean", {"main.py": "print('hi')\n" * 8})

    exit_code = cli.main([str(project), "--fail-under", "90"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "HEALTHY" in captured.out
    assert "JSON Report" in captured.out
    payload = captured.out.split("JSON Report", 1)[1]
    assert json.loads(payload)["healthScore"] == 100


def test_cli_fail_under_threshold(tmp_path, capsys):
    project = make_project(tmp_path / "stubs", {"a.py": "x = 1\n", "b.py": "y = 2\n", "c.py": "z = 3\n"})

    exit_code = cli.main([str(project), "--fail-under", "95"])

    capsys.readouterr()
    assert exit_code == 1


def test_cli_reads_project_config(tmp_path, capsys):
    project = make_project(
        tmp_path / "configured",
        {
            ".codepulse.yaml": "secret_match_mode: all\nfail_under: 50\n",
            "keys.js": 'TOKEN = "aaaaaaaa1111"\nTOKEN = "bbbbbbbb2222"\n' + FILLER,
        },
    )
    output_path = tmp_path / "out.json"

    cli.main([str(project), "--out", str(output_path)])

    capsys.readouterr()
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert len(data["securityIssues"]) == 2
    assert data["healthScore"] == 70


def test_cli_reports_failed_scan(tmp_path, capsys):
    exit_code = cli.main([str(tmp_path / "missing")])

    captured = capsys.readouterr()
    assert exit_code == cli.SCAN_FAILED_EXIT_CODE
    assert "Analysis failed" in captured.err


def test_cli_invalid_config_uses_failure_exit_code(tmp_path, capsys):
    project = make_project(tmp_path / "misconfigured", {".codepulse.yaml": "bogus: 1\n", "main.py": FILLER})

    exit_code = cli.main([str(project)])

    captured = capsys.readouterr()
    assert exit_code == cli.SCAN_FAILED_EXIT_CODE
    assert exit_code != 2
    assert "Invalid configuration" in captured.err
    assert "bogus" in captured.err
    assert captured.out == ""
