"""
Tests for the command line interface.
"""

import json

import pytest

from resumescore import __version__
from resumescore.app import main


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Point the CLI at a temporary database and working directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("RESUMESCORE_DB_PATH", str(tmp_path / "data" / "cli.db"))
    monkeypatch.setenv("RESUMESCORE_LOG_DIR", str(tmp_path / "logs"))
    return tmp_path


@pytest.fixture
def opening_file(cli_env):
    path = cli_env / "opening.json"
    path.write_text(json.dumps({
        "id": "opening-1",
        "tenant_id": "tenant-a",
        "title": "Backend Engineer",
        "location": "Bangalore",
        "required_skills": ["Python", "Django", "PostgreSQL", "Go"],
        "required_experience": 5,
    }))
    return path


@pytest.fixture
def resume_file(cli_env, sample_resume_text):
    path = cli_env / "resume.txt"
    path.write_text(sample_resume_text, encoding="utf-8")
    return path


@pytest.fixture
def ready_db(cli_env, opening_file, capsys):
    main(["init-db"])
    main(["add-opening", "--input", str(opening_file)])
    capsys.readouterr()


class TestVersion:
    def test_version(self, cli_env, capsys):
        main(["--version"])
        assert capsys.readouterr().out.strip() == __version__


class TestOpenings:
    def test_init_and_add_opening(self, cli_env, opening_file, capsys):
        main(["init-db"])
        main(["add-opening", "--input", str(opening_file)])

        out = capsys.readouterr().out
        assert "Database ready" in out
        assert "Opening: opening-1" in out
        assert (cli_env / "data" / "cli.db").exists()

    def test_invalid_opening(self, cli_env, capsys):
        main(["init-db"])
        path = cli_env / "bad.json"
        path.write_text(json.dumps({"id": "x", "title": "Engineer", "required_experience": -2}))

        with pytest.raises(SystemExit) as exc_info:
            main(["add-opening", "--input", str(path)])

        assert exc_info.value.code == 2
        out = capsys.readouterr().out
        assert "Missing required field: tenant_id" in out

    def test_list_openings(self, ready_db, capsys):
        main(["list-openings", "--tenant", "tenant-a"])

        out = capsys.readouterr().out
        assert "ID: opening-1" in out
        assert "Profiles: 0" in out

    def test_missing_database(self, cli_env):
        with pytest.raises(SystemExit) as exc_info:
            main(["list-openings", "--tenant", "tenant-a"])

        assert "Database not found" in str(exc_info.value.code)


class TestSubmit:
    def test_submit_and_replay(self, ready_db, resume_file, capsys):
        args = ["submit", "--file", str(resume_file), "--opening", "opening-1",
                "--user", "user-1", "--tenant", "tenant-a"]

        main(args)
        first = json.loads(capsys.readouterr().out)
        main(args)
        second = json.loads(capsys.readouterr().out)

        assert first["replayed"] is False
        assert first["score"]["final_score"] == 0.875
        assert first["score"]["confidence"] == "HIGH"
        assert second["replayed"] is True
        assert second["score"] == first["score"]
        assert second["profile_id"] == first["profile_id"]

        main(["list-profiles", "--tenant", "tenant-a"])
        out = capsys.readouterr().out
        assert "Found 1 profiles" in out
        assert "Score: 0.8750 (HIGH)" in out

    def test_unknown_opening_exits_non_zero(self, ready_db, resume_file):
        with pytest.raises(SystemExit) as exc_info:
            main(["submit", "--file", str(resume_file), "--opening", "nope",
                  "--user", "user-1", "--tenant", "tenant-a"])

        assert str(exc_info.value.code).startswith("OpeningNotFound:")

    def test_unsupported_file_exits_non_zero(self, ready_db, cli_env):
        path = cli_env / "resume.docx"
        path.write_bytes(b"PK\x03\x04")

        with pytest.raises(SystemExit) as exc_info:
            main(["submit", "--file", str(path), "--opening", "opening-1",
                  "--user", "user-1", "--tenant", "tenant-a"])

        assert str(exc_info.value.code).startswith("UnsupportedFormat:")

    def test_missing_file(self, ready_db):
        with pytest.raises(SystemExit) as exc_info:
            main(["submit", "--file", "nowhere.pdf", "--opening", "opening-1",
                  "--user", "user-1", "--tenant", "tenant-a"])

        assert "Input file not found" in str(exc_info.value.code)


class TestScore:
    def test_ad_hoc_score_stores_nothing(self, cli_env, resume_file, capsys):
        main(["score", "--file", str(resume_file), "--skills", "Python, Go",
              "--experience", "4", "--location", "Bengaluru"])

        result = json.loads(capsys.readouterr().out)
        assert result["score"]["skill_score"] == 0.5
        assert result["score"]["experience_score"] == 1.0
        assert result["score"]["location_score"] == 1.0
        assert "Python" in result["features"]["skills"]
        assert not (cli_env / "data" / "cli.db").exists()
