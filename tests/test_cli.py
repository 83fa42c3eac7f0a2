"""Tests for the forageconfig CLI."""

import io
import json

import pytest

from forageconfig.cli import main, parse_json_input

from conftest import MARIADB_GAV, POSTGRES_GAV


class FakeTty(io.StringIO):
    def isatty(self):
        return True


def run(capsys, *argv):
    """Run the CLI and return (exit code, parsed JSON output)."""
    with pytest.raises(SystemExit) as exc_info:
        main(list(argv))
    out = capsys.readouterr().out
    return exc_info.value.code, json.loads(out)


class TestParseJsonInput:
    """Tests for parse_json_input."""

    def test_values_become_strings(self):
        parsed = parse_json_input('{"a": "x", "b": 5, "c": true, "d": false, "e": null}')

        assert parsed == {"a": "x", "b": "5", "c": "true", "d": "false"}

    def test_key_order_kept(self):
        parsed = parse_json_input('{"z": "1", "a": "2", "m": "3"}')

        assert list(parsed) == ["z", "a", "m"]

    def test_rejects_non_object(self):
        with pytest.raises(ValueError):
            parse_json_input('["forage.jdbc.url"]')

    def test_rejects_nested_value(self):
        with pytest.raises(ValueError, match="forage.jdbc.url"):
            parse_json_input('{"forage.jdbc.url": {"nested": 1}}')


class TestConfigWrite:
    """Tests for `config write`."""

    def test_write_from_input(self, capsys, tmp_path, pg_batch):
        code, data = run(
            capsys, "config", "write", "--dir", str(tmp_path), "--input", json.dumps(pg_batch)
        )

        assert code == 0
        assert data["success"] is True
        assert data["factories"]["jdbc"]["operation"] == "create"
        assert (tmp_path / "application.properties").exists()

    def test_write_from_stdin(self, capsys, monkeypatch, tmp_path, pg_batch):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(pg_batch)))

        code, data = run(capsys, "config", "write", "-d", str(tmp_path))

        assert code == 0
        assert data["factories"]["jdbc"]["beanName"] == "myPG"

    def test_creates_missing_directory(self, capsys, tmp_path, pg_batch):
        target = tmp_path / "new" / "dir"

        code, _ = run(capsys, "config", "write", "-d", str(target), "-i", json.dumps(pg_batch))

        assert code == 0
        assert (target / "application.properties").exists()

    def test_no_input(self, capsys, monkeypatch, tmp_path):
        monkeypatch.setattr("sys.stdin", FakeTty())

        code, data = run(capsys, "config", "write", "-d", str(tmp_path))

        assert code == 1
        assert data == {
            "success": False,
            "error": "No JSON input provided. Use --input or pipe JSON to stdin.",
        }

    def test_invalid_json(self, capsys, tmp_path):
        code, data = run(capsys, "config", "write", "-d", str(tmp_path), "-i", "{not json")

        assert code == 1
        assert data["error"].startswith("Error processing configuration: ")

    def test_invalid_strategy(self, capsys, tmp_path, pg_batch):
        code, data = run(
            capsys, "config", "write", "-d", str(tmp_path),
            "-i", json.dumps(pg_batch), "--strategy", "yaml",
        )

        assert code == 1
        assert "Invalid strategy: yaml" in data["error"]

    def test_unrecognized_keys(self, capsys, tmp_path):
        code, data = run(
            capsys, "config", "write", "-d", str(tmp_path), "-i", '{"server.port": "8080"}'
        )

        assert code == 1
        assert data["error"].startswith("Could not detect factory type")

    def test_delete(self, capsys, tmp_path, pg_batch, mariadb_batch):
        run(capsys, "config", "write", "-d", str(tmp_path), "-i", json.dumps(pg_batch))
        run(capsys, "config", "write", "-d", str(tmp_path), "-i", json.dumps(mariadb_batch))

        code, data = run(capsys, "config", "write", "-d", str(tmp_path), "--delete", "-n", "myPG")

        assert code == 0
        assert data["operation"] == "delete"
        assert data["instanceName"] == "myPG"
        assert data["results"]["dependencyCleanup"]["removedDependencies"] == [POSTGRES_GAV]
        text = (tmp_path / "application.properties").read_text()
        assert "forage.myPG." not in text
        assert "forage.myMariaDB.jdbc.url" in text
        assert MARIADB_GAV in text

    def test_delete_without_name(self, capsys, tmp_path):
        code, data = run(capsys, "config", "write", "-d", str(tmp_path), "--delete")

        assert code == 1
        assert data["error"] == "Instance name (--name) is required for delete operation."

    def test_delete_unknown(self, capsys, tmp_path, pg_batch):
        run(capsys, "config", "write", "-d", str(tmp_path), "-i", json.dumps(pg_batch))

        code, data = run(capsys, "config", "write", "-d", str(tmp_path), "--delete", "-n", "x")

        assert code == 1
        assert data["error"] == "No configuration found for instance 'x'"


class TestConfigRead:
    """Tests for `config read`."""

    def test_read(self, capsys, tmp_path, pg_batch):
        run(capsys, "config", "write", "-d", str(tmp_path), "-i", json.dumps(pg_batch))

        code, data = run(capsys, "config", "read", "-d", str(tmp_path))

        assert code == 0
        assert data["beanCount"] == 1
        assert data["beans"][0]["name"] == "myPG"
        assert data["beans"][0]["javaType"] == "javax.sql.DataSource"

    def test_read_filter(self, capsys, tmp_path, pg_batch):
        run(capsys, "config", "write", "-d", str(tmp_path), "-i", json.dumps(pg_batch))

        code, data = run(capsys, "config", "read", "-d", str(tmp_path), "-f", "jms")

        assert code == 0
        assert data["beanCount"] == 0

    def test_read_missing_directory(self, capsys, tmp_path):
        code, data = run(capsys, "config", "read", "-d", str(tmp_path / "missing"))

        assert code == 1
        assert data["error"].startswith("Directory does not exist")

    def test_bad_catalog(self, capsys, tmp_path):
        catalog = tmp_path / "catalog.yaml"
        catalog.write_text("factories: [unclosed\n")

        code, data = run(capsys, "config", "read", "-d", str(tmp_path), "--catalog", str(catalog))

        assert code == 1
        assert data["error"].startswith("Error reading configuration: ")


class TestMain:
    """Tests for argument handling."""

    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 1
        assert "usage" in capsys.readouterr().out.lower()
