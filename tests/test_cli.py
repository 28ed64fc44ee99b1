from datetime import datetime, timezone

import pytest

from go_timestamp import cli
from go_timestamp.errors import OpenFailedError
from go_timestamp.models import DependencyRecord


class FakeExtractor:
    records = []
    error = None

    def __init__(self, go_binary="go", timeout=30.0):
        self.go_binary = go_binary

    def extract_dependencies(self, binary_path):
        if self.error is not None:
            raise self.error
        return list(self.records)


@pytest.fixture
def fake_cli(monkeypatch, forge_client):
    for name in ("GITHUB_TOKEN", "GO_TIMESTAMP_API_URL", "GO_TIMESTAMP_TIMEOUT", "GO_TIMESTAMP_MIN_INTERVAL"):
        monkeypatch.delenv(name, raising=False)

    forge_client.close = lambda: None
    monkeypatch.setattr(cli, "GitHubClient", lambda config: forge_client)
    monkeypatch.setattr(FakeExtractor, "records", [])
    monkeypatch.setattr(FakeExtractor, "error", None)
    monkeypatch.setattr(cli, "GoToolchainExtractor", FakeExtractor)
    return FakeExtractor


def _run(argv):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)
    return excinfo.value.code


def test_tm_prints_dates_and_minimum(fake_cli, capsys):
    fake_cli.records = [
        DependencyRecord("github.com/pkg/errors", "github.com/pkg/errors@v0.9.1"),
        DependencyRecord("golang.org/x/sys", "golang.org/x/sys@v0.0.0-20180501000000-aaaaaaaaaaaa"),
        DependencyRecord("github.com/pkg/errors", "github.com/pkg/errors@v5.0.0"),
    ]

    assert _run(["tm", "app"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "github.com/pkg/errors 2020-01-15T10:00:00+00:00"
    assert out[1] == "golang.org/x/sys 2018-05-01T00:00:00+00:00"
    assert out[-1] == "Approximate (minimum) timestamp equals = 2020-01-15T10:00:00+00:00"


def test_alias_and_no_dates(fake_cli, capsys):
    assert _run(["t", "app"]) == 0

    assert capsys.readouterr().out.splitlines()[-1] == "No dates could be resolved"


def test_version_extraction_failure_exits_non_zero(fake_cli, capsys):
    fake_cli.records = [DependencyRecord("somepkg", "somepkg@")]

    assert _run(["tm", "app"]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Failed to get version" in captured.err


def test_open_failure_exits_non_zero(fake_cli, capsys):
    fake_cli.error = OpenFailedError("app", "no such file")

    assert _run(["tm", "app"]) == 1
    assert "Error when opening the file" in capsys.readouterr().err


def test_requires_exactly_one_path(fake_cli):
    assert _run(["tm"]) == 2


def test_output_dir_writes_files(fake_cli, tmp_path, capsys):
    fake_cli.records = [
        DependencyRecord("golang.org/x/sys", "golang.org/x/sys@v0.0.0-20180501000000-aaaaaaaaaaaa"),
    ]

    assert _run(["tm", "app", "--output-dir", str(tmp_path)]) == 0

    assert (tmp_path / "app_results.json").exists()
    assert (tmp_path / "app_dates.csv").exists()


def test_flags_override_environment(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "from-env")
    monkeypatch.setenv("GO_TIMESTAMP_TIMEOUT", "12")
    args = cli.build_parser().parse_args(["tm", "app", "--token", "from-flag", "--min-interval", "1.5"])

    config = cli.build_config(args)

    assert config.token == "from-flag"
    assert config.timeout == 12.0
    assert config.min_interval == 1.5
