import pytest

from fuzztester import __version__, cli
from fuzztester.models import BODY_TEMPLATES, BodyFormat, HttpMethod


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch):
    monkeypatch.setattr(cli.Settings, "from_env", classmethod(lambda cls, environ=None: cls()))


def test_version(capsys):
    assert cli.main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_no_url_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage: fuzztester" in capsys.readouterr().out


def test_empty_url_fails_validation():
    assert cli.main(["--url", ""]) == 1


def test_build_draft_uses_template_and_overrides(tmp_path):
    parser = cli.build_parser()
    args = parser.parse_args(["--url", "https://x", "--method", "put", "--format", "formdata"])
    draft = cli.build_draft(args)
    assert draft.method is HttpMethod.PUT
    assert draft.body_content == BODY_TEMPLATES[BodyFormat.FORM_DATA]

    body_file = tmp_path / "body.txt"
    body_file.write_text("raw <payload>", encoding="utf-8")
    args = parser.parse_args(["--url", "https://x", "--format", "Text", "--body-file", str(body_file)])
    assert cli.build_draft(args).body_content == "raw <payload>"


def test_unknown_format_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--url", "https://x", "--format", "yaml"])
    assert excinfo.value.code == 2


def test_simulated_run_succeeds():
    assert cli.main(["--url", "https://x", "--method", "GET", "--delay-ms", "0"]) == 0
