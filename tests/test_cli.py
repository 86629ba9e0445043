# tests/test_cli.py
"""Tests for the command-line interface."""

import json

import pytest

from ldprofiles.cli import main


ARTICLE = {
    '@context': 'https://schema.org',
    '@type': 'Article',
    'headline': 'How to validate structured data',
    'author': 'Jane Doe',
    'datePublished': '2024-01-15T09:00:00Z',
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep local .env or shell settings out of CLI runs."""
    for name in ("LDPROFILES_SANITIZE_INPUTS", "LDPROFILES_STRICT_PROFILES", "LDPROFILES_PROFILE_DIRS"):
        monkeypatch.delenv(name, raising=False)


class TestValidateCommand:
    """Test suite for the validate subcommand."""

    def test_valid_document_json(self, tmp_path, capsys):
        """Test a valid document prints a JSON result and exits cleanly."""
        path = tmp_path / "article.json"
        path.write_text(json.dumps(ARTICLE))

        main(["validate", str(path), "-o", "json"])

        output = json.loads(capsys.readouterr().out)
        assert output['valid'] is True
        assert output['richResultsCompliance']['totalRequired'] == 7
        assert 'sanitized' in output

    def test_type_from_document(self, tmp_path, capsys):
        """Test the profile type defaults to the document's @type."""
        path = tmp_path / "article.json"
        path.write_text(json.dumps(ARTICLE))

        main(["validate", str(path)])

        assert "Article validation" in capsys.readouterr().out

    def test_invalid_document_exits_1(self, tmp_path, capsys):
        path = tmp_path / "event.json"
        path.write_text(json.dumps({'@type': 'Event'}))

        with pytest.raises(SystemExit) as exc_info:
            main(["validate", str(path)])

        assert exc_info.value.code == 1
        assert "Required field 'name' is missing" in capsys.readouterr().out

    def test_no_sanitize(self, tmp_path, capsys):
        path = tmp_path / "article.json"
        path.write_text(json.dumps(ARTICLE))

        main(["validate", str(path), "--no-sanitize", "-o", "json"])

        assert 'sanitized' not in json.loads(capsys.readouterr().out)

    def test_batch_with_output_file(self, tmp_path, capsys):
        """Test arrays are batch-validated with statistics."""
        path = tmp_path / "articles.json"
        path.write_text(json.dumps([ARTICLE, {'@type': 'Article'}]))
        out_path = tmp_path / "report.json"

        with pytest.raises(SystemExit):
            main(["validate", str(path), "--type", "Article", "-o", "json", "-f", str(out_path)])

        report = json.loads(out_path.read_text())
        assert report['summary']['total'] == 2
        assert report['summary']['invalid'] == 1
        assert report['stats']['fieldCoverage']['headline']['count'] == 1
        assert "Results written to" in capsys.readouterr().out

    def test_missing_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["validate", str(tmp_path / "nope.json")])

        assert exc_info.value.code == 1

    def test_bad_json(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(SystemExit):
            main(["validate", str(path)])

        assert "Invalid JSON" in capsys.readouterr().out

    def test_unknown_type(self, tmp_path, capsys):
        path = tmp_path / "thing.json"
        path.write_text(json.dumps({'name': 'x'}))

        with pytest.raises(SystemExit):
            main(["validate", str(path), "--type", "Bogus", "-o", "json"])

        output = json.loads(capsys.readouterr().out)
        assert output['errors'][0]['message'] == 'Unknown profile type: Bogus'


class TestListingCommands:
    """Test suite for the profiles and fields subcommands."""

    def test_profiles(self, capsys):
        main(["profiles"])

        output = capsys.readouterr().out
        assert "Article [content]" in output
        assert "JobPosting [business]" in output

    def test_profiles_by_category(self, capsys):
        main(["profiles", "--category", "interaction"])

        output = capsys.readouterr().out
        assert "FAQPage" in output
        assert "Article" not in output

    def test_fields_json(self, capsys):
        main(["fields", "Article", "--partial", "date", "-o", "json"])

        hints = json.loads(capsys.readouterr().out)
        assert [h['label'] for h in hints] == ['datePublished', 'dateModified']

    def test_fields_unknown(self):
        with pytest.raises(SystemExit):
            main(["fields", "Bogus"])
