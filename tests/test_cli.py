"""End-to-end tests for the urlpat command line."""
import io

import pytest

from urlpat import cli
from urlpat.cli import main, split_dedup_keyword
from urlpat.fetcher import FetchResult

TEST_PSL = """\
// ===BEGIN ICANN DOMAINS===
test
// ===END ICANN DOMAINS===
"""


class TestSplitDedupKeyword:

    @pytest.mark.parametrize("pattern, expected", [
        ("dedup", ("", True)),
        ("dedup %d", ("%d", True)),
        ("%d dedup", ("%d", True)),
        ("%d  %p", ("%d  %p", False)),
        ("%d dedupe", ("%d dedupe", False)),
        ("%d", ("%d", False)),
    ])
    def test_split(self, pattern, expected):
        assert split_dedup_keyword(pattern) == expected


class TestMain:

    def test_direct_arguments(self, capsys):
        assert main(["%r", "https://www.example.com/x", "test.invalid", "a.example.co.uk"]) == 0
        assert capsys.readouterr().out == "example.com\nexample.co.uk\n"

    def test_stdin_matches_direct_arguments(self, capsys, monkeypatch):
        inputs = ["example.com/a?x=1", "foo/bar", "user:pass@example.org"]

        main(["%d%p"] + inputs)
        direct = capsys.readouterr().out

        monkeypatch.setattr("sys.stdin", io.StringIO("\n".join(inputs) + "\n"))
        main(["%d%p"])
        streamed = capsys.readouterr().out

        assert streamed == direct == "example.com/a\n/foo/bar\nexample.org\n"

    def test_dedup_keyword(self, capsys):
        main(["dedup %r", "a.example.com", "b.example.com", "example.org"])
        assert capsys.readouterr().out == "example.com\nexample.org\n"

    def test_dedup_alone_prints_urls(self, capsys):
        main(["dedup", "example.com", "https://example.com/"])
        assert capsys.readouterr().out == "https://example.com/\n"

    def test_dedup_flag(self, capsys):
        main(["-u", "%n", "example.com", "www.example.com"])
        assert capsys.readouterr().out == "example\n"

    def test_keyword_pattern(self, capsys):
        main(["tld", "www.example.co.uk"])
        assert capsys.readouterr().out == "co.uk\n"

    def test_keep_empty(self, capsys):
        main(["--keep-empty", "%d", "example.com", "test.invalid"])
        assert capsys.readouterr().out == "example.com\n\n"

    def test_bad_pattern_exits_2(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["%d %z", "example.com"])
        assert exc.value.code == 2
        assert "unknown escape" in capsys.readouterr().err

    def test_refresh_requires_file(self):
        with pytest.raises(SystemExit) as exc:
            main(["--refresh-suffix-list", "%d", "example.com"])
        assert exc.value.code == 2

    def test_custom_suffix_list(self, capsys, tmp_path):
        path = tmp_path / "psl.dat"
        path.write_text(TEST_PSL, encoding="utf-8")

        main(["--suffix-list", str(path), "%r", "www.example.test", "example.com"])

        assert capsys.readouterr().out == "example.test\n"

    def test_missing_suffix_list(self, capsys, tmp_path):
        assert main(["--suffix-list", str(tmp_path / "nope.dat"), "%d", "example.com"]) == 1
        assert "cannot read suffix list" in capsys.readouterr().err

    def test_refresh_suffix_list(self, capsys, tmp_path, monkeypatch):
        class FakeFetcher:
            def __init__(self, **kw):
                pass

            def get(self, url):
                data = TEST_PSL.encode("utf-8")
                return FetchResult(True, 200, data, url, None, len(data))

        monkeypatch.setattr(cli, "Fetcher", FakeFetcher)
        path = tmp_path / "psl.dat"

        rc = main(["--refresh-suffix-list", "--suffix-list", str(path), "%t", "a.b.test"])

        assert rc == 0
        assert path.read_text(encoding="utf-8") == TEST_PSL
        assert capsys.readouterr().out == "test\n"

    def test_refresh_failure(self, capsys, tmp_path, monkeypatch):
        class FakeFetcher:
            def __init__(self, **kw):
                pass

            def get(self, url):
                return FetchResult(False, 503, None, url, error="http_503")

        monkeypatch.setattr(cli, "Fetcher", FakeFetcher)

        rc = main(["--refresh-suffix-list", "--suffix-list", str(tmp_path / "psl.dat"), "%t", "a.b.test"])

        assert rc == 1
        assert "http_503" in capsys.readouterr().err
        assert not (tmp_path / "psl.dat").exists()

    def test_refresh_into_missing_directory(self, capsys, tmp_path, monkeypatch):
        class FakeFetcher:
            def __init__(self, **kw):
                pass

            def get(self, url):
                data = TEST_PSL.encode("utf-8")
                return FetchResult(True, 200, data, url, None, len(data))

        monkeypatch.setattr(cli, "Fetcher", FakeFetcher)
        path = tmp_path / "missing_dir" / "psl.dat"

        rc = main(["--refresh-suffix-list", "--suffix-list", str(path), "%d", "a.com"])

        assert rc == 1
        assert "cannot write suffix list" in capsys.readouterr().err
        assert not path.exists()

    def test_log_file(self, tmp_path):
        log = tmp_path / "run.log"

        main(["--log-file", str(log), "%d", "example.com", "#x"])

        text = log.read_text(encoding="utf-8")
        assert "INFO SUFFIX_LOAD" in text
        assert "WARN EMPTY_RECORD line=#x" in text
        assert "[SUMMARY] LINES_IN=2 LINES_EMPTY=1" in text
