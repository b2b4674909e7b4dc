"""
Tests for wordlist loading and candidate building.
"""

import pytest
import requests

from recon import wordlist
from recon.wordlist import WordlistError, build_candidates, open_wordlist


class FakeResponse:
    def __init__(self, lines, status=200, fail_midway=False):
        self.lines = lines
        self.status = status
        self.fail_midway = fail_midway
        self.encoding = None
        self.closed = False

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} Client Error")

    def iter_lines(self, decode_unicode=False):
        for line in self.lines:
            yield line
        if self.fail_midway:
            raise requests.ConnectionError("connection reset")

    def close(self):
        self.closed = True


class TestLocalWordlist:

    def test_skips_blanks_and_comments(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("www\n\n# comment\n  mail  \ndev\n", encoding="utf-8")
        with open_wordlist(str(path)) as labels:
            assert list(labels) == ["www", "mail", "dev"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(WordlistError):
            with open_wordlist(str(tmp_path / "missing.txt")):
                pass

    def test_directory_is_unreadable(self, tmp_path):
        with pytest.raises(WordlistError):
            with open_wordlist(str(tmp_path)):
                pass

    def test_empty_source(self):
        with pytest.raises(WordlistError):
            with open_wordlist(""):
                pass


class TestRemoteWordlist:

    def test_streams_lines(self, monkeypatch):
        resp = FakeResponse(["www", "", "api", b"cdn"])
        seen = {}

        def fake_get(url, **kwargs):
            seen.update(kwargs, url=url)
            return resp

        monkeypatch.setattr(wordlist.requests, "get", fake_get)
        with open_wordlist("https://lists.example.org/dns.txt") as labels:
            assert list(labels) == ["www", "api", "cdn"]
        assert resp.closed
        assert seen["stream"] is True
        assert seen["url"] == "https://lists.example.org/dns.txt"

    def test_http_error(self, monkeypatch):
        monkeypatch.setattr(wordlist.requests, "get", lambda url, **kw: FakeResponse([], status=404))
        with pytest.raises(WordlistError):
            with open_wordlist("https://lists.example.org/missing.txt"):
                pass

    def test_connection_error(self, monkeypatch):
        def refuse(url, **kwargs):
            raise requests.ConnectionError("refused")
        monkeypatch.setattr(wordlist.requests, "get", refuse)
        with pytest.raises(WordlistError):
            with open_wordlist("http://lists.example.org/dns.txt"):
                pass

    def test_interrupted_download(self, monkeypatch):
        resp = FakeResponse(["www"], fail_midway=True)
        monkeypatch.setattr(wordlist.requests, "get", lambda url, **kw: resp)
        with pytest.raises(WordlistError):
            with open_wordlist("https://lists.example.org/dns.txt") as labels:
                list(labels)
        assert resp.closed


def test_build_candidates_appends_domain():
    assert list(build_candidates(["www", "mail"], " .example.com. ")) == [
        "www.example.com",
        "mail.example.com",
    ]
