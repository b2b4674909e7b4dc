# recon/wordlist.py
import contextlib
from typing import Iterable, Iterator

import requests

HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; SubChase/0.1)"
}


class WordlistError(Exception):
    pass


def _clean(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        label = line.strip()
        if label and not label.startswith('#'):
            yield label


def _stream_remote(resp, source) -> Iterator[str]:
    try:
        for line in resp.iter_lines(decode_unicode=True):
            if isinstance(line, bytes):
                line = line.decode('utf-8', errors='ignore')
            yield line
    except requests.RequestException as e:
        raise WordlistError(f"wordlist download interrupted ({source}): {e}") from e


def _read_local(fh, source) -> Iterator[str]:
    try:
        for line in fh:
            yield line
    except OSError as e:
        raise WordlistError(f"error reading wordlist {source}: {e}") from e


@contextlib.contextmanager
def open_wordlist(source, timeout=30):
    """Yield the labels of a wordlist, read lazily.

    `source` is a local path or an http(s) URL (e.g. a SecLists raw file).
    Blank lines and '#' comments are skipped. Any failure to open or read
    the list raises WordlistError; the file/connection is always released.
    """
    if not source:
        raise WordlistError("no wordlist given")
    if source.startswith(('http://', 'https://')):
        try:
            resp = requests.get(source, headers=HEADERS, timeout=timeout, stream=True)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise WordlistError(f"cannot fetch wordlist {source}: {e}") from e
        if not resp.encoding:
            resp.encoding = 'utf-8'
        try:
            yield _clean(_stream_remote(resp, source))
        finally:
            resp.close()
        return

    try:
        fh = open(source, 'r', encoding='utf-8', errors='ignore')
    except OSError as e:
        raise WordlistError(f"cannot read wordlist {source}: {e}") from e
    with fh:
        yield _clean(_read_local(fh, source))


def build_candidates(labels: Iterable[str], domain: str) -> Iterator[str]:
    domain = domain.strip().strip('.')
    for label in labels:
        yield f"{label}.{domain}"
