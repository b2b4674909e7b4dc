"""
Shared fixtures: an in-memory DNS zone served through a patched dns.query.udp.
"""

import dns.exception
import dns.message
import dns.query
import dns.rdatatype
import dns.rrset
import pytest


class FakeDNSServer:
    """Answers queries from a dict zone, building real dnspython responses."""

    def __init__(self):
        self.records = {}
        self.down = set()
        self.calls = []

    @staticmethod
    def _key(name):
        return name.rstrip('.').lower() + '.'

    def add(self, name, rdtype, *values):
        if rdtype == "CNAME":
            values = tuple(v.rstrip('.') + '.' for v in values)
        self.records.setdefault((self._key(name), rdtype), []).extend(values)

    def fail(self, name):
        self.down.add(self._key(name))

    def queried(self, rdtype=None):
        return [c[0] for c in self.calls if rdtype is None or c[1] == rdtype]

    def udp(self, query, where, timeout=None, port=53, **kwargs):
        question = query.question[0]
        qname = question.name.to_text().lower()
        rdtype = dns.rdatatype.to_text(question.rdtype)
        self.calls.append((qname, rdtype, where, port, timeout))
        if qname in self.down:
            raise dns.exception.Timeout()
        response = dns.message.make_response(query)
        values = self.records.get((qname, rdtype), [])
        if rdtype == "CNAME":
            # one rrset per target so multi-target replies can be modelled
            for value in values:
                response.answer.append(dns.rrset.from_text(question.name, 300, "IN", rdtype, value))
        elif values:
            response.answer.append(dns.rrset.from_text(question.name, 300, "IN", rdtype, *values))
        return response


@pytest.fixture
def fake_dns(monkeypatch):
    """Patch dns.query.udp with an empty fake zone the test can populate."""
    server = FakeDNSServer()
    monkeypatch.setattr(dns.query, "udp", server.udp)
    return server


@pytest.fixture
def example_zone(fake_dns):
    """Zone used by the end-to-end scenarios."""
    fake_dns.add("www.example.com", "A", "93.184.216.34")
    fake_dns.add("mail.example.com", "A", "10.0.0.5")
    fake_dns.add("foo.example.com", "CNAME", "bar.example.net")
    fake_dns.add("bar.example.net", "A", "1.2.3.4")
    return fake_dns


@pytest.fixture
def server():
    return ("127.0.0.1", 53)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no SC_* variables set."""
    for name in ("SC_SERVER", "SC_WORKERS", "SC_TIMEOUT", "SC_MAX_HOPS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
