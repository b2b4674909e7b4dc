# recon/dns_client.py
"""Single-shot DNS queries against one configured server.

Each call builds a one-question message, sends it over UDP and decodes the
answer section into ARecord / CNAMERecord / OtherRecord values. Nothing is
cached and nothing is retried: a lookup either returns the matching records,
or raises NoAnswer / TransportError.
"""
import socket
from typing import List, NamedTuple, Tuple, Union

import dns.exception
import dns.inet
import dns.message
import dns.query
import dns.rdatatype

DEFAULT_PORT = 53
DEFAULT_TIMEOUT = 2.0


class RecordKind:
    A = "A"
    CNAME = "CNAME"


_SUPPORTED = {
    RecordKind.A: dns.rdatatype.A,
    RecordKind.CNAME: dns.rdatatype.CNAME,
}


class DNSLookupError(Exception):
    """Base class for a failed single query."""


class NoAnswer(DNSLookupError):
    """Server replied, but the answer section was empty."""


class TransportError(DNSLookupError):
    """Query could not be sent or no usable reply arrived."""


class ARecord(NamedTuple):
    name: str
    address: str


class CNAMERecord(NamedTuple):
    name: str
    target: str


class OtherRecord(NamedTuple):
    name: str
    rdtype: str


AnswerRecord = Union[ARecord, CNAMERecord, OtherRecord]


def parse_server(server) -> Tuple[str, int]:
    """Split 'host:port' (or '[v6]:port', or a bare host) into (host, port)."""
    if isinstance(server, tuple):
        host, port = server
        return host, int(port)
    raw = str(server).strip()
    if not raw:
        raise ValueError("empty DNS server address")
    if raw.startswith('['):
        host, sep, rest = raw[1:].partition(']')
        if not sep:
            raise ValueError(f"malformed server address: {server}")
        port_text = rest[1:] if rest.startswith(':') else ''
    elif raw.count(':') == 1:
        host, port_text = raw.split(':', 1)
    else:
        # bare host or unbracketed IPv6 literal
        host, port_text = raw, ''
    if not port_text:
        return host, DEFAULT_PORT
    try:
        port = int(port_text)
    except ValueError:
        raise ValueError(f"invalid port in server address: {server}") from None
    if not 0 < port < 65536:
        raise ValueError(f"port out of range in server address: {server}")
    return host, port


def resolve_server_address(server) -> Tuple[str, int]:
    """Parse the server and turn a host name into an IP literal once, up front."""
    host, port = parse_server(server)
    if dns.inet.is_address(host):
        return host, port
    try:
        return socket.gethostbyname(host), port
    except OSError as e:
        raise ValueError(f"cannot resolve DNS server '{host}': {e}") from e


def decode_answer(response) -> List[AnswerRecord]:
    records: List[AnswerRecord] = []
    for rrset in response.answer:
        owner = rrset.name.to_text(omit_final_dot=True)
        for rdata in rrset:
            if rrset.rdtype == dns.rdatatype.A:
                records.append(ARecord(owner, rdata.address))
            elif rrset.rdtype == dns.rdatatype.CNAME:
                records.append(CNAMERecord(owner, rdata.target.to_text(omit_final_dot=True)))
            else:
                records.append(OtherRecord(owner, dns.rdatatype.to_text(rrset.rdtype)))
    return records


def resolve_record(name, kind, server, timeout=DEFAULT_TIMEOUT) -> List[str]:
    """Query `kind` records for `name` and return them in answer order.

    A -> IPv4 address strings, CNAME -> target names. Answers of any other
    type are ignored.
    """
    if kind not in _SUPPORTED:
        raise ValueError(f"unsupported record kind: {kind}")
    host, port = parse_server(server)
    try:
        # malformed names (empty or oversized labels) fail here too
        query = dns.message.make_query(name.rstrip('.') + '.', _SUPPORTED[kind])
        response = dns.query.udp(query, host, timeout=timeout, port=port)
    except (dns.exception.DNSException, OSError, ValueError, OverflowError) as e:
        # ValueError: server host is not an IP literal; OverflowError: unusable timeout
        raise TransportError(f"{kind} {name} via {host}:{port}: {e}") from e

    records = decode_answer(response)
    if not records:
        raise NoAnswer(f"{kind} {name}: empty answer")
    if kind == RecordKind.A:
        return [r.address for r in records if isinstance(r, ARecord)]
    return [r.target for r in records if isinstance(r, CNAMERecord)]
