# recon/chain_resolver.py
from typing import List, NamedTuple

from recon.dns_client import DEFAULT_TIMEOUT, DNSLookupError, RecordKind, resolve_record

MAX_CNAME_HOPS = 10


class ResolvedPair(NamedTuple):
    hostname: str
    ip_address: str


def resolve_chain(fqdn, server, timeout=DEFAULT_TIMEOUT, max_hops=MAX_CNAME_HOPS) -> List[ResolvedPair]:
    """Resolve fqdn to its A records, following CNAMEs first.

    Only the first CNAME target is followed on each hop. Pairs always carry
    the name that was asked for, never an intermediate target. Any lookup
    failure, or a chain longer than max_hops, yields an empty list.
    """
    current = fqdn
    hops = 0
    while True:
        try:
            targets = resolve_record(current, RecordKind.CNAME, server, timeout)
        except DNSLookupError:
            targets = []
        if not targets:
            break
        hops += 1
        if hops > max_hops:
            return []
        current = targets[0]

    try:
        ips = resolve_record(current, RecordKind.A, server, timeout)
    except DNSLookupError:
        return []
    return [ResolvedPair(fqdn, ip) for ip in ips]
