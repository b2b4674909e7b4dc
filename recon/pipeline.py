# recon/pipeline.py
"""Fixed-size worker pool that resolves candidate names concurrently.

Layout:
    candidates -> work queue (bounded) -> N workers -> gather queue -> aggregator

Workers and the aggregator only talk through queues. Shutdown order is what
keeps this deadlock-free: the work queue is closed after the supply is
exhausted, the gather queue is closed only after every worker has signalled,
and the result list is handed back only after the aggregator has signalled.
"""
import functools
import queue
import threading
from typing import Callable, Iterable, List

from recon.chain_resolver import MAX_CNAME_HOPS, ResolvedPair, resolve_chain
from recon.dns_client import DEFAULT_TIMEOUT

print_lock = threading.Lock()

# end-of-stream marker for both queues
_CLOSED = object()

WORKER_DONE = "worker"
AGGREGATOR_DONE = "aggregator"


class ResolvePipeline:
    def __init__(self, server, workers=100, timeout=DEFAULT_TIMEOUT, max_hops=MAX_CNAME_HOPS,
                 resolve: Callable[[str], List[ResolvedPair]] = None, verbose=False):
        if workers < 1:
            raise ValueError(f"worker count must be at least 1 (got {workers})")
        self.server = server
        self.workers = workers
        self.verbose = verbose
        if resolve is None:
            resolve = functools.partial(resolve_chain, server=server, timeout=timeout, max_hops=max_hops)
        self.resolve = resolve
        self.submitted = 0
        self.worker_signals = 0
        self.aggregator_signals = 0

    def _worker(self, work, gather, tracker):
        try:
            while True:
                fqdn = work.get()
                if fqdn is _CLOSED:
                    break
                try:
                    pairs = self.resolve(fqdn)
                except Exception as e:
                    with print_lock:
                        print(f"[!] Unexpected error resolving {fqdn}: {e}")
                    pairs = []
                if pairs:
                    if self.verbose:
                        with print_lock:
                            for pair in pairs:
                                print(f"[+] {pair.hostname} -> {pair.ip_address}")
                    gather.put(pairs)
        finally:
            tracker.put(WORKER_DONE)

    def _aggregate(self, gather, tracker, results):
        try:
            while True:
                batch = gather.get()
                if batch is _CLOSED:
                    break
                results.extend(batch)
        finally:
            tracker.put(AGGREGATOR_DONE)

    def run(self, candidates: Iterable[str]) -> List[ResolvedPair]:
        """Resolve every candidate and return all pairs once the pool has drained.

        Order of the returned pairs follows worker completion, not input order.
        If iterating `candidates` raises, the pool is still shut down cleanly
        before the error propagates.
        """
        work = queue.Queue(maxsize=self.workers)
        gather = queue.Queue()
        tracker = queue.Queue()
        results: List[ResolvedPair] = []
        self.submitted = self.worker_signals = self.aggregator_signals = 0

        for i in range(self.workers):
            threading.Thread(target=self._worker, args=(work, gather, tracker),
                             name=f"resolver-{i}", daemon=True).start()
        threading.Thread(target=self._aggregate, args=(gather, tracker, results),
                         name="aggregator", daemon=True).start()

        try:
            for fqdn in candidates:
                work.put(fqdn)
                self.submitted += 1
        finally:
            for _ in range(self.workers):
                work.put(_CLOSED)
            # the aggregator cannot finish before gather is closed, so the
            # first `workers` signals are always worker signals
            while self.worker_signals < self.workers:
                tracker.get()
                self.worker_signals += 1
            gather.put(_CLOSED)
            tracker.get()
            self.aggregator_signals += 1

        return results


def run_pipeline(candidates, server, workers=100, timeout=DEFAULT_TIMEOUT,
                 max_hops=MAX_CNAME_HOPS, verbose=False) -> List[ResolvedPair]:
    pipeline = ResolvePipeline(server, workers=workers, timeout=timeout,
                               max_hops=max_hops, verbose=verbose)
    return pipeline.run(candidates)
