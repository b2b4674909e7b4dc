#!/usr/bin/env python3
# SubChase - Fast DNS subdomain brute force with CNAME chasing
# Optimized for Kali Linux

import argparse
import datetime
import math
import sys
import time

from recon.config import load_config
from recon.dns_client import resolve_server_address
from recon.pipeline import ResolvePipeline
from recon.report import format_table, write_results
from recon.wordlist import WordlistError, build_candidates, open_wordlist


__version__ = "0.1.0"


class C:
    R = "\033[31m"; G = "\033[32m"; Y = "\033[33m"; B = "\033[34m"; M = "\033[35m"; C = "\033[36m"; W = "\033[37m"; RS = "\033[0m"


def color(txt, col):
    if sys.stdout.isatty():
        return col + txt + C.RS
    return txt


def build_parser():
    class CompactFormatter(argparse.RawTextHelpFormatter):
        def _format_action_invocation(self, action):
            if not action.option_strings:
                return super()._format_action_invocation(action)
            args_string = ''
            if action.nargs != 0:
                metavar = self._format_args(action, action.dest.upper())
                args_string = ' ' + metavar
            return ', '.join(action.option_strings) + args_string

    parser = argparse.ArgumentParser(
        prog="subchase.py",
        usage="%(prog)s -domain <domain> -wordlist <file|url> [OPTIONS]",
        description=f"SubChase v{__version__} - resolve wordlist subdomains to IPv4, following CNAMEs.\n"
                    "Results are printed once every candidate has been processed.",
        formatter_class=CompactFormatter,
    )

    g_target = parser.add_argument_group("TARGETS")
    g_perf = parser.add_argument_group("PERF")
    g_output = parser.add_argument_group("OUTPUT")
    g_misc = parser.add_argument_group("MISC")

    g_target.add_argument("-d", "-domain", dest="domain", help="Target domain (required)")
    g_target.add_argument("-wordlist", "--wordlist", dest="wordlist",
                          help="Wordlist path or http(s) URL, one label per line (required)")

    # defaults come from load_config(); None means "not given on the command line"
    g_perf.add_argument("-w", "--workers", dest="workers", type=int, default=None,
                        help="Worker threads (default: 100)")
    g_perf.add_argument("-server", dest="server", default=None,
                        help="DNS server host:port (default: 8.8.8.8:53)")
    g_perf.add_argument("-timeout", dest="timeout", type=float, default=None,
                        help="Per-query timeout in seconds (default: 2.0)")
    g_perf.add_argument("-max-hops", dest="max_hops", type=int, default=None,
                        help="Max CNAME hops before giving up on a name (default: 10)")

    g_output.add_argument("-o", "--output", help="Also save results under results/<OUTPUT>.<format>")
    g_output.add_argument("-r", "--report-format", choices=["txt", "json", "jsonl"], default="txt",
                          help="Saved file format (default: txt)")

    g_misc.add_argument("-config", dest="config", help="YAML config file (default: ./subchase-config.yaml)")
    g_misc.add_argument("-q", "--quiet", action="store_true", help="Quiet mode (results and errors only)")
    g_misc.add_argument("-v", "--verbose", action="store_true", help="Verbose mode (print hits as they resolve)")
    g_misc.add_argument("--version", action="store_true", help="Show version and exit")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"SubChase {__version__}")
        return 0

    if not args.domain or not args.wordlist:
        parser.print_usage()
        print("[!] Error: -domain and -wordlist are required")
        return 1

    def log(msg, level="info"):
        if args.quiet and level not in ("result", "error"):
            return
        palette = {
            "info": C.C,
            "ok": C.G,
            "warn": C.Y,
            "error": C.R,
            "result": C.M,
            "summary": C.B,
        }
        print(color(msg, palette.get(level, C.W)))

    def verbose(msg):
        if args.verbose and not args.quiet:
            log(msg, "info")

    settings = load_config(args.config)
    for key in ("server", "workers", "timeout", "max_hops"):
        value = getattr(args, key)
        if value is not None:
            settings[key] = value
    verbose(f"[*] Settings: {settings}")

    if settings["workers"] < 1:
        log(f"[!] Error: worker count must be at least 1 (got {settings['workers']})", "error")
        return 2
    if not math.isfinite(settings["timeout"]) or settings["timeout"] <= 0:
        log(f"[!] Error: timeout must be a positive number (got {settings['timeout']})", "error")
        return 2
    if settings["max_hops"] < 0:
        log(f"[!] Error: -max-hops cannot be negative (got {settings['max_hops']})", "error")
        return 2
    try:
        server = resolve_server_address(settings["server"])
    except ValueError as e:
        log(f"[!] Error: {e}", "error")
        return 2

    domain = args.domain.strip().strip('.').lower()
    start_time = datetime.datetime.now()
    start_epoch = time.time()
    if not args.quiet:
        print(color(f"SubChase {__version__}", C.M) + f" | started {start_time.strftime('%Y-%m-%d %H:%M:%S')}")
    log(f"[*] Target: {domain}")
    log(f"[*] Wordlist: {args.wordlist}")
    log(f"[*] DNS server: {server[0]}:{server[1]}")
    log(f"[*] Workers: {settings['workers']} | timeout {settings['timeout']}s | max CNAME hops {settings['max_hops']}\n")

    pipeline = ResolvePipeline(
        server,
        workers=settings["workers"],
        timeout=settings["timeout"],
        max_hops=settings["max_hops"],
        verbose=args.verbose and not args.quiet,
    )
    try:
        with open_wordlist(args.wordlist) as labels:
            results = pipeline.run(build_candidates(labels, domain))
    except WordlistError as e:
        log(f"[!] {e}", "error")
        return 1

    elapsed = time.time() - start_epoch
    verbose(f"[*] Worker signals: {pipeline.worker_signals}/{pipeline.workers}, aggregator: {pipeline.aggregator_signals}")
    for line in format_table(results):
        print(line)
    log(f"\n[OK] Resolved {len(results)} records from {pipeline.submitted} candidates in {elapsed:.2f}s", "summary")

    if args.output:
        path = write_results(args.output, domain, results, args.report_format)
        log(f"[*] Saved results to {path}", "ok")
    return 0


if __name__ == "__main__":
    try:
        rc = main()
        if rc is None:
            rc = 0
        sys.exit(rc)
    except KeyboardInterrupt:
        print("\n[!] Interrupted")
        sys.exit(130)
    except Exception as e:
        print(f"\n[!] Unhandled fatal error: {e.__class__.__name__}: {e}")
        sys.exit(1)
