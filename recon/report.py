# recon/report.py
import json
import os

RESULTS_DIR = "results"
COLUMN_PADDING = 4


def _ensure_results_dir(results_dir=RESULTS_DIR):
    """Create the results directory if needed and return its path."""
    os.makedirs(results_dir, exist_ok=True)
    return results_dir


def format_table(pairs):
    """Render pairs as aligned 'hostname  ip' lines (hostname column padded by 4)."""
    if not pairs:
        return []
    width = max(len(p.hostname) for p in pairs) + COLUMN_PADDING
    return [f"{p.hostname.ljust(width)}{p.ip_address}" for p in pairs]


def write_results(base, domain, pairs, fmt='txt', results_dir=RESULTS_DIR):
    """Save pairs to <results_dir>/<base>.<fmt> and return the written path."""
    results_dir = _ensure_results_dir(results_dir)
    base = os.path.join(results_dir, os.path.basename(base))

    if fmt == 'jsonl':
        path = f"{base}.jsonl"
        with open(path, 'w', encoding='utf-8') as f:
            for p in pairs:
                f.write(json.dumps({'domain': domain, 'hostname': p.hostname, 'ip': p.ip_address}) + '\n')
        return path
    if fmt == 'json':
        path = f"{base}.json"
        payload = {
            'domain': domain,
            'count': len(pairs),
            'results': [{'hostname': p.hostname, 'ip': p.ip_address} for p in pairs],
        }
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2)
        return path
    if fmt != 'txt':
        raise ValueError(f"unknown report format: {fmt}")
    path = f"{base}.txt"
    with open(path, 'w', encoding='utf-8') as f:
        for line in format_table(pairs):
            f.write(line + '\n')
    return path
