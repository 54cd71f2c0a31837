"""Benchmark logging: append perft results to a plain text log."""
import datetime


def log_run_to_file(log_path, depth, nodes, elapsed, divide=None, check_errors=None):
    """Write one benchmark run to log_path (appends)."""
    now = datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')
    with open(log_path, 'a') as f:
        f.write(f"\n{'='*60}\n")
        f.write(f"[{now}] PERFT depth={depth}\n")
        f.write(f"{'='*60}\n")
        f.write(f"[Nodes] {nodes:,}\n")
        f.write(f"[Time] {elapsed:.3f}s\n")
        if elapsed > 0:
            f.write(f"  Nodes/s: {nodes / elapsed:,.0f}\n")

        if check_errors is not None:
            status = "PASS" if check_errors == 0 else f"FAIL ({check_errors} errors)"
            f.write(f"[Self-Check] {status}\n")

        if divide:
            f.write(f"[Divide] {len(divide)} root moves\n")
            for (field, cell), count in sorted(divide.items()):
                f.write(f"  {field} {cell}: {count:,}\n")
