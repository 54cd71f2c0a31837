"""
Perft benchmark & make/undo correctness check.

Runs:
1. (optional) Correctness: make_move/undo_move restores every field, and the
   incremental caches match a from-scratch rebuild, on random positions
2. Benchmark: full-tree node count from the empty board at a fixed depth

Usage:
    python -m perft.bench --depth 5
    python -m perft.bench --depth 4 --divide --check --log-file perft.log
"""
import argparse
import random
import time

from config import Config
from game import Bitboard
from utils.bench_logger import log_run_to_file
from .enumerator import run_perft, divide


def make_random_position(n_moves, seed=None):
    """Play up to n_moves random legal moves and return the board."""
    rng = random.Random(seed)
    board = Bitboard()
    for _ in range(n_moves):
        if board.game_over():
            break
        moves = board.get_legal_moves()
        if not moves:
            break
        move = rng.choice(moves)
        board.make_move(move.field, move.square)
    return board


def run_self_check(num_positions=100, max_plies=40, seed=0):
    """Check make/undo round trips on random positions. Returns error count."""
    print("=== Make/Undo Consistency ===")
    rng = random.Random(seed)
    errors = 0
    tested = 0

    for i in range(num_positions):
        board = make_random_position(rng.randint(0, max_plies), seed=seed + i)
        before = board.snapshot()

        for move in board.get_legal_moves():
            board.make_move(move.field, move.square, validate=False)
            try:
                board.check_caches()
            except AssertionError as e:
                print(f"  FAIL: position={i}, move=({move.field},{move.cell}): {e}")
                errors += 1
            board.undo_move(move, validate=True)

            if board.snapshot() != before:
                print(f"  FAIL: position={i}, move=({move.field},{move.cell}) not restored")
                errors += 1
                board = make_random_position(0)
                break
            tested += 1

    if errors == 0:
        print(f"  PASS: {tested} make/undo pairs on {num_positions} positions")
    else:
        print(f"  FAIL: {errors} errors found")
    return errors


def main(argv=None):
    """Run the perft benchmark from the command line."""
    defaults = Config()

    parser = argparse.ArgumentParser(description='Ultimate Tic-Tac-Toe perft benchmark')
    parser.add_argument('--depth', type=int, default=defaults.bench.depth, help='Search depth (0 = count root moves)')
    parser.add_argument('--divide', action='store_true', default=defaults.bench.divide, help='Print node count per root move')
    parser.add_argument('--no-progress', action='store_true', help='Hide the progress bar in divide mode')
    parser.add_argument('--check', action='store_true', help='Run the make/undo self-check first')
    parser.add_argument('--log-file', type=str, default=defaults.bench.log_path, help='Append results to this file')

    args = parser.parse_args(argv)
    if args.depth < 0:
        parser.error('--depth must be non-negative')

    check_errors = None
    if args.check:
        check_errors = run_self_check(
            num_positions=defaults.check.num_positions,
            max_plies=defaults.check.max_plies,
            seed=defaults.check.seed
        )

    show_progress = defaults.bench.show_progress and not args.no_progress

    print(">>> Starting movegen...")
    start = time.time()
    counts = None
    if args.divide:
        counts = divide(args.depth, show_progress=show_progress)
        nodes = sum(counts.values())
    else:
        nodes = run_perft(args.depth)
    elapsed = time.time() - start

    if counts:
        for (field, cell), count in sorted(counts.items()):
            print(f"{field} {cell}: {count}")
    print(nodes)
    print(f"<<< Finished. Elapsed: {int(elapsed)}s {int(elapsed * 1000) % 1000}ms")

    if args.log_file:
        log_run_to_file(args.log_file, args.depth, nodes, elapsed,
                        divide=counts, check_errors=check_errors)
        print(f"Logged to {args.log_file}")

    return 1 if check_errors else 0


if __name__ == '__main__':
    raise SystemExit(main())
