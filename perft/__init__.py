"""
Perft node counting for Ultimate Tic-Tac-Toe

Full-tree enumeration to a fixed depth, used to benchmark move generation.
"""

from .enumerator import enumerate_nodes, count_leaves, run_perft, divide

__all__ = [
    'enumerate_nodes',
    'count_leaves',
    'run_perft',
    'divide'
]
