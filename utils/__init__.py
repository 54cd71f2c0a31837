from .bench_logger import log_run_to_file

__all__ = [
    'log_run_to_file'
]
