from setuptools import setup, find_packages

setup(
    name="uttt-perft",
    version="0.1.0",
    description="Ultimate Tic-Tac-Toe bitboard move generator and perft benchmark",
    packages=find_packages(include=["game", "perft", "utils"]),
    py_modules=["config"],
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
