"""Distributed Word Count - Find the longest line, in tokens, of a large text object."""

from distributed_word_count.solver import DistributedWordCount, WordCountError, main_solve, solve

__all__ = ["DistributedWordCount", "WordCountError", "solve", "main_solve"]
