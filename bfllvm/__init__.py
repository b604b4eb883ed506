"""Brainfuck to LLVM IR compiler, with a small IR model and function passes."""

__version__ = "0.1.0"
__all__ = ["compiler", "ir", "passes"]