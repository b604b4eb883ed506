"""Function passes: a greeting analysis and local value numbering."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO

from bfllvm.ir import BasicBlock, Function, Instruction, Opcode, Value


def hello_world(function: Function, stream: TextIO | None = None) -> bool:
    """Print the function's name and argument count; never changes it."""
    out = stream if stream is not None else sys.stderr
    out.write(f"(llvm-tutor) Hello from: {function.name}\n")
    out.write(f"(llvm-tutor)   number of arguments: {len(function.arguments)}\n")
    return False


@dataclass(frozen=True)
class ExpressionKey:
    """An opcode together with the value numbers of its operands."""

    opcode: Opcode
    operands: tuple[int, ...]


class LocalValueNumbering:
    """Remove binary and compare instructions that repeat within a block."""

    name = "LocalValueNumberingPass"

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream
        self._reset()

    def _reset(self) -> None:
        self._value_numbers: dict[Value, int] = {}
        self._expression_numbers: dict[ExpressionKey, int] = {}
        self._representatives: dict[int, Value] = {}
        self._next_number = 1

    def run(self, function: Function) -> bool:
        """Process every block; return whether anything changed."""
        changed = False
        for block in function:
            changed |= self.process_block(block)
        return changed

    def process_block(self, block: BasicBlock) -> bool:
        """Number the values of one block and drop redundant instructions."""
        self._reset()
        out = self.stream if self.stream is not None else sys.stderr
        redundant: list[Instruction] = []

        for instruction in block:
            if not (instruction.is_binary or instruction.is_compare):
                self._assign_new_number(instruction)
                continue

            key = self._expression_key(instruction)
            existing = self._expression_numbers.get(key)
            if existing is None:
                self._expression_numbers[key] = self._assign_new_number(instruction)
                continue

            instruction.replace_all_uses_with(self._representatives[existing])
            redundant.append(instruction)
            out.write(
                f"(llvm-tutor) Found redundant instruction: {instruction}"
                f" replaced with value number: {existing}\n"
            )

        for instruction in redundant:
            instruction.erase_from_parent()
        return bool(redundant)

    def _expression_key(self, instruction: Instruction) -> ExpressionKey:
        numbers = [self._number_of(operand) for operand in instruction.operands]
        if instruction.is_commutative and len(numbers) == 2:
            numbers.sort()
        return ExpressionKey(instruction.opcode, tuple(numbers))

    def _number_of(self, value: Value) -> int:
        number = self._value_numbers.get(value)
        return number if number is not None else self._assign_new_number(value)

    def _assign_new_number(self, value: Value) -> int:
        number = self._next_number
        self._next_number += 1
        self._value_numbers[value] = number
        self._representatives[number] = value
        return number


def run_pass(name: str, function: Function, stream: TextIO | None = None) -> bool:
    """Run the pass registered as ``name`` on ``function``."""
    if name == "hello-world":
        return hello_world(function, stream)
    if name == "simple-lvn":
        return LocalValueNumbering(stream).run(function)
    raise ValueError(f"unknown pass: {name!r}")