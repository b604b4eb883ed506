"""A small in-memory model of functions, blocks and instructions."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum


class Opcode(Enum):
    """Instruction opcodes."""

    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    UDIV = "udiv"
    SDIV = "sdiv"
    UREM = "urem"
    SREM = "srem"
    SHL = "shl"
    LSHR = "lshr"
    ASHR = "ashr"
    AND = "and"
    OR = "or"
    XOR = "xor"
    FADD = "fadd"
    FSUB = "fsub"
    FMUL = "fmul"
    FDIV = "fdiv"
    FREM = "frem"
    ICMP = "icmp"
    FCMP = "fcmp"
    ALLOCA = "alloca"
    LOAD = "load"
    STORE = "store"
    GETELEMENTPTR = "getelementptr"
    CALL = "call"
    PHI = "phi"
    BR = "br"
    RET = "ret"

    @property
    def is_binary(self) -> bool:
        return self in _BINARY

    @property
    def is_compare(self) -> bool:
        return self in _COMPARE

    @property
    def is_commutative(self) -> bool:
        return self in _COMMUTATIVE


_BINARY = frozenset({
    Opcode.ADD, Opcode.SUB, Opcode.MUL, Opcode.UDIV, Opcode.SDIV, Opcode.UREM,
    Opcode.SREM, Opcode.SHL, Opcode.LSHR, Opcode.ASHR, Opcode.AND, Opcode.OR,
    Opcode.XOR, Opcode.FADD, Opcode.FSUB, Opcode.FMUL, Opcode.FDIV, Opcode.FREM,
})
_COMPARE = frozenset({Opcode.ICMP, Opcode.FCMP})
_COMMUTATIVE = frozenset({
    Opcode.ADD, Opcode.MUL, Opcode.AND, Opcode.OR, Opcode.XOR,
    Opcode.FADD, Opcode.FMUL,
})


class Value:
    """Anything that can be an operand. Identity is the value's identity."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.users: list[Instruction] = []

    def __str__(self) -> str:
        return f"%{self.name}" if self.name else "%<unnamed>"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"


class Argument(Value):
    """A formal argument of a function."""


class Constant(Value):
    """A constant operand."""

    def __init__(self, value: int | float) -> None:
        super().__init__()
        self.value = value

    def __str__(self) -> str:
        return str(self.value)


class Instruction(Value):
    """An instruction with an opcode and operands, living in a basic block."""

    def __init__(self, opcode: Opcode | str, operands: Iterable[Value] = (),
                 name: str = "") -> None:
        super().__init__(name)
        self.opcode = Opcode(opcode)
        self.operands: list[Value] = list(operands)
        self.parent: BasicBlock | None = None
        for operand in self.operands:
            operand.users.append(self)

    @property
    def is_binary(self) -> bool:
        return self.opcode.is_binary

    @property
    def is_compare(self) -> bool:
        return self.opcode.is_compare

    @property
    def is_commutative(self) -> bool:
        return self.opcode.is_commutative

    def replace_all_uses_with(self, value: Value) -> None:
        """Make every user of this instruction use ``value`` instead."""
        if value is self:
            raise ValueError("cannot replace an instruction with itself")
        for user in self.users:
            user.operands = [value if operand is self else operand
                             for operand in user.operands]
            value.users.append(user)
        self.users.clear()

    def erase_from_parent(self) -> None:
        """Remove this unused instruction from its block and drop its operands."""
        if self.users:
            raise ValueError("cannot erase an instruction that still has uses")
        if self.parent is None:
            raise ValueError("instruction is not in a block")
        self.parent.instructions.remove(self)
        self.parent = None
        for operand in self.operands:
            operand.users.remove(self)
        self.operands = []

    def __str__(self) -> str:
        operands = ", ".join(str(operand) for operand in self.operands)
        body = f"{self.opcode.value} {operands}".rstrip()
        return f"%{self.name} = {body}" if self.name else body


class BasicBlock:
    """An ordered list of instructions."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.instructions: list[Instruction] = []
        self.parent: Function | None = None

    def append(self, instruction: Instruction) -> Instruction:
        """Add ``instruction`` at the end of the block and return it."""
        if instruction.parent is not None:
            raise ValueError("instruction already belongs to a block")
        instruction.parent = self
        self.instructions.append(instruction)
        return instruction

    def __iter__(self) -> Iterator[Instruction]:
        return iter(list(self.instructions))

    def __len__(self) -> int:
        return len(self.instructions)


class Function:
    """A named function made of basic blocks."""

    def __init__(self, name: str, arguments: Iterable[Argument | str] = ()) -> None:
        self.name = name
        self.arguments: list[Argument] = [
            arg if isinstance(arg, Argument) else Argument(arg) for arg in arguments
        ]
        self.blocks: list[BasicBlock] = []

    def add_block(self, block: BasicBlock) -> BasicBlock:
        """Add ``block`` at the end of the function and return it."""
        if block.parent is not None:
            raise ValueError("block already belongs to a function")
        block.parent = self
        self.blocks.append(block)
        return block

    def __iter__(self) -> Iterator[BasicBlock]:
        return iter(self.blocks)