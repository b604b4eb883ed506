import io

import pytest

from bfllvm.ir import Argument, BasicBlock, Constant, Function, Instruction, Opcode
from bfllvm.passes import ExpressionKey, LocalValueNumbering, hello_world, run_pass


def _redundant_add():
    a, b = Constant(5), Constant(10)
    fn = Function("main")
    block = fn.add_block(BasicBlock("entry"))
    first = block.append(Instruction(Opcode.ADD, [a, b], "c1"))
    second = block.append(Instruction(Opcode.ADD, [a, b], "c2"))
    ret = block.append(Instruction(Opcode.RET, [second]))
    return fn, block, first, second, ret


def test_hello_world_output():
    stream = io.StringIO()
    changed = hello_world(Function("foo", ["a"]), stream)
    assert changed is False
    assert stream.getvalue() == (
        "(llvm-tutor) Hello from: foo\n"
        "(llvm-tutor)   number of arguments: 1\n"
    )


def test_hello_world_defaults_to_stderr(capsys):
    hello_world(Function("fez", ["a", "b", "c"]))
    assert "number of arguments: 3" in capsys.readouterr().err


def test_lvn_removes_redundant_instruction():
    fn, block, first, second, ret = _redundant_add()
    stream = io.StringIO()
    assert LocalValueNumbering(stream).run(fn) is True
    assert list(block) == [first, ret]
    assert ret.operands == [first]
    assert second.parent is None
    message = stream.getvalue()
    assert "Found redundant instruction: %c2 = add 5, 10" in message
    assert message.endswith("replaced with value number: 3\n")


def test_lvn_commutative_operands_are_normalised():
    a, b = Argument("a"), Argument("b")
    fn = Function("f", [a, b])
    block = fn.add_block(BasicBlock())
    first = block.append(Instruction(Opcode.MUL, [a, b], "x"))
    block.append(Instruction(Opcode.MUL, [b, a], "y"))
    assert LocalValueNumbering(io.StringIO()).run(fn) is True
    assert list(block) == [first]


def test_lvn_keeps_non_commutative_swaps():
    a, b = Argument("a"), Argument("b")
    fn = Function("f", [a, b])
    block = fn.add_block(BasicBlock())
    block.append(Instruction(Opcode.SUB, [a, b], "x"))
    block.append(Instruction(Opcode.SUB, [b, a], "y"))
    stream = io.StringIO()
    assert LocalValueNumbering(stream).run(fn) is False
    assert len(block) == 2
    assert stream.getvalue() == ""


def test_lvn_distinguishes_opcodes():
    a, b = Argument("a"), Argument("b")
    fn = Function("f", [a, b])
    block = fn.add_block(BasicBlock())
    block.append(Instruction(Opcode.ADD, [a, b], "x"))
    block.append(Instruction(Opcode.MUL, [a, b], "y"))
    assert LocalValueNumbering(io.StringIO()).run(fn) is False
    assert len(block) == 2


def test_lvn_merges_compares():
    a, b = Argument("a"), Argument("b")
    fn = Function("f", [a, b])
    block = fn.add_block(BasicBlock())
    first = block.append(Instruction(Opcode.ICMP, [a, b], "p"))
    second = block.append(Instruction(Opcode.ICMP, [a, b], "q"))
    user = block.append(Instruction(Opcode.BR, [second]))
    assert LocalValueNumbering(io.StringIO()).run(fn) is True
    assert user.operands == [first]


def test_lvn_ignores_unsupported_instructions():
    ptr = Argument("p")
    fn = Function("f", [ptr])
    block = fn.add_block(BasicBlock())
    block.append(Instruction(Opcode.LOAD, [ptr], "x"))
    block.append(Instruction(Opcode.LOAD, [ptr], "y"))
    assert LocalValueNumbering(io.StringIO()).run(fn) is False
    assert len(block) == 2


def test_lvn_state_is_per_block():
    a, b = Argument("a"), Argument("b")
    fn = Function("f", [a, b])
    first_block = fn.add_block(BasicBlock("one"))
    second_block = fn.add_block(BasicBlock("two"))
    first_block.append(Instruction(Opcode.ADD, [a, b], "x"))
    second_block.append(Instruction(Opcode.ADD, [a, b], "y"))
    assert LocalValueNumbering(io.StringIO()).run(fn) is False
    assert len(first_block) == 1 and len(second_block) == 1


def test_lvn_chained_redundancy():
    a, b = Argument("a"), Argument("b")
    fn = Function("f", [a, b])
    block = fn.add_block(BasicBlock())
    s1 = block.append(Instruction(Opcode.ADD, [a, b], "s1"))
    s2 = block.append(Instruction(Opcode.ADD, [a, b], "s2"))
    m1 = block.append(Instruction(Opcode.MUL, [s1, a], "m1"))
    block.append(Instruction(Opcode.MUL, [s2, a], "m2"))
    ret = block.append(Instruction(Opcode.RET, [block.instructions[-1]]))
    assert LocalValueNumbering(io.StringIO()).process_block(block) is True
    assert list(block) == [s1, m1, ret]
    assert ret.operands == [m1]
    assert s2.parent is None


def test_expression_key_equality():
    assert ExpressionKey(Opcode.ADD, (1, 2)) == ExpressionKey(Opcode.ADD, (1, 2))
    assert ExpressionKey(Opcode.ADD, (1, 2)) != ExpressionKey(Opcode.SUB, (1, 2))
    assert len({ExpressionKey(Opcode.ADD, (1, 2)), ExpressionKey(Opcode.ADD, (1, 2))}) == 1


def test_run_pass_dispatch():
    fn, block, first, _, ret = _redundant_add()
    assert run_pass("simple-lvn", fn, io.StringIO()) is True
    assert list(block) == [first, ret]
    stream = io.StringIO()
    assert run_pass("hello-world", fn, stream) is False
    assert stream.getvalue().startswith("(llvm-tutor) Hello from: main\n")


def test_run_pass_unknown_name():
    with pytest.raises(ValueError):
        run_pass("no-such-pass", Function("f"))