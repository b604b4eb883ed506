# bfllvm

`bfllvm` compiles Brainfuck programs into textual LLVM IR. It also has a
small in-memory IR model and two function passes that work on it.

## Installation

```
pip install .
```

Nothing outside the standard library is required.

## Compiling Brainfuck

The `bfllvm` command reads a Brainfuck program from standard input and
writes an LLVM IR module to standard output:

```
bfllvm < hello.bf > hello.ll
```

The command takes no options besides `--help`. The same thing can be run
as `python -m bfllvm.compiler`.

The generated module defines `main`. It allocates a tape of 30000 zeroed
bytes with `calloc`, keeps a pointer into it, and translates each command:

- `>` and `<` move the pointer one byte forward or back;
- `+` and `-` add or subtract 1 from the byte under the pointer;
- `.` passes the byte under the pointer, sign-extended, to `putchar`;
- `[` and `]` become numbered `loop-cond-N`, `loop-body-N` and
  `loop-end-N` blocks that repeat while the byte under the pointer is
  not zero.

All other characters are ignored. At the end the tape is freed and `main`
returns 0. The module also declares `calloc`, `free` and `putchar`.

Unbalanced brackets are an error: the command then writes a message such
as `bfllvm: unmatched ']' at offset 4` to standard error, writes nothing
to standard output, and exits with status 1.

From Python, the same translation is available as a function:

```python
from bfllvm.compiler import CompileError, compile_bf

try:
    ir_text = compile_bf("++++++++[>++++++++<-]>+.")
except CompileError as exc:
    print(f"cannot compile: {exc} (offset {exc.position})")
else:
    print(ir_text)
```

`compile_bf` returns the complete module as a string. `CompileError` is a
`ValueError` whose `position` is the offset of the offending bracket in
the source: an unmatched `]`, or the last `[` left open.

## The IR model

`bfllvm.ir` describes functions as Python objects:

- `Function(name, arguments)` holds `BasicBlock`s, added with
  `Function.add_block`; arguments may be given as names or as `Argument`
  objects.
- `BasicBlock(name)` holds `Instruction`s, added with
  `BasicBlock.append`.
- `Instruction(opcode, operands, name)` has an `Opcode` (given as a
  member or as its text, such as `"add"` or `"icmp"`) and a list of
  operand `Value`s: function `Argument`s, `Constant`s or other
  instructions. Every value keeps a list of the instructions that use it.

`Opcode` tells whether an opcode is a binary operation, a comparison, or
commutative. `Instruction.replace_all_uses_with(value)` makes every user
of an instruction use `value` instead, and
`Instruction.erase_from_parent()` removes an instruction that has no uses
left from its block. Adding an instruction or block that already has a
parent, erasing an instruction that is still used or not in a block, and
replacing an instruction with itself all raise `ValueError`.

```python
from bfllvm.ir import BasicBlock, Constant, Function, Instruction

function = Function("main", ["a", "b"])
block = function.add_block(BasicBlock("entry"))
a, b = function.arguments
first = block.append(Instruction("add", [a, b], "1"))
second = block.append(Instruction("add", [b, a], "2"))
block.append(Instruction("mul", [second, Constant(2)], "3"))
```

## Passes

`bfllvm.passes` has two passes over a `Function`:

- `hello_world(function, stream)` writes the function's name and its
  number of arguments to `stream`. It changes nothing and returns
  `False`.
- `LocalValueNumbering(stream)` removes redundant computations inside
  each basic block. Binary operations and comparisons are keyed on their
  opcode and the value numbers of their operands, as an `ExpressionKey`,
  with the two operands of a commutative operation put in order. When an
  expression has already been seen in the same block, its uses are
  redirected to the earlier value, a line is written to the stream, and
  the duplicate is erased. Numbering starts afresh in every block.
  `LocalValueNumbering.run(function)` processes every block and returns
  whether anything changed; `LocalValueNumbering.process_block(block)`
  does the work for one block.

Passes can also be chosen by name with `run_pass(name, function, stream)`,
where `name` is `"hello-world"` or `"simple-lvn"`; any other name raises
`ValueError`. In every case messages go to standard error when no stream
is given.

Run on the function above, `run_pass("simple-lvn", function)` removes the
second `add` and makes the `mul` use the first one.

## What it does not do

The passes work only on functions built with `bfllvm.ir`; there is no
reader for LLVM IR text and no way to write the model back out as IR.
The compiler produces IR text only: it does not assemble, link or run
the result, which is left to the usual LLVM tools.

## Running the tests

```
pip install ".[test]"
pytest
```