"""Compile Brainfuck source into textual LLVM IR."""

from __future__ import annotations

import argparse
import itertools
import sys

TAPE_SIZE = 30000


class CompileError(ValueError):
    """Raised when the Brainfuck source has unbalanced brackets."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at offset {position}")
        self.position = position


def compile_bf(source: str) -> str:
    """Return an LLVM IR module whose ``main`` runs the Brainfuck program."""
    numbers = itertools.count(1)
    data, ptr, buffer = next(numbers), next(numbers), next(numbers)
    lines = [
        "define dso_local i32 @main() {",
        f"  %{data} = alloca ptr, align 8",
        f"  %{ptr} = alloca ptr, align 8",
        f"  %{buffer} = call noalias ptr @calloc(i64 noundef {TAPE_SIZE}, i64 noundef 1)",
        f"  store ptr %{buffer}, ptr %{data}, align 8",
        f"  store ptr %{buffer}, ptr %{ptr}, align 8",
    ]

    open_loops: list[tuple[int, int]] = []
    loop_count = 0

    for position, char in enumerate(source):
        match char:
            case ">" | "<":
                step = 1 if char == ">" else -1
                cell, moved = next(numbers), next(numbers)
                lines += [
                    f"  %{cell} = load ptr, ptr %{ptr}, align 8",
                    f"  %{moved} = getelementptr inbounds i8, ptr %{cell}, i32 {step}",
                    f"  store ptr %{moved}, ptr %{ptr}, align 8",
                ]
            case "+" | "-":
                operation = "add" if char == "+" else "sub"
                cell, value, updated = next(numbers), next(numbers), next(numbers)
                lines += [
                    f"  %{cell} = load ptr, ptr %{ptr}, align 8",
                    f"  %{value} = load i8, ptr %{cell}, align 1",
                    f"  %{updated} = {operation} i8 %{value}, 1",
                    f"  store i8 %{updated}, ptr %{cell}, align 1",
                ]
            case ".":
                cell, value, wide = next(numbers), next(numbers), next(numbers)
                result = next(numbers)
                lines += [
                    f"  %{cell} = load ptr, ptr %{ptr}, align 8",
                    f"  %{value} = load i8, ptr %{cell}, align 1",
                    f"  %{wide} = sext i8 %{value} to i32",
                    f"  %{result} = call i32 @putchar(i32 %{wide})",
                ]
            case "[":
                loop_count += 1
                label = loop_count
                open_loops.append((label, position))
                lines += [f"  br label %loop-cond-{label}", "", f"loop-cond-{label}:"]
                cell, value, condition = next(numbers), next(numbers), next(numbers)
                lines += [
                    f"  %{cell} = load ptr, ptr %{ptr}, align 8",
                    f"  %{value} = load i8, ptr %{cell}, align 1",
                    f"  %{condition} = icmp ne i8 %{value}, 0",
                    f"  br i1 %{condition}, label %loop-body-{label}, "
                    f"label %loop-end-{label}",
                    "",
                    f"loop-body-{label}:",
                ]
            case "]":
                if not open_loops:
                    raise CompileError("unmatched ']'", position)
                label, _ = open_loops.pop()
                lines += [f"  br label %loop-cond-{label}", "", f"loop-end-{label}:"]

    if open_loops:
        raise CompileError("unmatched '['", open_loops[-1][1])

    base = next(numbers)
    lines += [
        f"  %{base} = load ptr, ptr %{data}, align 8",
        f"  call void @free(ptr noundef %{base})",
        "  ret i32 0",
        "}",
        "",
        "declare noalias ptr @calloc(i64 noundef, i64 noundef)",
        "",
        "declare void @free(ptr noundef)",
        "",
        "declare i32 @putchar(i32 noundef)",
    ]
    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    """Read Brainfuck from standard input and write LLVM IR to standard output."""
    parser = argparse.ArgumentParser(
        prog="bfllvm",
        description="Compile Brainfuck read from standard input into LLVM IR.",
    )
    parser.parse_args(argv)
    try:
        module = compile_bf(sys.stdin.read())
    except CompileError as error:
        print(f"bfllvm: {error}", file=sys.stderr)
        return 1
    sys.stdout.write(module)
    return 0


if __name__ == "__main__":
    sys.exit(main())