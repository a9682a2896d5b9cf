"""
recursion.py - Factorial, Fibonacci & Tower of Hanoi Traces
============================================================
Each procedure is written as a recursive generator: the inner helper
yields its Steps and `return`s its numeric result, so a caller writes

    result = yield from _fact(num - 1, depth + 1)

and the recursion in the source reads like the recursion on the board.

Factorial and Fibonacci carry a call-stack snapshot (list of Frame) on
every step.  A frame is pushed just before its `call` step and popped
right after its `base-case` / `return` step.

Fibonacci consults the memo *before* pushing a frame; a hit emits a
`memoized` step and never touches the stack.  Every Fibonacci step
carries a copy of the memo at that instant.

Hanoi carries a towers snapshot instead: three lists [A, B, C], each
ordered bottom → top.
"""

from typing import Dict, Generator, List

from algorithms.errors import InvalidArgument, require_non_negative_int, require_positive_int
from algorithms.step import Frame, Move, RecursionKind, RecursionStep, StepBuilder


PEGS = ("A", "B", "C")


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
FACTORIAL_PSEUDOCODE: List[str] = [
    "def factorial(n):",                            # 0
    "    if n <= 1:",                               # 1
    "        return 1",                             # 2
    "    return n * factorial(n - 1)",              # 3
]

FIBONACCI_PSEUDOCODE: List[str] = [
    "def fib(n, memo):",                            # 0
    "    if n in memo: return memo[n]",             # 1
    "    if n <= 1: result ← n",                    # 2
    "    else: result ← fib(n-1) + fib(n-2)",       # 3
    "    memo[n] ← result",                         # 4
    "    return result",                            # 5
]

HANOI_PSEUDOCODE: List[str] = [
    "def hanoi(k, src, dest, aux):",                # 0
    "    if k == 1:",                               # 1
    "        move disk 1 src → dest; return",       # 2
    "    hanoi(k-1, src, aux, dest)",               # 3
    "    move disk k src → dest",                   # 4
    "    hanoi(k-1, aux, dest, src)",               # 5
]


# ---------------------------------------------------------------------------
# Factorial
# ---------------------------------------------------------------------------
def factorial(n: int) -> Generator[RecursionStep, None, None]:
    """
    Yields RecursionStep snapshots for n! computed recursively.

    Args:
        n : Non-negative integer.  0 and 1 are both base cases.
    """
    require_non_negative_int(n, "n")
    stack: List[Frame] = []
    sb = StepBuilder(RecursionStep)

    def _fact(num: int, depth: int):
        stack.append(Frame(num, depth))
        sb.message         = f"Calling factorial({num})"
        sb.highlight       = f"Making recursive call: factorial({num})"
        sb.description     = (
            f"Begin computing {n}! by expanding calls down to 1." if depth == 0
            else f"Dive deeper: need factorial({num}) so we will call factorial({num - 1})."
        )
        sb.pseudocode_line = 0
        yield sb.build(RecursionKind.CALL, call_stack=stack, value=num, depth=depth)

        if num <= 1:
            sb.message         = f"Base case: factorial({num}) = 1"
            sb.highlight       = f"Reached base case: factorial({num}) returns 1"
            sb.description     = f"Stop: factorial({num}) is defined as 1 (base case). Start unwinding recursion."
            sb.pseudocode_line = 2
            yield sb.build(RecursionKind.BASE_CASE, call_stack=stack, value=num, result=1, depth=depth)
            stack.pop()
            return 1

        below  = yield from _fact(num - 1, depth + 1)
        result = num * below

        sb.message         = f"factorial({num}) = {num} × factorial({num - 1}) = {result}"
        sb.highlight       = f"Returning: {num} × {below} = {result}"
        sb.description     = f"Resolved deeper call: multiply {num} by factorial({num - 1}) to get {result}."
        sb.pseudocode_line = 3
        yield sb.build(RecursionKind.RETURN, call_stack=stack, value=num, result=result, depth=depth)
        stack.pop()
        return result

    final = yield from _fact(n, 0)

    sb.message         = f"Completed: {n}! = {final}"
    sb.highlight       = f"Final result: {n}! = {final}"
    sb.description     = f"All recursive frames returned. The answer to {n}! is {final}."
    sb.pseudocode_line = 3
    yield sb.build(RecursionKind.COMPLETE, is_final=True, call_stack=[], final_result=final)


# ---------------------------------------------------------------------------
# Fibonacci (memoised)
# ---------------------------------------------------------------------------
def fibonacci(n: int) -> Generator[RecursionStep, None, None]:
    """
    Yields RecursionStep snapshots for fib(n) with top-down memoisation.
    fib(n-1) is resolved completely, memo writes included, before
    fib(n-2) is asked for, so the right branch is always a cache hit
    once n >= 2.
    """
    require_non_negative_int(n, "n")
    stack: List[Frame]    = []
    memo:  Dict[int, int] = {}
    sb = StepBuilder(RecursionStep)

    def _fib(num: int, depth: int):
        if num in memo:
            cached = memo[num]
            sb.message         = f"Using memoized value: fibonacci({num}) = {cached}"
            sb.highlight       = f"Cache hit: fibonacci({num}) already computed"
            sb.description     = f"We already computed fib({num}) earlier; reuse stored value {cached}."
            sb.pseudocode_line = 1
            yield sb.build(RecursionKind.MEMOIZED, call_stack=stack, value=num, result=cached,
                           memo_snapshot=memo, depth=depth)
            return cached

        stack.append(Frame(num, depth))
        sb.message         = f"Calling fibonacci({num})"
        sb.highlight       = f"Making recursive call: fibonacci({num})"
        sb.description     = (
            f"Start computing fib({n}) by branching until base cases (0 or 1)." if depth == 0
            else f"Expand fib({num}) into fib({num - 1}) + fib({num - 2})."
        )
        sb.pseudocode_line = 0
        yield sb.build(RecursionKind.CALL, call_stack=stack, value=num, memo_snapshot=memo, depth=depth)

        if num <= 1:
            sb.message         = f"Base case: fibonacci({num}) = {num}"
            sb.highlight       = f"Reached base case: fibonacci({num}) returns {num}"
            sb.description     = f"Base case encountered; return {num}."
            sb.pseudocode_line = 2
            yield sb.build(RecursionKind.BASE_CASE, call_stack=stack, value=num, result=num,
                           memo_snapshot=memo, depth=depth)
            stack.pop()
            memo[num] = num
            return num

        left   = yield from _fib(num - 1, depth + 1)
        right  = yield from _fib(num - 2, depth + 1)
        result = left + right

        sb.message         = f"fibonacci({num}) = fibonacci({num - 1}) + fibonacci({num - 2}) = {result}"
        sb.highlight       = f"Returning: {result}"
        sb.description     = f"Combine results: fib({num - 1}) + fib({num - 2}) = {left} + {right} = {result}."
        sb.pseudocode_line = 5
        yield sb.build(RecursionKind.RETURN, call_stack=stack, value=num, result=result,
                       memo_snapshot=memo, depth=depth)
        stack.pop()
        memo[num] = result
        return result

    final = yield from _fib(n, 0)

    sb.message         = f"Completed: fib({n}) = {final}"
    sb.highlight       = f"Final result: fibonacci({n}) = {final}"
    sb.description     = f"All branches resolved; fib({n}) = {final}."
    sb.pseudocode_line = 5
    yield sb.build(RecursionKind.COMPLETE, is_final=True, call_stack=[], final_result=final,
                   fib_tree=True, memo_snapshot=memo)


# ---------------------------------------------------------------------------
# Tower of Hanoi
# ---------------------------------------------------------------------------
def tower_of_hanoi(
    n: int,
    source: str = "A",
    destination: str = "C",
    auxiliary: str = "B",
) -> Generator[RecursionStep, None, None]:
    """
    Yields RecursionStep snapshots while moving n disks from `source`
    to `destination`.  The `complete` step's move_count is 2^n - 1.

    Args:
        n           : Number of disks (positive integer).
        source      : Starting peg, one of "A", "B", "C".
        destination : Goal peg.
        auxiliary   : Spare peg.  All three must be distinct.
    """
    require_positive_int(n, "n")
    if sorted((source, destination, auxiliary)) != list(PEGS):
        raise InvalidArgument(
            f"source, destination and auxiliary must be distinct pegs from {PEGS}, "
            f"got {(source, destination, auxiliary)!r}"
        )

    towers: Dict[str, List[int]] = {peg: [] for peg in PEGS}
    towers[source].extend(range(n, 0, -1))
    moves = 0
    sb    = StepBuilder(RecursionStep)

    def _snapshot() -> List[List[int]]:
        return [towers[peg] for peg in PEGS]

    def _move(src: str, dest: str) -> Move:
        nonlocal moves
        disk = towers[src].pop()
        towers[dest].append(disk)
        moves += 1
        return Move(disk, src, dest)

    sb.message     = f"Initial state: {n} disks on tower {source}"
    sb.highlight   = f"Goal: Move all disks from {source} to {destination}"
    sb.description = f"Start: All {n} disks stacked on rod {source} (largest at bottom)."
    yield sb.build(RecursionKind.INITIAL, towers=_snapshot(), move_count=moves)

    def _hanoi(disks: int, src: str, dest: str, aux: str, depth: int):
        if disks == 1:
            move = _move(src, dest)
            sb.message         = f"Move disk {move.disk} from {src} to {dest}"
            sb.highlight       = f"Base case: Move single disk {move.disk}"
            sb.description     = f"Direct move of smallest disk {move.disk} from {src} to {dest}."
            sb.pseudocode_line = 2
            yield sb.build(RecursionKind.MOVE, towers=_snapshot(), move=move, move_count=moves, depth=depth)
            return

        sb.message         = f"Move {disks - 1} disks from {src} to {aux}"
        sb.highlight       = "Subproblem 1: Clear the way for largest disk"
        sb.description     = f"Stage 1: Temporarily relocate top {disks - 1} disks to {aux}."
        sb.pseudocode_line = 3
        yield sb.build(RecursionKind.RECURSIVE_CALL, towers=_snapshot(), move_count=moves, depth=depth)

        yield from _hanoi(disks - 1, src, aux, dest, depth + 1)

        move = _move(src, dest)
        sb.message         = f"Move disk {move.disk} from {src} to {dest}"
        sb.highlight       = f"Move largest disk {move.disk}"
        sb.description     = f"Critical move: Largest of current stack ({move.disk}) to destination {dest}."
        sb.pseudocode_line = 4
        yield sb.build(RecursionKind.MOVE, towers=_snapshot(), move=move, move_count=moves, depth=depth)

        sb.message         = f"Move {disks - 1} disks from {aux} to {dest}"
        sb.highlight       = "Subproblem 2: Move disks to final destination"
        sb.description     = f"Stage 2: Move {disks - 1} disks from {aux} onto {dest} (on top of disk {move.disk})."
        sb.pseudocode_line = 5
        yield sb.build(RecursionKind.RECURSIVE_CALL, towers=_snapshot(), move_count=moves, depth=depth)

        yield from _hanoi(disks - 1, aux, dest, src, depth + 1)

    yield from _hanoi(n, source, destination, auxiliary, 0)

    sb.message     = f"Puzzle solved! All disks moved to {destination}"
    sb.highlight   = f"Tower of Hanoi completed in {moves} moves"
    sb.description = "Finished: All disks transferred following optimal strategy."
    yield sb.build(RecursionKind.COMPLETE, is_final=True, towers=_snapshot(), move_count=moves)


# ---------------------------------------------------------------------------
# Materialised traces
# ---------------------------------------------------------------------------
def factorial_steps(n: int) -> List[RecursionStep]:
    return list(factorial(n))


def fibonacci_steps(n: int) -> List[RecursionStep]:
    return list(fibonacci(n))


def tower_of_hanoi_steps(
    n: int,
    source: str = "A",
    destination: str = "C",
    auxiliary: str = "B",
) -> List[RecursionStep]:
    return list(tower_of_hanoi(n, source, destination, auxiliary))
