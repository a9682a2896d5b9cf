"""
hash_functions.py - Hash Function Library
==========================================
Pure functions mapping a key and a table size to a table index, plus
the human-readable arithmetic that got there (the "derivation" the
hashing visualizer prints next to the table).

    from algorithms.hash_functions import compute_hash
    compute_hash("cat", 7, "djb2")   →  HashResult(index=…, derivation=(…), hash_value=…)

Functions:
  • modulo          – sum of character codes mod size
  • multiplication  – golden-ratio multiplicative method
  • djb2            – hash*33 + c, shift applied to the 32-bit wrapped value
  • polynomial      – rolling hash, p = 31, m = 1e9 + 9
  • builtin         – Java-style h*31 + c with 32-bit wrap

Keys are converted with str(); character codes are ord() code points.
"""

import math
from collections import Counter
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from algorithms.errors import require_positive_int


GOLDEN_RATIO_A       = 0.6180339887
DJB2_SEED            = 5381
POLY_BASE            = 31
POLY_MODULUS         = 1_000_000_009
DEFAULT_HASH_FUNCTION = "modulo"


@dataclass(frozen=True)
class HashResult:
    """
    Attributes:
        index      : Table index in [0, table_size).
        derivation : Ordered lines explaining the computation.
        hash_value : Raw number before it was reduced to an index
                     (character-code sum, product, or running hash).
    """
    index:      int
    derivation: Tuple[str, ...]
    hash_value: float = 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _to_int32(value: int) -> int:
    """Wrap an integer to signed 32-bit two's complement."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _char_codes(key_str: str) -> List[int]:
    return [ord(ch) for ch in key_str]


# ---------------------------------------------------------------------------
# Hash functions
# ---------------------------------------------------------------------------
def modulo_hash(key: Any, table_size: int) -> HashResult:
    require_positive_int(table_size, "table_size")
    key_str = str(key)
    codes   = _char_codes(key_str)
    total   = sum(codes)
    index   = total % table_size
    return HashResult(
        index=index,
        hash_value=total,
        derivation=(
            f'Key: "{key_str}"',
            f"Character codes: [{', '.join(map(str, codes))}]",
            f"Sum: {' + '.join(map(str, codes))} = {total}",
            f"Hash: {total} mod {table_size} = {index}",
        ),
    )


def multiplication_hash(key: Any, table_size: int) -> HashResult:
    require_positive_int(table_size, "table_size")
    key_str  = str(key)
    codes    = _char_codes(key_str)
    total    = sum(codes)
    product  = total * GOLDEN_RATIO_A
    fraction = product % 1
    # size * fraction can round up to size for fractions within an ulp of 1
    index    = min(math.floor(table_size * fraction), table_size - 1)
    return HashResult(
        index=index,
        hash_value=product,
        derivation=(
            f'Key: "{key_str}"',
            f"Character codes: [{', '.join(map(str, codes))}]",
            f"Sum: {total}",
            f"Product: {total} × {GOLDEN_RATIO_A:.10f} = {product:.10f}",
            f"Fractional part: {fraction:.10f}",
            f"Hash: floor({table_size} × {fraction:.6f}) = {index}",
        ),
    )


def djb2_hash(key: Any, table_size: int) -> HashResult:
    """
    hash = (hash << 5) + hash + c, starting from 5381.

    The shift operates on the 32-bit wrapped running value while the
    addition does not.  The index is the absolute value of the running
    hash modulo table_size.
    """
    require_positive_int(table_size, "table_size")
    key_str = str(key)
    running = DJB2_SEED
    lines   = [f"Initial hash: {running}"]
    for ch in key_str:
        code    = ord(ch)
        old     = running
        running = _to_int32(_to_int32(old) << 5) + old + code
        lines.append(f"'{ch}' ({code}): {old} << 5 + {old} + {code} = {running}")
    index = abs(running) % table_size
    lines.append(f"Final: |{running}| mod {table_size} = {index}")
    return HashResult(index=index, derivation=tuple(lines), hash_value=running)


def polynomial_hash(key: Any, table_size: int) -> HashResult:
    require_positive_int(table_size, "table_size")
    key_str = str(key)
    running, power = 0, 1
    lines = [f'Key: "{key_str}"', "Polynomial rolling hash:"]
    for ch in key_str:
        code    = ord(ch)
        running = (running + code * power) % POLY_MODULUS
        lines.append(f"+ ({code} * {power})")
        power   = (power * POLY_BASE) % POLY_MODULUS
    index = running % table_size
    lines.append(f"Hash: {running}")
    lines.append(f"Index: {running} % {table_size} = {index}")
    return HashResult(index=index, derivation=tuple(lines), hash_value=running)


def builtin_hash(key: Any, table_size: int) -> HashResult:
    require_positive_int(table_size, "table_size")
    key_str = str(key)
    running = 0
    for ch in key_str:
        running = _to_int32(_to_int32(running << 5) - running + ord(ch))
    value = abs(running)
    index = value % table_size
    return HashResult(
        index=index,
        hash_value=value,
        derivation=(
            f'Key: "{key_str}"',
            f"Built-in hash: {value}",
            f"Index: {value} % {table_size} = {index}",
        ),
    )


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
HASH_FUNCTIONS: Dict[str, Callable[[Any, int], HashResult]] = {
    "modulo":         modulo_hash,
    "multiplication": multiplication_hash,
    "djb2":           djb2_hash,
    "polynomial":     polynomial_hash,
    "builtin":        builtin_hash,
}

HASH_FUNCTION_ALIASES: Dict[str, str] = {
    "sum":            "modulo",
    "multiplicative": "multiplication",
}


def resolve_hash_name(name: Optional[str]) -> str:
    """Canonical registry name for `name`, or the default when unknown."""
    if not isinstance(name, str):
        return DEFAULT_HASH_FUNCTION
    name = HASH_FUNCTION_ALIASES.get(name, name)
    return name if name in HASH_FUNCTIONS else DEFAULT_HASH_FUNCTION


def is_known_hash_function(name: Optional[str]) -> bool:
    return isinstance(name, str) and (name in HASH_FUNCTIONS or name in HASH_FUNCTION_ALIASES)


def get_hash_function(name: Optional[str]) -> Callable[[Any, int], HashResult]:
    return HASH_FUNCTIONS[resolve_hash_name(name)]


def compute_hash(key: Any, table_size: int, name: Optional[str] = DEFAULT_HASH_FUNCTION) -> HashResult:
    return get_hash_function(name)(key, table_size)


# ---------------------------------------------------------------------------
# Comparison: how evenly does each function spread the same keys?
# ---------------------------------------------------------------------------
def compare_hash_functions(
    keys: Iterable[Any],
    table_size: int,
    names: Optional[List[str]] = None,
) -> Dict[str, Dict[str, Any]]:
    """
    Hash every key with every function and summarise the spread.

    Returns {function_name: {"assignments": [(key, index), …],
                             "buckets": [count per index],
                             "collisions": int,
                             "max_bucket": int}}
    """
    require_positive_int(table_size, "table_size")
    keys   = [str(k) for k in keys]
    report: Dict[str, Dict[str, Any]] = {}
    for name in (names or list(HASH_FUNCTIONS)):
        canonical   = resolve_hash_name(name)
        fn          = HASH_FUNCTIONS[canonical]
        assignments = [(k, fn(k, table_size).index) for k in keys]
        counts      = Counter(idx for _, idx in assignments)
        buckets     = [counts.get(i, 0) for i in range(table_size)]
        report[canonical] = {
            "assignments": assignments,
            "buckets":     buckets,
            "collisions":  sum(c - 1 for c in buckets if c > 1),
            "max_bucket":  max(buckets) if buckets else 0,
        }
    return report
