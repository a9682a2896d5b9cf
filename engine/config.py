"""
config.py — Run Configuration & Caller-Side Validation
=======================================================
The generators assume validated input.  This module is the layer that
validates it: it owns the defaults, the accepted ranges and the
forgiving fallbacks for the hash table settings.

    config = RunConfig("factorial", input_value=5)
    info   = validate(config)                # raises InvalidArgument
    steps  = info.fn(**generator_kwargs(config))

Hash settings never raise: an out-of-range table size or an unknown
function name is replaced by its default (`HashConfig.normalised`).
Everything else that is wrong raises InvalidArgument with a message
fit to show the user.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Union

from algorithms import AlgoInfo, get_algorithm
from algorithms.errors import InvalidArgument
from algorithms.hash_functions import DEFAULT_HASH_FUNCTION, resolve_hash_name


DEFAULT_DATA: List[int] = [64, 34, 25, 12, 22, 11, 90]
SAMPLE_KEYS:  List[str] = ["apple", "banana", "cat", "dog", "elephant", "fox"]

DEFAULT_TABLE_SIZE = 7
MIN_TABLE_SIZE     = 3
MAX_TABLE_SIZE     = 31

Number = Union[int, float]


# ---------------------------------------------------------------------------
# Config objects
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class HashConfig:
    table_size:    Any = DEFAULT_TABLE_SIZE
    hash_function: Any = DEFAULT_HASH_FUNCTION

    def normalised(self) -> "HashConfig":
        """Copy with a table size in [3, 31] and a known function name."""
        size = self.table_size
        if isinstance(size, bool) or not isinstance(size, int) or not MIN_TABLE_SIZE <= size <= MAX_TABLE_SIZE:
            size = DEFAULT_TABLE_SIZE
        return HashConfig(table_size=size, hash_function=resolve_hash_name(self.hash_function))

    def to_dict(self) -> Dict[str, Any]:
        return {"table_size": self.table_size, "hash_function": self.hash_function}


@dataclass(frozen=True)
class RunConfig:
    """
    Attributes:
        algo_key    : Registry key, e.g. "binary-search".
        data        : Working array for sorting / searching; numbers
                      turned into `key{n}` strings for hashing.
        input_value : Search target or recursion argument (int or
                      numeric string, as typed into a form).
        hash_config : Table size and hash function for hashing runs.
    """
    algo_key:    str
    data:        List[Number]   = field(default_factory=lambda: list(DEFAULT_DATA))
    input_value: Any            = None
    hash_config: HashConfig     = field(default_factory=HashConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algo_key":    self.algo_key,
            "data":        list(self.data),
            "input_value": self.input_value,
            "hash_config": self.hash_config.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "RunConfig":
        """Build from a JSON body; missing fields take their defaults."""
        if not isinstance(payload, dict):
            raise InvalidArgument("request body must be a JSON object")
        hash_payload = payload.get("hash_config") or {}
        if not isinstance(hash_payload, dict):
            raise InvalidArgument("hash_config must be an object")
        data = payload.get("data")
        return cls(
            algo_key=payload.get("algo_key", ""),
            data=list(DEFAULT_DATA) if data is None else data,
            input_value=payload.get("input_value"),
            hash_config=HashConfig(
                table_size=hash_payload.get("table_size", DEFAULT_TABLE_SIZE),
                hash_function=hash_payload.get("hash_function", DEFAULT_HASH_FUNCTION),
            ),
        )


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------
def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_int(value: Any) -> Optional[int]:
    """int, integral float or numeric string → int; anything else → None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _parse_target(value: Any) -> Number:
    if value is None or value == "":
        raise InvalidArgument("Please enter a search target")
    if _is_number(value):
        return value
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise InvalidArgument(f"Search target must be a number, got {value!r}") from None
        return int(number) if number.is_integer() else number
    raise InvalidArgument(f"Search target must be a number, got {value!r}")


def hash_keys(data: List[Any]) -> List[str]:
    """The keys a hashing run inserts: `key{n}` per value, or the sample words."""
    if not data:
        return list(SAMPLE_KEYS)
    return [f"key{value}" for value in data]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
def validate(config: RunConfig) -> AlgoInfo:
    """Check `config` against its algorithm's contract; return the AlgoInfo."""
    info = get_algorithm(config.algo_key)
    if info is None:
        raise InvalidArgument(f"Unknown algorithm: {config.algo_key!r}")

    if not isinstance(config.data, (list, tuple)):
        raise InvalidArgument("data must be a list of numbers")
    bad = [v for v in config.data if not _is_number(v)]
    if bad:
        raise InvalidArgument(f"data must contain only numbers, got {bad[0]!r}")

    if info.input_kind == "array+target":
        _parse_target(config.input_value)

    if info.input_kind == "integer":
        lo, hi = info.input_range
        n = _parse_int(config.input_value)
        if n is None or not lo <= n <= hi:
            raise InvalidArgument(f"Please enter a number between {lo} and {hi}")

    return info


def generator_kwargs(config: RunConfig, info: Optional[AlgoInfo] = None) -> Dict[str, Any]:
    """Keyword arguments for `info.fn`; call `validate` first."""
    info = info or validate(config)
    data = list(config.data)

    if info.input_kind == "array":
        return {"array": data}
    if info.input_kind == "array+target":
        array = sorted(data) if info.requires_sorted else data
        return {"array": array, "target": _parse_target(config.input_value)}
    if info.input_kind == "keys":
        hc = config.hash_config.normalised()
        return {"keys": hash_keys(data), "table_size": hc.table_size, "hash_function": hc.hash_function}
    return {"n": _parse_int(config.input_value)}


def with_defaults(config: RunConfig) -> RunConfig:
    """Copy of `config` with its hash settings normalised."""
    return replace(config, hash_config=config.hash_config.normalised())
