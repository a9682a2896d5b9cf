"""
hashing.py - Hash Table Insertion & Lookup Traces
==================================================
Two collision strategies layered on the hash function library:

  • Chaining        – each bucket is a list; collisions append.
  • Linear probing  – each slot holds at most one Entry; collisions walk
                      forward (mod table size) to the next free slot.

Yields a HashStep at:
  1. Table initialisation
  2. Hash computation (with the derivation lines) and its result
  3. Collision detected / each probe past an occupied slot
  4. Insertion
  5. Table full (probing only: the key is skipped, not retried)
  6. Completion, with the load factor

`hash_search_steps` replays a lookup over a table one of the insertion
traces already built.

Keys are compared by their string form, so inserting the same key twice
into a probing table overwrites its slot instead of probing past it.
"""

import logging
from typing import Any, Generator, List, Mapping, Optional, Sequence

from algorithms.errors import InvalidArgument, require_positive_int
from algorithms.hash_functions import (
    DEFAULT_HASH_FUNCTION,
    get_hash_function,
    is_known_hash_function,
    resolve_hash_name,
)
from algorithms.step import Entry, HashComputation, HashKind, HashStep, StepBuilder


logger = logging.getLogger(__name__)

DEFAULT_TABLE_SIZE = 10


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
CHAINING_PSEUDOCODE: List[str] = [
    "def insert_chaining(table, keys):",         # 0
    "    for key in keys:",                      # 1
    "        i ← hash(key) mod m",               # 2
    "        if table[i] is not empty:",         # 3
    "            collision → chain",             # 4
    "        table[i].append((key, value))",     # 5
    "    load ← n / m",                          # 6
]

PROBING_PSEUDOCODE: List[str] = [
    "def insert_probing(table, keys):",          # 0
    "    for key in keys:",                      # 1
    "        i ← hash(key) mod m",               # 2
    "        while table[i] holds another key:", # 3
    "            i ← (i + 1) mod m",             # 4
    "            if probed m slots: table full", # 5
    "        table[i] ← (key, value)",           # 6
    "    load ← n / m",                          # 7
]

HASH_SEARCH_PSEUDOCODE: List[str] = [
    "def lookup(table, key):",                   # 0
    "    i ← hash(key) mod m",                   # 1
    "    chaining: scan table[i] for key",       # 2
    "    probing: walk i, i+1, … until key",     # 3
    "             or an empty slot",             # 4
    "    return value or NOT FOUND",             # 5
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _hash_name(hash_function: Optional[str]) -> str:
    if not is_known_hash_function(hash_function):
        logger.warning("Unknown hash function %r, falling back to %s", hash_function, DEFAULT_HASH_FUNCTION)
    return resolve_hash_name(hash_function)


def _load_factor(count: int, table_size: int) -> float:
    return count / table_size


# ---------------------------------------------------------------------------
# Chaining
# ---------------------------------------------------------------------------
def hash_with_chaining(
    keys: Sequence[Any],
    table_size: int = DEFAULT_TABLE_SIZE,
    hash_function: str = DEFAULT_HASH_FUNCTION,
) -> Generator[HashStep, None, None]:
    """
    Yields HashStep snapshots while inserting `keys` in order.

    Args:
        keys          : Values to insert; each is converted with str().
        table_size    : Number of buckets (positive integer).
        hash_function : Registry name; unknown names fall back to modulo.
    """
    require_positive_int(table_size, "table_size")
    name   = _hash_name(hash_function)
    hasher = get_hash_function(name)
    keys   = list(keys)
    table: List[List[Entry]] = [[] for _ in range(table_size)]
    sb     = StepBuilder(HashStep)

    sb.message     = f"Initialized hash table (size {table_size}) using {name} hash function"
    sb.highlight   = "Ready for insertions (collision handling: chaining)"
    sb.description = "Load factor starts at 0.00"
    yield sb.build(HashKind.INITIALIZE, table=table, load_factor=0.0)

    for key in keys:
        key_str = str(key)
        value   = f"value_{key_str}"
        hashed  = hasher(key_str, table_size)
        index   = hashed.index

        sb.message         = f'Computing hash for "{key_str}"'
        sb.highlight       = "Hash computation in progress"
        sb.description     = f"Converting characters to numeric value and applying {name}"
        sb.pseudocode_line = 2
        yield sb.build(HashKind.HASH_COMPUTATION, table=table, key=key_str, hash_step=HashComputation(
            key=key_str, hash_value=hashed.hash_value, function=name, derivation=hashed.derivation,
        ))

        sb.message         = f'Hash result: "{key_str}" → bucket {index}'
        sb.highlight       = f'{name}("{key_str}") = {index}'
        sb.description     = "Index chosen by hash function"
        sb.pseudocode_line = 2
        yield sb.build(HashKind.HASH_RESULT, table=table, key=key_str, hash_step=HashComputation(
            key=key_str, hash_value=hashed.hash_value, index=index, function=name,
        ))

        collision = len(table[index]) > 0
        if collision:
            sb.message         = f"Collision detected at bucket {index}"
            sb.highlight       = f"Bucket size before insert: {len(table[index])}"
            sb.description     = "Chaining: appending to existing list"
            sb.pseudocode_line = 4
            sb.overlay["bucket_length"] = len(table[index])
            yield sb.build(HashKind.COLLISION_DETECTED, table=table, key=key_str, hash_step=HashComputation(
                key=key_str, hash_value=hashed.hash_value, index=index, function=name, collision=True,
            ))

        table[index].append(Entry(key_str, value))
        sb.message         = f'Inserted "{key_str}" -> "{value}" at bucket {index}'
        sb.highlight       = (
            f"Collision resolved via chaining (length now {len(table[index])})" if collision
            else "Inserted without collision"
        )
        sb.description     = "Appended to existing chain" if collision else "First element in bucket"
        sb.pseudocode_line = 5
        sb.overlay["bucket_length"] = len(table[index])
        yield sb.build(HashKind.INSERT_CHAINING, table=table, inserted=index, key=key_str, value=value,
                       hash_step=HashComputation(
                           key=key_str, hash_value=hashed.hash_value, index=index, function=name,
                           collision=collision,
                       ))

    load = _load_factor(len(keys), table_size)
    sb.message         = "Hash table construction completed"
    sb.highlight       = f"{len(keys)} keys inserted"
    sb.description     = f"Final load factor: {load:.2f}"
    sb.pseudocode_line = 6
    yield sb.build(HashKind.COMPLETE, is_final=True, table=table, load_factor=load)


# ---------------------------------------------------------------------------
# Linear probing
# ---------------------------------------------------------------------------
def hash_with_linear_probing(
    keys: Sequence[Any],
    table_size: int = DEFAULT_TABLE_SIZE,
    hash_function: str = DEFAULT_HASH_FUNCTION,
) -> Generator[HashStep, None, None]:
    """
    Yields HashStep snapshots while inserting `keys` with open addressing.
    A key that finds no free slot after `table_size` probes gets a
    `table-full` step and is dropped; the remaining keys still go in.
    """
    require_positive_int(table_size, "table_size")
    name   = _hash_name(hash_function)
    hasher = get_hash_function(name)
    keys   = list(keys)
    table: List[Optional[Entry]] = [None] * table_size
    placed = 0
    sb     = StepBuilder(HashStep)

    sb.message     = f"Initialized hash table (size {table_size}) using open addressing (linear probing)"
    sb.highlight   = "Each slot holds one key-value pair"
    sb.description = "Collisions resolved by probing to next slot"
    yield sb.build(HashKind.INITIALIZE, table=table, load_factor=0.0)

    for key in keys:
        key_str = str(key)
        value   = f"value_{key_str}"
        hashed  = hasher(key_str, table_size)
        start   = hashed.index
        current = start
        probes  = 0

        sb.message         = f'Computing hash for "{key_str}"'
        sb.highlight       = "Hash computation in progress"
        sb.description     = f"Applying {name} to derive starting index"
        sb.pseudocode_line = 2
        yield sb.build(HashKind.HASH_COMPUTATION, table=table, key=key_str, hash_step=HashComputation(
            key=key_str, hash_value=hashed.hash_value, function=name, derivation=hashed.derivation,
        ))

        sb.message         = f'Hash result: "{key_str}" → starting index {start}'
        sb.highlight       = f'{name}("{key_str}") = {start}'
        sb.description     = "Initial index before probing"
        sb.pseudocode_line = 2
        yield sb.build(HashKind.HASH_RESULT, table=table, key=key_str, hash_step=HashComputation(
            key=key_str, hash_value=hashed.hash_value, index=start, initial_index=start, function=name,
        ))

        full = False
        while table[current] is not None and table[current].key != key_str:
            occupant  = table[current]
            next_slot = (current + 1) % table_size
            sb.message         = f"Collision at bucket {current}"
            sb.highlight       = f'Occupied by "{occupant.key}" -> probing to {next_slot}'
            sb.description     = "Bucket occupied, continue linear probing"
            sb.pseudocode_line = 4
            yield sb.build(HashKind.COLLISION_PROBE, table=table, key=key_str, hash_step=HashComputation(
                key=key_str, hash_value=hashed.hash_value, index=current, initial_index=start,
                current_probe=current, probe_count=probes + 1, occupant=occupant, function=name,
                collision=True,
            ))

            current = next_slot
            probes += 1
            if probes >= table_size:
                sb.message         = f'Hash table is full! Cannot insert "{key_str}"'
                sb.highlight       = f"All {table_size} slots are already occupied"
                sb.description     = f'Open addressing failed - "{key_str}" is skipped (the table is not resized)'
                sb.pseudocode_line = 5
                yield sb.build(HashKind.TABLE_FULL, table=table, key=key_str, probes=probes,
                               hash_step=HashComputation(
                                   key=key_str, hash_value=hashed.hash_value, initial_index=start,
                                   probe_count=probes, function=name,
                               ))
                full = True
                break

        if full:
            continue

        if table[current] is None:
            placed += 1
        table[current] = Entry(key_str, value)
        sb.message         = f'Inserted "{key_str}" -> "{value}" at bucket {current}'
        sb.highlight       = (
            f"Collision resolved after {probes} probe(s)" if probes
            else "Inserted without collision"
        )
        sb.description     = (
            f"Found empty bucket after {probes} probe(s)" if probes
            else "First occupant of bucket"
        )
        sb.pseudocode_line = 6
        yield sb.build(HashKind.INSERT_PROBING, table=table, inserted=current, key=key_str, value=value,
                       probes=probes, hash_step=HashComputation(
                           key=key_str, hash_value=hashed.hash_value, index=current, initial_index=start,
                           probe_count=probes, function=name, collision=probes > 0,
                       ))

    load = _load_factor(len(keys), table_size)
    sb.message         = "Hash table construction completed (linear probing)"
    sb.highlight       = f"{len(keys)} keys inserted"
    sb.description     = f"Final load factor: {load:.2f}"
    sb.pseudocode_line = 7
    sb.overlay["occupied_slots"] = placed
    yield sb.build(HashKind.COMPLETE, is_final=True, table=table, load_factor=load)


# ---------------------------------------------------------------------------
# Lookup replay
# ---------------------------------------------------------------------------
def _as_entry(item: Any) -> Any:
    # to_dict() and the JSON API hand entries back as {"key", "value"} dicts
    if isinstance(item, Mapping):
        return Entry(**item)
    return item


def _copy_table(table: Sequence[Any]) -> List[Any]:
    return [
        [_as_entry(item) for item in slot] if isinstance(slot, (list, tuple)) else _as_entry(slot)
        for slot in table
    ]


def _is_chaining(table: Sequence[Any]) -> bool:
    return all(isinstance(slot, (list, tuple)) for slot in table)


def hash_search(
    table: Sequence[Any],
    search_key: Any,
    hash_function: str = DEFAULT_HASH_FUNCTION,
) -> Generator[HashStep, None, None]:
    """
    Replay a lookup of `search_key` in an already-built table.

    `table` is either a chaining table (every slot a list of Entry) or a
    probing table (every slot an Entry or None); the table size is its
    length and must be positive.  Entries may also be given in their
    serialised `{"key": ..., "value": ...}` form.
    """
    table = _copy_table(table)
    size  = len(table)
    if size == 0:
        raise InvalidArgument("cannot search an empty table")
    name    = _hash_name(hash_function)
    key_str = str(search_key)
    index   = get_hash_function(name)(key_str, size).index
    sb      = StepBuilder(HashStep)

    sb.message         = f'Searching for "{key_str}" (start index {index})'
    sb.highlight       = "Begin search"
    sb.description     = f"{name} hashes the key to index {index}; the lookup starts there"
    sb.pseudocode_line = 1
    yield sb.build(HashKind.SEARCH_START, table=table, key=key_str,
                   hash_step=HashComputation(key=key_str, index=index, function=name))

    if _is_chaining(table):
        bucket = table[index]
        sb.message         = f"Scanning bucket {index}"
        sb.highlight       = f"{len(bucket)} entr{'y' if len(bucket) == 1 else 'ies'}"
        sb.description     = "Chaining keeps every key that hashed here in this one list"
        sb.pseudocode_line = 2
        sb.overlay["bucket_index"] = index
        yield sb.build(HashKind.BUCKET_SCAN, table=table, key=key_str)

        for item, entry in enumerate(bucket):
            match = entry.key == key_str
            sb.message         = f'Compare "{entry.key}" to "{key_str}"'
            sb.highlight       = "Match" if match else "No match"
            sb.description     = (
                f"Entry {item} of bucket {index} holds the key" if match
                else f"Entry {item} of bucket {index} holds a different key"
            )
            sb.pseudocode_line = 2
            sb.overlay         = {"bucket_index": index, "item_index": item, "comparing": entry.key}
            yield sb.build(HashKind.COMPARE, table=table, key=key_str)

            if match:
                sb.message         = f'Found "{key_str}" -> "{entry.value}"'
                sb.highlight       = "Search successful"
                sb.description     = f"Key found at position {item} of bucket {index}"
                sb.pseudocode_line = 5
                sb.overlay         = {"bucket_index": index, "item_index": item}
                yield sb.build(HashKind.FOUND, is_final=True, table=table, key=key_str,
                               found_index=index, result=entry.value)
                return

        sb.message         = f'Key "{key_str}" not found in bucket {index}'
        sb.highlight       = "Search unsuccessful"
        sb.description     = f"Every entry of bucket {index} was compared without a match"
        sb.pseudocode_line = 5
        yield sb.build(HashKind.NOT_FOUND, is_final=True, table=table, key=key_str)
        return

    current, probes = index, 0
    while table[current] is not None and probes < size:
        entry = table[current]
        match = entry.key == key_str
        sb.message         = f"Probe {current}: {entry.key}"
        sb.highlight       = "Match" if match else "Check"
        sb.description     = (
            f"Slot {current} holds the key" if match
            else f'Slot {current} holds "{entry.key}", keep walking'
        )
        sb.pseudocode_line = 3
        sb.overlay["slot"] = current
        yield sb.build(HashKind.PROBE, table=table, key=entry.key)

        if match:
            sb.message         = f'Found "{key_str}" -> "{entry.value}" at index {current}'
            sb.highlight       = f"Search successful after {probes} probe(s)"
            sb.description     = f"Lookup walked {probes} slot(s) past the home index {index}"
            sb.pseudocode_line = 5
            yield sb.build(HashKind.FOUND, is_final=True, table=table, key=key_str,
                           found_index=current, probes=probes, result=entry.value)
            return
        current = (current + 1) % size
        probes += 1

    sb.message         = f'Key "{key_str}" not found after {probes} probe(s)'
    sb.highlight       = "Search unsuccessful"
    sb.description     = (
        f"Walked the whole table ({size} slots) without a match" if probes >= size
        else f"Reached empty slot {current}, so the key was never inserted"
    )
    sb.pseudocode_line = 4
    yield sb.build(HashKind.NOT_FOUND, is_final=True, table=table, key=key_str, probes=probes)


# ---------------------------------------------------------------------------
# Materialised traces
# ---------------------------------------------------------------------------
def hash_with_chaining_steps(
    keys: Sequence[Any],
    table_size: int = DEFAULT_TABLE_SIZE,
    hash_function: str = DEFAULT_HASH_FUNCTION,
) -> List[HashStep]:
    return list(hash_with_chaining(keys, table_size, hash_function))


def hash_with_linear_probing_steps(
    keys: Sequence[Any],
    table_size: int = DEFAULT_TABLE_SIZE,
    hash_function: str = DEFAULT_HASH_FUNCTION,
) -> List[HashStep]:
    return list(hash_with_linear_probing(keys, table_size, hash_function))


def hash_search_steps(
    table: Sequence[Any],
    search_key: Any,
    hash_function: str = DEFAULT_HASH_FUNCTION,
) -> List[HashStep]:
    return list(hash_search(table, search_key, hash_function))
