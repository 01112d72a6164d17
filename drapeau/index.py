"""
Drapeau subcommand index: a chained hash table from subcommand name to slot.

Layout
- a power-of-two list of primary slots; each slot is an Entry that is either
  unused (name is None) or the head of a singly linked chain.
- collisions append a new Entry at the end of the bucket's chain; lookups walk
  the chain comparing full names.

Hashing
- 32-bit FNV-1a over the UTF-8 bytes of the name, followed by the mixing step
  hash ^ ((hash >> 10) << 10), which leaves the low ten bits.
- the bucket is always reduced into range with hash & (capacity - 1).

Growth
- once the table holds more than three quarters of its capacity in names, it
  doubles and re-inserts every name in slot order. The mixed hash spans ten
  bits, so capacities stop at MAX_CAPACITY.
"""
import logging

logger = logging.getLogger(__name__)

FNV_OFFSET = 0x811C9DC5
FNV_PRIME = 16777619

MAX_CAPACITY = 1 << 10


def fnv1a(name, /):
    """
    hash a subcommand name (FNV-1a, 32 bits, then the ten-bit mixing step).
    """
    if not isinstance(name, str):
        raise TypeError("fnv1a() argument must be a string")
    hash = FNV_OFFSET
    for byte in name.encode("utf-8"):
        hash = ((byte ^ hash) * FNV_PRIME) & 0xFFFFFFFF
    return hash ^ ((hash >> 10) << 10)


class Entry:
    """one (name, slot) node; name is None for an unused primary slot."""
    __slots__ = ("name", "slot", "next")

    def __init__(self, name=None, slot=None, next=None):
        self.name = name
        self.slot = slot
        self.next = next

    def __repr__(self):
        return f"Entry(name={self.name!r}, slot={self.slot!r})"


class SubcommandIndex:
    """
    name → registry slot lookup for subcommands.

    usage
        >>> index = SubcommandIndex(64)
        >>> index.insert("install", 0)
        >>> index.lookup("install")
        0
        >>> index.lookup("remove") is None
        True
    """

    def __init__(self, capacity=64, /):
        if not isinstance(capacity, int) or isinstance(capacity, bool):
            raise TypeError("index capacity must be an integer")
        if capacity < 1 or capacity & (capacity - 1):
            raise ValueError("index capacity must be a positive power of two")
        if capacity > MAX_CAPACITY:
            raise ValueError(f"index capacity cannot exceed {MAX_CAPACITY}")
        self._buckets = [Entry() for _ in range(capacity)]
        self._size = 0

    @property
    def capacity(self):
        return len(self._buckets)

    def __len__(self):
        return self._size

    def __contains__(self, name):
        return self.lookup(name) is not None

    def __iter__(self):
        """yield (name, slot) pairs, bucket by bucket, chain order within a bucket."""
        for entry in self._buckets:
            while entry is not None and entry.name is not None:
                yield entry.name, entry.slot
                entry = entry.next

    def _bucket(self, name):
        return self._buckets[fnv1a(name) & (len(self._buckets) - 1)]

    def insert(self, name, slot, /):
        """
        register name at the given slot.

        raises
        - ValueError when the name is already registered.
        """
        entry = self._bucket(name)
        if entry.name is None:
            entry.name, entry.slot = name, slot
        else:
            while True:
                if entry.name == name:
                    raise ValueError(f"subcommand name {name!r} is already indexed")
                if entry.next is None:
                    break
                entry = entry.next
            entry.next = Entry(name, slot)

        self._size += 1
        if self._size * 4 > self.capacity * 3 and self.capacity < MAX_CAPACITY:
            self._grow()

    def lookup(self, name, /):
        """return the slot registered for name, or None when absent."""
        entry = self._bucket(name)
        if entry.name is None:
            return None
        while entry is not None and entry.name != name:
            entry = entry.next
        return None if entry is None else entry.slot

    def chain(self, name, /):
        """return the names sharing name's bucket, head first (diagnostics)."""
        entry, names = self._bucket(name), []
        while entry is not None and entry.name is not None:
            names.append(entry.name)
            entry = entry.next
        return names

    def _grow(self):
        entries = sorted(self, key=lambda pair: pair[1])
        capacity = self.capacity * 2
        logger.debug("growing subcommand index from %d to %d buckets (%d names)", self.capacity, capacity, len(entries))
        self._buckets = [Entry() for _ in range(capacity)]
        self._size = 0
        for name, slot in entries:
            self.insert(name, slot)

    def clear(self):
        """
        release every chain node and empty every primary slot.

        returns the number of chain nodes released (primary slots are not
        counted, they belong to the table itself).
        """
        released = 0
        for entry in self._buckets:
            node, entry.next = entry.next, None
            while node is not None:
                following = node.next
                node.next = None
                node = following
                released += 1
            entry.name = entry.slot = None
        self._size = 0
        logger.debug("released %d subcommand index chain nodes", released)
        return released


__all__ = (
    "fnv1a",
    "Entry",
    "SubcommandIndex",
    "MAX_CAPACITY",
)
