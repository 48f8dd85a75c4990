from array import array
from typing import Dict, List

class DisjointSet:
    """
    Disjoint-set forest over cell indices, used by Kruskal's generator.

    Every item stores its set id directly, so find() is O(1). A union
    reassigns each member of the absorbed set to the surviving id. The
    larger set survives; on a tie the set of the first argument survives,
    which keeps merges deterministic for a fixed sequence of draws.
    """
    def __init__(self, size: int):
        self.set_ids = array('i', range(size))
        self.members: Dict[int, List[int]] = {i: [i] for i in range(size)}
        self.merges = 0

    def find(self, item: int) -> int:
        return self.set_ids[item]

    def connected(self, a: int, b: int) -> bool:
        return self.set_ids[a] == self.set_ids[b]

    def union(self, a: int, b: int) -> bool:
        """Merges the sets holding a and b. Returns False if they were already one set."""
        keep, absorb = self.set_ids[a], self.set_ids[b]
        if keep == absorb:
            return False

        if len(self.members[absorb]) > len(self.members[keep]):
            keep, absorb = absorb, keep

        moved = self.members.pop(absorb)
        for item in moved:
            self.set_ids[item] = keep
        self.members[keep].extend(moved)

        self.merges += 1
        return True

    def set_count(self) -> int:
        return len(self.members)

    def members_of(self, item: int) -> List[int]:
        return list(self.members[self.set_ids[item]])
