from kitbook.conflict.detector import find_conflicts, first_conflict, overlaps

__all__ = ["overlaps", "find_conflicts", "first_conflict"]
