"""Entry collection for conflict detection.

This package contains:
- policy: DistinctnessPolicy, which turns entry metadata into a content identity
- entry_filter: EntryFilter, which selects the class entries that are compared
- conflict_index: ConflictIndex, the name -> identity -> archives index
- collector: collect() and collect_parallel(), which build the index from archives
"""
