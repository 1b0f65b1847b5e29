"""Tests for scan module.

Test Files and Coverage:
========================

| Test File               | Test Classes             | Tested Constructs             | Tested Functionalities                   |
|-------------------------|--------------------------|-------------------------------|------------------------------------------|
| test_policy.py          | DistinctnessPolicyTest   | DistinctnessPolicy            | Parsing, identities, bucket labels       |
| test_entry_filter.py    | EntryFilterTest          | EntryFilter                   | Suffix, META-INF, exclusion prefixes     |
| test_conflict_index.py  | ConflictIndexTest        | ConflictIndex                 | Ordering, no dedup, merge                |
| test_collector.py       | CollectorTest            | collect(), collect_parallel() | Archive order, failures, parallel parity |
"""
