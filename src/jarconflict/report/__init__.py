"""Report module for conflict selection and presentation.

This package contains:
- conflict: ConflictRecord and report(), which select the conflicting names from an index
- render: Human-readable rendering of conflict records
- store: ReportManifest and ReportFile for saving and loading reports
"""
