"""Tests for report module.

Test Files and Coverage:
========================

| Test File               | Test Classes             | Tested Constructs                | Tested Functionalities              |
|-------------------------|--------------------------|----------------------------------|-------------------------------------|
| test_conflict.py        | ReportTest               | report(), ConflictRecord         | Reportability per policy, ordering  |
| test_render.py          | RenderTest               | render_lines(), render_summary() | Text layout                         |
| test_report_store.py    | ReportFileTest           | ReportFile, ReportManifest       | Save/load, format errors            |
"""
