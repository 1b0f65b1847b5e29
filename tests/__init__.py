"""Tests for jarconflict.

Test Files and Coverage:
========================

| Test File                     | Test Classes              | Tested Constructs                        | Tested Functionalities                   |
|-------------------------------|---------------------------|------------------------------------------|------------------------------------------|
| test_archive.py               | ZipArchiveReaderTest      | ZipArchiveReader, ArchiveRef             | Entry metadata, open failures, labels    |
| test_settings.py              | ScanSettingsTest          | ScanSettings                             | TOML loading, typed accessors            |
| test_classpath.py             | ClasspathTest             | Classpath                                | Validation, scenarios, save              |
| test_cli.py                   | CliTest                   | jarconflict_main()                       | scan/describe, exit statuses             |
| scan/                         | see scan/__init__.py      |                                          |                                          |
| report/                       | see report/__init__.py    |                                          |                                          |
| utils/                        | ProcessorTest, Profiling  | Processor, profiling hooks               | Ordered mapping, pool shutdown           |
"""
