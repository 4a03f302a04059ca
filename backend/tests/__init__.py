"""
Tests Package - Unit and Integration Tests

Test structure:
- tests/conftest.py - shared fixtures (in-memory SQLite, scripted cursors)
- tests/test_rows.py - projector, normalization and PEP 249 adapter
- tests/test_service.py - RowService query execution and retries
- tests/test_encoding.py, test_db.py, test_config.py, test_logging.py
"""
