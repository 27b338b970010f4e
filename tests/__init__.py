"""
boilerhatch test suite
======================

Test Modules
------------
- test_models.py: Tests for Pydantic request/template models
- test_config.py: Tests for environment and TOML settings
- test_locator.py: Tests for the GitHub repository lookup
- test_fetcher.py: Tests for streaming tarball extraction
- test_manifest.py: Tests for package.json rewriting
- test_package_manager.py: Tests for yarn/npm detection
- test_generator.py: Tests for the creation pipeline
- test_cli.py: Tests for the command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_fetcher.py

    # Run specific test class
    pytest tests/test_generator.py::TestCreateProject

No test touches the network or a real package manager: HTTP goes through
``httpx.MockTransport`` and probes through ``unittest.mock.patch``.
"""
