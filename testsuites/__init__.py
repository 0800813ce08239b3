"""
QADemo test suites.

Kept importable so that test modules, fixtures and ``run_tests.py`` share
absolute imports (``testsuites.ui_testing.pages`` ...).

  - ``test_data``: accounts, checkout records, routes, messages
  - ``ui_testing``: Page Object Model browser suite (Playwright)
  - ``api_testing``: REST API suite (httpx)
  - ``unit``: offline tests of the framework code
"""
