"""
Test suites package.

Keeps `testsuites` importable so the unit suite can share its Playwright
fakes and the UI suites can import their page objects:
  - testsuites.unit: harness unit tests, no browser needed
  - testsuites.ui_testing: browser-backed suites
"""
