"""Test suite for daylane.

Test Structure:
- unit/: Unit tests for individual components
  - layout/: Registry, grouping, lanes, geometry, rendering and engine
  - config/: Config models and loader
  - utils/: Logging and JSON helpers
  - cli/: Command-line entry points
- integration/: Full layout passes over realistic day schedules
- conftest.py: Shared fixtures and test configuration
"""
