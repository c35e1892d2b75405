"""Test doubles and a small RESP server used by the test suite."""
