"""Test environments managed by cch_fixture."""
