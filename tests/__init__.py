"""Test suite for linuxblox."""
