"""Diagnosis records API."""
