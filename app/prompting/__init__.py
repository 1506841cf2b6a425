"""Prompting package.

This package contains the deterministic system-prompt composer for ministry
tasks. It does not perform provider selection, validation, or model invocation.
"""
