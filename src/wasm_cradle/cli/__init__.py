"""
wasm-cradle Command-Line Interface
==================================

This package provides the command-line tool for the translator:

- **cradlec**: translates a source program into stack-machine text

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["cradlec"]
