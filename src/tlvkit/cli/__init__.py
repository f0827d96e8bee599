"""
tlvkit Command-Line Interface
=============================

This package provides the command-line tool for tlvkit:

- **tlvtool**: inspect, query and edit TLV files

The tool is a Click-based CLI application with built-in help and
consistent exit codes.
"""

__all__ = ["tlvtool"]
