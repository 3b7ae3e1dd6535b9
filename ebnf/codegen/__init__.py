# ebnf/codegen/__init__.py
"""Emitters turning a parsed Grammar into interchange formats."""
