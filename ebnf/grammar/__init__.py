# ebnf/grammar/__init__.py
"""Grammar front end: AST, errors, parser and file loader."""
