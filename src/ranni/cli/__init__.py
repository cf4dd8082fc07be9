"""
Command-Line Interface
======================

Entry point for the ``ranni`` console script:

- ``ranni compile`` - parse a program and print its syntax tree
- ``ranni lsp`` - run the language server on stdio
"""
