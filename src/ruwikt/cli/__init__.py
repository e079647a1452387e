"""
Command-line interface entry points for ruwikt.

Entry points:
- ruwikt: Look up a headword and print its entry
"""
