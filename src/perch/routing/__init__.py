"""Routing — compiled exact-match route table.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes.
"""
