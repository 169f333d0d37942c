"""envleak - Privacy and secret leak checks for source trees.

Scans a project for local usernames, hostnames and IP addresses that leaked
into committed text, and optionally for secret-like tokens and leak-prone files.
It only reads files. It never modifies or quarantines anything.
"""

__version__ = "0.3.0"
__author__ = "envleak contributors"
