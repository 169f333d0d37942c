"""Secrets module - Detect secrets, leak-prone files and scoped PII."""

from envleak.secrets.patterns import SECRET_PATTERNS, is_leak_file, is_pii_scoped
from envleak.secrets.scanner import ExtraFinding, ExtraScanner

__all__ = ["SECRET_PATTERNS", "is_leak_file", "is_pii_scoped", "ExtraFinding", "ExtraScanner"]
