"""
RepoMedic — Repository health auditor.

Detects ecosystems and CI providers, scans text content for leaked
credentials and grades the repository with a bounded health score.
"""

__version__ = "0.3.0"

from repomedic.audit import AuditEngine, ScanResult

__all__ = ["AuditEngine", "ScanResult", "__version__"]
