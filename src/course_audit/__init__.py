"""Course catalog integrity auditing."""
