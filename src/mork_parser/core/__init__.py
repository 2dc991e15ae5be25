"""
Shared plumbing: diagnostics, pipeline context, exceptions and the
pipeline runner used by the ``mork`` command.
"""
