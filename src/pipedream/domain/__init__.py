"""Core decision engine: attribute resolution, change detection and pipeline predicates.

Nothing in this package performs I/O. Rule code reads an ``InvocationRecord``
built by the host and only ever writes to its shared variables.
"""
