"""Generate Makefiles for C projects and libraries, with header dependencies from the sources."""

__version__ = "0.1.0"