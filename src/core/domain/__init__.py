"""Domain models and errors.

Pure data structures (Pydantic v2) and the resolution error hierarchy. The
domain knows nothing about HTTP clients, subprocesses or the CLI.
"""
