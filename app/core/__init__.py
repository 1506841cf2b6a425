"""Core contracts package.

Architectural role:
    Holds the data types and error taxonomy shared by the API/CLI entrypoints and
    the LLM dispatch layer.

Composition:
    - `contracts`: provider ids, generation request and result shapes.
    - `errors`: client/configuration/upstream/internal failure kinds.

Determinism and side effects:
    Package import is side-effect free.
"""
