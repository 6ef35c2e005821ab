"""Search engine layer — Drivers behind the model-search contract.

Built-in engines:
  - sonic: Sonic (lightweight, schema-less identifier index)

Implement ``SearchEngine`` to plug in another backend.
"""
