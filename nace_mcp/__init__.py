"""
NACE Rev. 2.1 Classification Lookup — MCP Package
=================================================
Hexagonal (Ports & Adapters) architecture.

Layer map
─────────────────────────────────────────────────────
  config/       All tuneable settings (env / .env driven)
  domain/       Pure business objects (models, exceptions) — no I/O
  ports/        Abstract interfaces (Python Protocols)
  adapters/     Concrete implementations of each Port (JSON file source)
  services/     Index build, code resolution and the four query operations
  interfaces/   Delivery layer: MCP server, CLI
  data/         Bundled NACE Rev. 2.1 classification table
  tests/        Test suite: unit / e2e

The classification index is built once from the source rows and never
mutated afterwards; every query is a pure read against that snapshot.
"""
__version__ = "1.0.0"
