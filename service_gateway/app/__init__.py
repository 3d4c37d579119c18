"""
Token Gateway Service package.

The gateway exposes read access to ARC-200 token contracts and simulated
transfers over HTTP.

Structure:
- app.main: FastAPI app, routes, and service wiring.
- app.adapters: Ledger client construction and the ARC-200 contract binding.
- app.domain: Value conversion, normalization and asset summaries.
"""
