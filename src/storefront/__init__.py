"""Aura storefront backend: order lifecycle and identity reconciliation."""
