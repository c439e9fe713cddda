"""Adapters translating host payloads into the domain model."""
